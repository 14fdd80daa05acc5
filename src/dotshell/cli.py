"""CLI entry point: argparse setup and command dispatch."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotshell import __version__
from dotshell.cleanup import cleanup_patterns, find_temp_files, remove_files
from dotshell.resolver import ResolverError, get_resolver
from dotshell.utils import info, error, warn, confirm, emit_path


def _warn_os_error(exc: OSError) -> None:
    warn(f"{exc.filename}: {exc.strerror or exc}")


def cmd_resolve(args: argparse.Namespace) -> int:
    """Print the canonical form of each path, one per line."""
    try:
        resolved = get_resolver().resolve(args.paths)
    except ResolverError as exc:
        error(str(exc))
        return exc.returncode

    for path in resolved:
        emit_path(path)
    return 0


def cmd_clean(args: argparse.Namespace) -> int:
    """Find and delete temp files under a directory."""
    root = Path(args.directory).expanduser()
    try:
        files = find_temp_files(root, cleanup_patterns(), onerror=_warn_os_error)
    except (NotADirectoryError, FileNotFoundError):
        error(f"{root} is not a directory.")
        return 1
    except OSError as exc:
        error(f"cannot scan {root}: {exc.strerror or exc}")
        return 1

    if not files:
        info("No temp files found.")
        return 0

    for path in files:
        emit_path(f"  {path}")

    if args.dry_run:
        info(f"\n{len(files)} temp file(s) would be removed.")
        return 0

    if not args.yes and not confirm(f"Remove {len(files)} file(s)?"):
        info("Cancelled.")
        return 0

    failed: list[OSError] = []

    def on_remove_error(exc: OSError) -> None:
        failed.append(exc)
        _warn_os_error(exc)

    removed = remove_files(files, onerror=on_remove_error)
    info(f"Removed {removed} file(s).")
    if failed:
        error(f"could not remove {len(failed)} file(s).")
        return 1
    return 0


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotshell",
        description="Interactive-shell helpers: path canonicalization and temp-file cleanup",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # resolve
    p_resolve = subparsers.add_parser("resolve", help="Print canonical absolute paths")
    p_resolve.add_argument("paths", nargs="+", help="Paths to canonicalize")

    # clean
    p_clean = subparsers.add_parser("clean", help="Remove editor and OS temp files")
    p_clean.add_argument("directory", nargs="?", default=".", help="Directory to scan (default: .)")
    p_clean.add_argument("--dry-run", action="store_true", help="List matches without deleting")
    p_clean.add_argument("-y", "--yes", action="store_true", help="Delete without asking")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    dispatch = {
        "resolve": cmd_resolve,
        "clean": cmd_clean,
    }

    handler = dispatch.get(args.command)
    if handler:
        sys.exit(handler(args))
    else:
        parser.print_help()
        sys.exit(1)


def resolve_main(argv: list[str] | None = None) -> None:
    """Standalone `resolve <path> [path...]` command."""
    parser = argparse.ArgumentParser(
        prog="resolve",
        description="Print the canonical absolute form of each path",
    )
    parser.add_argument("paths", nargs="+", help="Paths to canonicalize")
    args = parser.parse_args(argv)
    sys.exit(cmd_resolve(args))
