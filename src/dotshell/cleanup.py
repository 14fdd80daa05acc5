"""Temp-file cleanup: editor backups, swap files and macOS metadata droppings."""

from __future__ import annotations

import fnmatch
import sys
from collections.abc import Callable, Iterable
from pathlib import Path

COMMON_PATTERNS = ("*~", "#*#", ".#*", "*.swp", "*.swo")

# Finder and AppleDouble files only show up on macOS
DARWIN_PATTERNS = (".DS_Store", "._*")


def cleanup_patterns(platform: str | None = None) -> tuple[str, ...]:
    """Return the basename globs to clean for the given platform (default: this one)."""
    platform = sys.platform if platform is None else platform
    if platform == "darwin":
        return COMMON_PATTERNS + DARWIN_PATTERNS
    return COMMON_PATTERNS


def is_temp_file(name: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch.fnmatchcase(name, pat) for pat in patterns)


def find_temp_files(
    root: Path,
    patterns: Iterable[str] | None = None,
    onerror: Callable[[OSError], None] | None = None,
) -> list[Path]:
    """Return every regular file under root whose name matches one of the patterns.

    Symlinked directories are not descended into. Result is sorted.
    A subdirectory that cannot be listed is skipped and handed to onerror;
    failing to list root itself raises.
    """
    root = Path(root)
    if not root.is_dir():
        raise NotADirectoryError(f"{root} is not a directory")

    patterns = tuple(patterns) if patterns is not None else cleanup_patterns()
    found = []
    stack = [root]
    while stack:
        current = stack.pop()
        try:
            children = list(current.iterdir())
        except OSError as exc:
            if current == root:
                raise
            if onerror is not None:
                onerror(exc)
            continue
        for child in children:
            if child.is_dir() and not child.is_symlink():
                stack.append(child)
            elif child.is_file() and not child.is_symlink():
                if is_temp_file(child.name, patterns):
                    found.append(child)
    return sorted(found)


def remove_files(
    files: Iterable[Path],
    onerror: Callable[[OSError], None] | None = None,
) -> int:
    """Delete the given files. Returns count of files removed.

    Files that cannot be deleted are handed to onerror and the rest still go.
    """
    removed = 0
    for path in files:
        try:
            path.unlink()
        except FileNotFoundError:
            # Already gone, e.g. an editor cleaned up its own swap file
            continue
        except OSError as exc:
            if onerror is not None:
                onerror(exc)
            continue
        removed += 1
    return removed
