"""Console output helpers and the y/n prompt."""

from __future__ import annotations

import os
import sys

CANCEL_WORDS = ("c", "cancel", "q", "quit")


def confirm(message: str, default_yes: bool = True) -> bool:
    """Ask a y/n question. Empty input takes the default; a cancel word means no."""
    suffix = "[Y/n]" if default_yes else "[y/N]"
    answer = input(f"{message} {suffix} ").strip().lower()
    if not answer:
        return default_yes
    if answer in CANCEL_WORDS:
        return False
    return answer in ("y", "yes")


def emit_path(path: str) -> None:
    """Write a filesystem path to stdout as raw bytes, one per line.

    Names that are not valid in the terminal encoding come through
    os.fsdecode as surrogate escapes; they go back out unchanged.
    """
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        print(path)
        return
    sys.stdout.flush()
    buffer.write(os.fsencode(path) + b"\n")
    buffer.flush()


def error(message: str) -> None:
    """Print an error message to stderr."""
    print(f"Error: {message}", file=sys.stderr)


def warn(message: str) -> None:
    """Print a non-fatal problem to stderr."""
    print(f"Warning: {message}", file=sys.stderr)


def info(message: str) -> None:
    print(message)
