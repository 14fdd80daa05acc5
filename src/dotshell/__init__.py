"""Interactive-shell helpers: path canonicalization and temp-file cleanup."""

__version__ = "0.1.0"
