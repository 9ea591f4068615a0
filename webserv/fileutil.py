"""Filesystem queries."""

from __future__ import annotations

import os


def is_directory(path: str | os.PathLike[str]) -> bool:
    """Return True if the path names a directory that can be listed."""
    return os.path.isdir(path) and os.access(path, os.R_OK)


def get_file_size(path: str | os.PathLike[str]) -> int:
    """Return the size of the file in bytes; raise OSError if it cannot be read."""
    return os.stat(path).st_size