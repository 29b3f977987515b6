# treecopy/paths.py

from __future__ import annotations
import os
from typing import Optional

_DEFAULT_PATH_MAX = 4096


def _platform_path_max() -> int:
    """Return the platform path-length limit in bytes (including the terminator)."""
    try:
        return int(os.pathconf("/", "PC_PATH_MAX"))
    except (AttributeError, OSError, ValueError):
        return _DEFAULT_PATH_MAX


PATH_MAX = _platform_path_max()

_SEPARATORS = tuple(s for s in (os.sep, os.altsep) if s)


def fits(path: str, limit: int = PATH_MAX) -> bool:
    """True if the encoded path plus its terminator stays within the limit."""
    return len(os.fsencode(path)) < limit


def compose(parent: str, name: str, limit: int = PATH_MAX) -> Optional[str]:
    """Join a directory and a child name; None when the result is too long.

    Args:
        parent (str): Directory path.
        name (str): Child entry name as returned by a directory listing.
        limit (int): Path-length limit in bytes.

    Returns:
        Optional[str]: The composed path, or None if it would exceed the limit.
    """
    full = os.path.join(parent, name)
    return full if fits(full, limit) else None


def trim_trailing_separators(path: str) -> str:
    """Strip trailing separators, keeping a lone root separator intact."""
    while len(path) > 1 and path.endswith(_SEPARATORS):
        path = path[:-1]
    return path


def base_name(path: str) -> str:
    """Final path component, ignoring trailing separators (``/a/dir/`` -> ``dir``)."""
    return os.path.basename(trim_trailing_separators(path))


def directory_target(source: str, destination: str, limit: int = PATH_MAX) -> Optional[str]:
    """Top-level folder created for a directory source: ``destination/basename(source)``."""
    return compose(destination, base_name(source), limit)


def file_target(source: str, destination: str, limit: int = PATH_MAX) -> Optional[str]:
    """Target path for a single-file source.

    An existing directory destination receives the file under its own name;
    anything else is taken as the literal target file path.
    """
    if os.path.isdir(destination):
        return compose(destination, base_name(source), limit)
    return destination if fits(destination, limit) else None


def is_within(path: str, root: str) -> bool:
    """True if ``path`` is ``root`` itself or lies below it, after resolving links."""
    real_path = os.path.realpath(path)
    real_root = os.path.realpath(root)
    try:
        return os.path.commonpath([real_path, real_root]) == real_root
    except ValueError:
        # different drives
        return False
