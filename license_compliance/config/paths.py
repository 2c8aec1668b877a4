"""Path and glob helpers used while resolving app configurations."""

from __future__ import annotations

import glob
import os
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def expand_path(path: PathLike, base: PathLike) -> Path:
    """Resolve a path to an absolute, normalized path.

    Relative paths are anchored at ``base``; ``~`` is expanded. ``..``
    segments are collapsed without following symlinks.

    Args:
        path: Path to expand.
        base: Directory relative paths are anchored at.

    Returns:
        Absolute path.
    """
    expanded = os.path.expanduser(os.fspath(path))
    return Path(os.path.normpath(os.path.join(os.path.abspath(base), expanded)))


def is_directory(path: PathLike) -> bool:
    """Check whether a path names an existing directory."""
    return Path(path).is_dir()


def glob_directories(pattern: PathLike) -> list[Path]:
    """Expand a glob pattern, keeping only directories.

    ``**`` matches any number of nested directories. Results are sorted.

    Args:
        pattern: Absolute glob pattern.

    Returns:
        Matching directories, possibly empty.
    """
    matches = glob.glob(os.fspath(pattern), recursive=True)
    return [Path(match) for match in sorted(matches) if os.path.isdir(match)]
