"""Process environment used to anchor relative configuration paths.

The working directory and the version-control root are looked up through an
``Environment`` instance instead of ambient globals, so resolution can be run
against a fixed directory layout in tests.
"""

from __future__ import annotations

import functools
import logging
import os
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

logger = logging.getLogger(__name__)


def git_repository_root(cwd: Optional[Path] = None) -> Optional[Path]:
    """Find the root of the git repository containing a directory.

    Args:
        cwd: Directory to search from. Defaults to the current directory.

    Returns:
        Absolute path to the repository root, or None when git is not
        installed or the directory is not inside a repository.
    """
    git = shutil.which("git")
    if git is None:
        return None

    try:
        completed = subprocess.run(
            [git, "rev-parse", "--show-toplevel"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        logger.debug("git lookup failed in %s: %s", cwd, e)
        return None

    root = completed.stdout.strip()
    if completed.returncode != 0 or not root:
        return None
    return Path(root)


@dataclass(frozen=True)
class Environment:
    """Working directory and repository root lookup for path resolution.

    Attributes:
        cwd: Directory that relative paths fall back to.
        repository_root: Callable returning the version-control root,
            or None when there is none.
    """

    cwd: Path
    repository_root: Callable[[], Optional[Path]] = field(
        default=lambda: None, compare=False
    )

    @classmethod
    def current(cls) -> Environment:
        """Build an environment from the running process."""
        cwd = Path.cwd()
        lookup = functools.lru_cache(maxsize=None)(lambda: git_repository_root(cwd))
        return cls(cwd=cwd, repository_root=lookup)

    @classmethod
    def fixed(cls, cwd: Path, repository_root: Optional[Path] = None) -> Environment:
        """Build an environment with a static working directory and root."""
        return cls(cwd=Path(cwd), repository_root=lambda: repository_root)

    def root_for(self, options: Mapping[str, Any]) -> str:
        """Return the workspace root for a set of app options.

        Precedence is an explicit ``root`` option, then the repository
        root, then the working directory.
        """
        explicit = options.get("root")
        if explicit:
            return os.path.normpath(os.path.join(self.cwd, str(explicit)))
        repository_root = self.repository_root()
        if repository_root is not None:
            return str(repository_root)
        return str(self.cwd)
