"""Default configuration values for license-compliance."""

from __future__ import annotations

from typing import Any

from license_compliance.constants import DEFAULT_CACHE_PATH
from license_compliance.environment import Environment


def default_app_options(environment: Environment) -> dict[str, Any]:
    """Get the options of the app used when none are configured.

    The cache path is set explicitly so the app name is not appended to it.

    Args:
        environment: Environment supplying the working directory.

    Returns:
        App options scanning the working directory.
    """
    return {
        "source_path": str(environment.cwd),
        "cache_path": DEFAULT_CACHE_PATH,
    }
