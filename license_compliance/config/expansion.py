"""Glob expansion of app source paths.

A single app entry whose ``source_path`` is a glob (``packages/*``) fans out
into one app per matched directory.
"""
from __future__ import annotations

import logging
import posixpath
from typing import Any, Optional

from license_compliance.config.paths import expand_path, glob_directories, is_directory
from license_compliance.environment import Environment

logger = logging.getLogger(__name__)


def expand_app_source_path(
    app_config: dict[str, Any], environment: Optional[Environment] = None
) -> list[dict[str, Any]]:
    """Expand an app configuration whose source path is a glob pattern.

    Configurations with an empty source path, or whose source path is an
    existing directory, are returned as-is. When the pattern matches no
    directories the original configuration is also returned as-is.

    Explicitly configured ``name`` and ``cache_path`` values are suffixed
    with the matched directory name so expanded apps stay unique. The cache
    path suffix is skipped when ``shared_cache`` is true.

    Args:
        app_config: Raw app configuration. Not modified.
        environment: Environment used to find the workspace root.

    Returns:
        One configuration per matched directory, or the original.
    """
    source_path = app_config.get("source_path")
    if not source_path:
        return [app_config]

    environment = environment or Environment.current()
    root = environment.root_for(app_config)
    pattern = expand_path(str(source_path), root)
    if is_directory(pattern):
        return [app_config]

    matches = glob_directories(pattern)
    if not matches:
        logger.debug("Source path %s matched no directories", pattern)
        return [app_config]

    logger.debug("Source path %s expanded to %d directories", pattern, len(matches))
    configs: list[dict[str, Any]] = []
    for match in matches:
        config = dict(app_config, source_path=str(match))
        dir_name = match.name
        if config.get("name"):
            config["name"] = f"{config['name']}-{dir_name}"

        if config.get("cache_path") and config.get("shared_cache") is not True:
            config["cache_path"] = posixpath.join(str(config["cache_path"]), dir_name)

        configs.append(config)

    return configs
