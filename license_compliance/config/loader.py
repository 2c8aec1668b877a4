"""Configuration file discovery and parsing for license-compliance."""
from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from license_compliance.config.paths import expand_path
from license_compliance.constants import DEFAULT_CONFIG_NAMES
from license_compliance.environment import Environment
from license_compliance.exceptions import (
    NotFoundError,
    ParseError,
    UnsupportedFormatError,
)

logger = logging.getLogger(__name__)


def find_config_file(directory: Path) -> Path:
    """Find a default configuration file in a directory.

    File preference is given by the order of ``DEFAULT_CONFIG_NAMES``.

    Args:
        directory: Directory to search.

    Returns:
        Path to the first configuration file that exists.

    Raises:
        NotFoundError: If none of the default files exist.
    """
    for name in DEFAULT_CONFIG_NAMES:
        config_path = directory / name
        if config_path.exists():
            logger.debug("Found configuration file %s", config_path)
            return config_path
    raise NotFoundError(f"Licensed configuration not found in {directory}")


def _parse_yaml(content: str, path: Path) -> Any:
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ParseError(f"Invalid YAML syntax in '{path}': {e}") from e


def _parse_json(content: str, path: Path) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON syntax in '{path}': {e}") from e


_PARSERS = {
    "yml": _parse_yaml,
    "yaml": _parse_yaml,
    "json": _parse_json,
}


def parse_config_file(path: Path) -> dict[str, Any]:
    """Parse a configuration file into a raw configuration tree.

    A path that is not an existing file yields an empty tree, so a
    project without any configuration still resolves to a single app.
    Roots declared in the file are expanded relative to its directory.

    Args:
        path: Path to the configuration file.

    Returns:
        The parsed configuration mapping.

    Raises:
        UnsupportedFormatError: If the file extension is not recognized.
        ParseError: If the file cannot be read, is malformed, or does
            not contain a mapping.
    """
    if not path.is_file():
        logger.debug("No configuration file at %s, using defaults", path)
        return {}

    extension = path.suffix.lower().lstrip(".")
    parser = _PARSERS.get(extension)
    if parser is None:
        raise UnsupportedFormatError(f"Unknown file type {extension} for {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ParseError(f"Cannot read configuration file '{path}': {e}") from e

    data = parser(content, path)

    # Empty YAML documents or documents with only comments
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ParseError(
            f"Invalid configuration in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )

    return expand_config_roots(data, path)


def expand_config_roots(config: dict[str, Any], config_path: Path) -> dict[str, Any]:
    """Anchor ``root`` values at the configuration file's directory.

    ``root: true`` becomes the file's directory; any other non-empty root
    is made absolute relative to it. Nested ``apps`` entries are expanded
    the same way.

    Args:
        config: Raw configuration mapping. Not modified.
        config_path: Path of the file the mapping was read from.

    Returns:
        A copy of the mapping with expanded roots.
    """
    config_dir = config_path.parent
    expanded = copy.deepcopy(config)

    def _expand(options: dict[str, Any]) -> None:
        root = options.get("root")
        if root is True:
            options["root"] = str(config_dir)
        elif root:
            options["root"] = str(expand_path(str(root), config_dir))
        else:
            return
        logger.debug("Expanded root %r to %s", root, options["root"])

    _expand(expanded)
    for app in expanded.get("apps") or []:
        if isinstance(app, dict):
            _expand(app)

    return expanded


def load_document(
    path: Any = ".", environment: Optional[Environment] = None
) -> dict[str, Any]:
    """Locate and parse a configuration document.

    Args:
        path: File or directory, relative to the working directory.
            A directory is searched for one of the default file names.
        environment: Environment supplying the working directory.

    Returns:
        The parsed configuration mapping (empty if the file does not exist).

    Raises:
        NotFoundError: If ``path`` is a directory without a default file.
        UnsupportedFormatError: If the file extension is not recognized.
        ParseError: If the file is malformed.
    """
    environment = environment or Environment.current()
    config_path = expand_path(path, environment.cwd)
    if config_path.is_dir():
        config_path = find_config_file(config_path)
    return parse_config_file(config_path)
