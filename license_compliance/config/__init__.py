"""Configuration handling for license-compliance."""
from __future__ import annotations

from license_compliance.config.configuration import Configuration
from license_compliance.config.defaults import default_app_options
from license_compliance.config.expansion import expand_app_source_path
from license_compliance.config.loader import (
    expand_config_roots,
    find_config_file,
    load_document,
    parse_config_file,
)
from license_compliance.models.config import AppConfiguration

__all__ = [
    "AppConfiguration",
    "Configuration",
    "default_app_options",
    "expand_app_source_path",
    "expand_config_roots",
    "find_config_file",
    "load_document",
    "parse_config_file",
]
