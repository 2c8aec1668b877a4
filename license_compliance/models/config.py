"""Resolved per-app configuration model for license-compliance."""
from __future__ import annotations

import copy
import logging
import os
import posixpath
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from license_compliance.constants import DEFAULT_CACHE_PATH
from license_compliance.environment import Environment
from license_compliance.exceptions import ConfigurationError, MissingRequiredFieldError
from license_compliance.matching import path_match
from license_compliance.models.dependency import Dependency
from license_compliance.sources import registered_source_types

logger = logging.getLogger(__name__)

_STRUCTURAL_MAPPINGS = ("sources", "reviewed", "undetected_license_overrides", "ignored")


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class AppConfiguration(BaseModel):
    """Fully resolved configuration for one app.

    Built with ``AppConfiguration.build`` from the app's own options and the
    options inherited from the root of the configuration document. Keys
    without a dedicated field are kept as extra attributes.
    """

    model_config = {"extra": "allow", "coerce_numbers_to_str": True}

    name: str = Field(description="Unique app name")
    source_path: str = Field(description="Directory scanned for dependencies")
    root: str = Field(description="Absolute path of the workspace root")
    cache_path: str = Field(
        description="Cache directory for dependency records, relative to root"
    )
    sources: Dict[str, bool] = Field(
        default_factory=dict,
        description="Enabled or disabled source types",
    )
    reviewed: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Reviewed dependency name patterns by source type",
    )
    ignored: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Ignored dependency name patterns by source type",
    )
    undetected_license_overrides: Dict[str, Any] = Field(
        default_factory=dict,
        description="Manually assigned licenses for undetected dependencies",
    )
    allowed: List[str] = Field(
        default_factory=list,
        description="Explicitly allowed license identifiers",
    )
    shared_cache: Optional[bool] = Field(
        default=None,
        description="Share one cache directory between apps",
    )

    @field_validator("reviewed", "ignored", mode="before")
    @classmethod
    def _wrap_patterns(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, Mapping):
            return {key: _as_list(patterns) for key, patterns in value.items()}
        return value

    @field_validator("allowed", mode="before")
    @classmethod
    def _wrap_allowed(cls, value: Any) -> Any:
        return _as_list(value)

    @field_validator("sources", "undetected_license_overrides", mode="before")
    @classmethod
    def _default_mapping(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def build(
        cls,
        options: Mapping[str, Any],
        inherited_options: Optional[Mapping[str, Any]] = None,
        environment: Optional[Environment] = None,
        index: Optional[int] = None,
    ) -> AppConfiguration:
        """Resolve an app configuration.

        App options take precedence over inherited options. The root is the
        explicit ``root`` option, else the repository root, else the working
        directory. ``name`` defaults to the base name of ``source_path``.

        Args:
            options: Options configured for this app.
            inherited_options: Options configured at the document root.
            environment: Environment supplying the working directory
                and repository root.
            index: Position of the app in the configuration, used to
                name an unnamed app in errors.

        Returns:
            The resolved app configuration.

        Raises:
            MissingRequiredFieldError: If no ``source_path`` is configured.
            ConfigurationError: If a configured value has the wrong type.
        """
        inherited_options = inherited_options or {}
        environment = environment or Environment.current()

        merged: dict[str, Any] = copy.deepcopy({**inherited_options, **options})
        if not merged.get("source_path"):
            app_name = merged.get("name") or (
                f"#{index}" if index is not None else "<unnamed>"
            )
            raise MissingRequiredFieldError(str(app_name), "source_path")

        for key in _STRUCTURAL_MAPPINGS:
            merged[key] = merged.get(key) or {}
        merged["allowed"] = merged.get("allowed") or []
        merged["root"] = environment.root_for(merged)
        merged["name"] = merged.get("name") or os.path.basename(
            os.path.normpath(str(merged["source_path"]))
        )
        # cache path may be derived from the app name
        merged["cache_path"] = _detect_cache_path(
            options, inherited_options, merged["name"]
        )

        try:
            app = cls.model_validate(merged)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration for app {merged['name']}: "
                f"{format_validation_errors(e)}"
            ) from e

        logger.debug(
            "Resolved app %s (root=%s, cache_path=%s)", app.name, app.root, app.cache_path
        )
        return app

    @property
    def root_dir(self) -> Path:
        """Workspace root directory."""
        return Path(self.root)

    @property
    def cache_dir(self) -> Path:
        """Cache directory, anchored at the workspace root."""
        return self.root_dir / self.cache_path

    @property
    def source_dir(self) -> Path:
        """Source directory, anchored at the workspace root."""
        return self.root_dir / self.source_path

    def to_options(self) -> dict[str, Any]:
        """Return the resolved options, including extra keys."""
        return self.model_dump(exclude_none=True)

    def is_enabled(self, source_type: str) -> bool:
        """Check whether a source type is enabled.

        Unlisted types are enabled unless any type is explicitly enabled,
        in which case only explicitly enabled types run.
        """
        default = not any(self.sources.values())
        return self.sources.get(source_type, default)

    def enabled_sources(self, source_types: Optional[Iterable[str]] = None) -> list[str]:
        """Filter source types down to the enabled ones.

        Args:
            source_types: Types to check. Defaults to all registered types.

        Returns:
            Enabled source types, in the given order.
        """
        if source_types is None:
            source_types = registered_source_types()
        return [source_type for source_type in source_types if self.is_enabled(source_type)]

    def is_reviewed(self, dependency: Dependency) -> bool:
        """Check whether a dependency matches a reviewed pattern."""
        return _matches_any(self.reviewed.get(dependency.type, []), dependency.name)

    def is_ignored(self, dependency: Dependency) -> bool:
        """Check whether a dependency matches an ignored pattern."""
        return _matches_any(self.ignored.get(dependency.type, []), dependency.name)

    def is_allowed(self, license: str) -> bool:
        """Check whether a license is explicitly allowed."""
        return license in self.allowed

    def ignore(self, dependency: Dependency) -> None:
        """Add a dependency to the ignored list. Duplicates are kept."""
        self.ignored.setdefault(dependency.type, []).append(dependency.name)

    def review(self, dependency: Dependency) -> None:
        """Add a dependency to the reviewed list. Duplicates are kept."""
        self.reviewed.setdefault(dependency.type, []).append(dependency.name)

    def allow(self, license: str) -> None:
        """Add a license to the allowed list. Duplicates are kept."""
        self.allowed.append(license)


def _matches_any(patterns: Iterable[str], name: str) -> bool:
    return any(path_match(pattern, name) for pattern in patterns)


def _detect_cache_path(
    options: Mapping[str, Any],
    inherited_options: Mapping[str, Any],
    name: str,
) -> str:
    """Determine the cache path of an app.

    In order of precedence:
    1. the app's own ``cache_path``
    2. the inherited ``cache_path`` as-is, when ``shared_cache`` is true
    3. the inherited ``cache_path`` joined with the app name
    4. the default cache path joined with the app name
    """
    if options.get("cache_path"):
        return str(options["cache_path"])

    cache_path = inherited_options.get("cache_path")
    if cache_path and inherited_options.get("shared_cache") is True:
        return str(cache_path)

    return posixpath.join(str(cache_path or DEFAULT_CACHE_PATH), str(name))


def format_validation_errors(error: ValidationError) -> str:
    """Format Pydantic validation errors into a readable string.

    Args:
        error: The Pydantic ValidationError.

    Returns:
        Formatted error message string.
    """
    messages: list[str] = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"]) if err["loc"] else "root"
        msg = err["msg"]
        messages.append(f"{loc}: {msg}")
    return "; ".join(messages)
