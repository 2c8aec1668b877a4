"""Top-level configuration: loading a document and resolving its apps."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Tuple

from pydantic import BaseModel

from license_compliance.config.defaults import default_app_options
from license_compliance.config.expansion import expand_app_source_path
from license_compliance.config.loader import load_document
from license_compliance.environment import Environment
from license_compliance.exceptions import ConfigurationError
from license_compliance.models.config import AppConfiguration

logger = logging.getLogger(__name__)


class Configuration(BaseModel):
    """The apps resolved from one configuration document."""

    model_config = {"frozen": True}

    apps: Tuple[AppConfiguration, ...] = ()

    @classmethod
    def load_from(
        cls, path: Any = ".", environment: Optional[Environment] = None
    ) -> Configuration:
        """Load the configuration at a file or directory path.

        The path may be relative to the working directory. A directory is
        searched for one of the default configuration file names; a file
        path that does not exist resolves to the default single app.

        Args:
            path: Configuration file or directory.
            environment: Environment supplying the working directory
                and repository root.

        Returns:
            The resolved configuration.

        Raises:
            ConfigurationError: If the configuration cannot be found,
                parsed, or resolved.
        """
        environment = environment or Environment.current()
        return cls.from_options(load_document(path, environment), environment)

    @classmethod
    def from_options(
        cls,
        options: Optional[Mapping[str, Any]] = None,
        environment: Optional[Environment] = None,
    ) -> Configuration:
        """Resolve the apps of a raw configuration mapping.

        Options other than ``apps`` are inherited by every app. Without any
        ``apps`` a single app scanning the working directory is used.

        Args:
            options: Raw configuration mapping. Not modified.
            environment: Environment supplying the working directory
                and repository root.

        Returns:
            The resolved configuration.
        """
        environment = environment or Environment.current()
        inherited = dict(options or {})
        apps = list(inherited.pop("apps", None) or [])
        if not apps:
            apps.append({**default_app_options(environment), **inherited})

        for index, app in enumerate(apps):
            if not isinstance(app, Mapping):
                raise ConfigurationError(
                    f"Invalid app at index {index}: "
                    f"expected a mapping, got {type(app).__name__}"
                )

        expanded = [
            (index, config)
            for index, app in enumerate(apps)
            for config in expand_app_source_path(dict(app), environment)
        ]
        logger.debug("Resolving %d app(s)", len(expanded))
        return cls(
            apps=tuple(
                AppConfiguration.build(app, inherited, environment, index=index)
                for index, app in expanded
            )
        )
