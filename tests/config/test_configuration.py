"""Tests for top-level configuration resolution."""
from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from license_compliance.config import Configuration
from license_compliance.constants import DEFAULT_CACHE_PATH
from license_compliance.environment import Environment
from license_compliance.exceptions import (
    ConfigurationError,
    MissingRequiredFieldError,
    NotFoundError,
    UnsupportedFormatError,
)


class TestFromOptions:
    """Tests for Configuration.from_options."""

    def test_default_app_without_apps(
        self, tmp_path: Path, environment: Environment
    ) -> None:
        """Test that an empty configuration yields one app for the cwd."""
        configuration = Configuration.from_options({}, environment)

        assert len(configuration.apps) == 1
        app = configuration.apps[0]
        assert app.source_path == str(tmp_path)
        assert app.name == tmp_path.name
        assert app.cache_path == DEFAULT_CACHE_PATH
        assert app.root == str(tmp_path)

    def test_default_app_uses_root_options(self, environment: Environment) -> None:
        """Test that root-level options configure the default app."""
        configuration = Configuration.from_options(
            {"name": "project", "cache_path": "vendor/licenses", "allowed": ["mit"]},
            environment,
        )

        app = configuration.apps[0]
        assert app.name == "project"
        assert app.cache_path == "vendor/licenses"
        assert app.allowed == ["mit"]

    def test_apps_inherit_root_options(self, environment: Environment) -> None:
        """Test that every app inherits the root-level options."""
        configuration = Configuration.from_options(
            {
                "allowed": ["mit"],
                "sources": {"npm": True},
                "apps": [{"source_path": "a"}, {"source_path": "b"}],
            },
            environment,
        )

        assert [app.name for app in configuration.apps] == ["a", "b"]
        assert all(app.allowed == ["mit"] for app in configuration.apps)
        assert all(app.is_enabled("npm") for app in configuration.apps)

    def test_app_options_override_root_options(self, environment: Environment) -> None:
        """Test that app options take precedence over root options."""
        configuration = Configuration.from_options(
            {
                "allowed": ["mit"],
                "apps": [{"source_path": "a", "allowed": ["bsd-3-clause"]}],
            },
            environment,
        )

        assert configuration.apps[0].allowed == ["bsd-3-clause"]

    def test_apps_get_separate_caches(self, environment: Environment) -> None:
        """Test that apps without explicit cache paths get per-app caches."""
        configuration = Configuration.from_options(
            {"apps": [{"source_path": "a"}, {"source_path": "b"}]},
            environment,
        )

        assert [app.cache_path for app in configuration.apps] == [
            f"{DEFAULT_CACHE_PATH}/a",
            f"{DEFAULT_CACHE_PATH}/b",
        ]

    def test_shared_cache(self, environment: Environment) -> None:
        """Test that apps share the root cache path when requested."""
        configuration = Configuration.from_options(
            {
                "cache_path": ".shared",
                "shared_cache": True,
                "apps": [{"source_path": "a"}, {"source_path": "b"}],
            },
            environment,
        )

        assert [app.cache_path for app in configuration.apps] == [".shared", ".shared"]

    def test_glob_apps_expanded(self, tmp_path: Path, environment: Environment) -> None:
        """Test that a glob source path becomes one app per directory."""
        (tmp_path / "packages" / "api").mkdir(parents=True)
        (tmp_path / "packages" / "web").mkdir()

        configuration = Configuration.from_options(
            {"apps": [{"source_path": "packages/*"}]}, environment
        )

        assert [app.name for app in configuration.apps] == ["api", "web"]
        assert [app.cache_path for app in configuration.apps] == [
            f"{DEFAULT_CACHE_PATH}/api",
            f"{DEFAULT_CACHE_PATH}/web",
        ]

    def test_glob_apps_with_explicit_name(
        self, tmp_path: Path, environment: Environment
    ) -> None:
        """Test that expanded apps with explicit names stay unique."""
        (tmp_path / "packages" / "api").mkdir(parents=True)
        (tmp_path / "packages" / "web").mkdir()

        configuration = Configuration.from_options(
            {
                "apps": [
                    {
                        "source_path": "packages/*",
                        "name": "pkg",
                        "cache_path": ".cache",
                    }
                ]
            },
            environment,
        )

        assert [app.name for app in configuration.apps] == ["pkg-api", "pkg-web"]
        assert [app.cache_path for app in configuration.apps] == [
            ".cache/api",
            ".cache/web",
        ]

    def test_missing_source_path_raises(self, environment: Environment) -> None:
        """Test that an app without source path fails with its name."""
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            Configuration.from_options({"apps": [{"name": "broken"}]}, environment)
        assert "broken" in str(exc_info.value)
        assert "source_path" in str(exc_info.value)

    def test_missing_source_path_names_app_position(
        self, environment: Environment
    ) -> None:
        """Test that an unnamed app is reported by its position in apps."""
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            Configuration.from_options(
                {"apps": [{"source_path": "a"}, {"allowed": ["mit"]}]}, environment
            )
        assert str(exc_info.value) == "App #1 is missing required property source_path"

    def test_non_mapping_app_raises(self, environment: Environment) -> None:
        """Test that app entries must be mappings."""
        with pytest.raises(ConfigurationError) as exc_info:
            Configuration.from_options({"apps": ["packages/*"]}, environment)
        assert "expected a mapping" in str(exc_info.value)

    def test_options_not_modified(self, environment: Environment) -> None:
        """Test that the input mapping keeps its apps entry."""
        options = {"apps": [{"source_path": "a"}]}

        Configuration.from_options(options, environment)
        assert options == {"apps": [{"source_path": "a"}]}

    def test_apps_tuple_is_immutable(self, environment: Environment) -> None:
        """Test that the apps sequence cannot be replaced."""
        configuration = Configuration.from_options({}, environment)

        assert isinstance(configuration.apps, tuple)
        with pytest.raises(ValidationError):
            configuration.apps = ()  # type: ignore[misc]


class TestLoadFrom:
    """Tests for Configuration.load_from."""

    def test_loads_directory(self, tmp_path: Path, environment: Environment) -> None:
        """Test loading apps from a configuration directory."""
        (tmp_path / "a").mkdir()
        (tmp_path / ".licensed.yml").write_text(
            "apps:\n"
            "  - source_path: a\n"
            "    name: first\n"
        )

        configuration = Configuration.load_from(tmp_path, environment)
        assert [app.name for app in configuration.apps] == ["first"]

    def test_root_true_anchors_at_config_directory(self, tmp_path: Path) -> None:
        """Test that root: true resolves paths from the configuration file."""
        project = tmp_path / "project"
        (project / "packages" / "one").mkdir(parents=True)
        (project / ".licensed.yml").write_text(
            "apps:\n"
            "  - source_path: packages/*\n"
            "    root: true\n"
        )
        env = Environment.fixed(tmp_path / "elsewhere", repository_root=tmp_path)

        configuration = Configuration.load_from(project, env)
        app = configuration.apps[0]
        assert app.root == str(project)
        assert app.name == "one"
        assert app.source_path == str(project / "packages" / "one")

    def test_nested_app_root(self, tmp_path: Path, environment: Environment) -> None:
        """Test that an app can anchor its own root."""
        (tmp_path / "sub").mkdir()
        (tmp_path / ".licensed.yml").write_text(
            "apps:\n"
            "  - source_path: .\n"
            "    name: sub\n"
            "    root: sub\n"
        )

        configuration = Configuration.load_from(tmp_path, environment)
        assert configuration.apps[0].root == str(tmp_path / "sub")

    def test_json_configuration(self, tmp_path: Path, environment: Environment) -> None:
        """Test loading a JSON configuration file."""
        (tmp_path / ".licensed.json").write_text(
            '{"apps": [{"source_path": "a", "sources": {"npm": true}}]}'
        )

        configuration = Configuration.load_from(tmp_path, environment)
        assert configuration.apps[0].is_enabled("npm")
        assert not configuration.apps[0].is_enabled("bundler")

    def test_missing_file_gives_default_app(
        self, tmp_path: Path, environment: Environment
    ) -> None:
        """Test that a missing configuration file still resolves."""
        configuration = Configuration.load_from(tmp_path / ".licensed.yml", environment)

        assert len(configuration.apps) == 1
        assert configuration.apps[0].source_path == str(tmp_path)

    def test_directory_without_config_raises(
        self, tmp_path: Path, environment: Environment
    ) -> None:
        """Test that NotFoundError propagates."""
        with pytest.raises(NotFoundError):
            Configuration.load_from(tmp_path, environment)

    def test_unsupported_format_raises(
        self, tmp_path: Path, environment: Environment
    ) -> None:
        """Test that UnsupportedFormatError propagates."""
        config_file = tmp_path / "licensed.ini"
        config_file.write_text("[apps]\n")

        with pytest.raises(UnsupportedFormatError):
            Configuration.load_from(config_file, environment)

    def test_root_level_root_inherited_by_apps(self, tmp_path: Path) -> None:
        """Test that a root-level root anchors every app's paths."""
        project = tmp_path / "project"
        (project / "lib").mkdir(parents=True)
        (project / ".licensed.yml").write_text(
            "root: true\n"
            "apps:\n"
            "  - source_path: lib\n"
        )
        env = Environment.fixed(tmp_path)

        app = Configuration.load_from(project, env).apps[0]
        assert app.root == str(project)
        assert app.source_dir == project / "lib"
        assert app.cache_dir == project / ".licenses" / "lib"
