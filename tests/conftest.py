"""Shared fixtures for license-compliance tests."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from license_compliance.environment import Environment


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def environment(tmp_path: Path) -> Environment:
    """Provide an environment rooted at a temporary directory without git."""
    return Environment.fixed(tmp_path)
