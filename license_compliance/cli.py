"""CLI entry point for license-compliance."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from license_compliance import __version__
from license_compliance.config import Configuration
from license_compliance.constants import EXIT_ERROR, EXIT_SUCCESS
from license_compliance.exceptions import LicenseComplianceError
from license_compliance.output.apps import AppsFormatter, AppsJsonFormatter

# Module-level console for consistent output
_console = Console()
# Separate console for error output (writes to stderr)
_error_console = Console(stderr=True)

_config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(),
    default=".",
    show_default=True,
    help="Configuration file, or directory containing .licensed.yml.",
)


def _configure_logging(verbose: bool) -> None:
    """Send library debug logging to stderr when verbose output is requested."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=_error_console, show_path=False)],
    )


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--verbose",
    "-v",
    "verbose_flag",
    is_flag=True,
    default=False,
    help="Log how the configuration is resolved.",
)
def main(verbose_flag: bool) -> None:
    """License Compliance - Resolve license-compliance app configuration.

    Loads .licensed.yml, .licensed.yaml or .licensed.json and shows the
    apps it resolves to, including glob-expanded source paths.

    \b
    Examples:
        license-compliance apps
        license-compliance apps --config path/to/.licensed.yml
        license-compliance apps --format json
        license-compliance check-sources npm bundler
    """
    _configure_logging(verbose_flag)


@main.command()
@_config_option
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["terminal", "json"], case_sensitive=False),
    default="terminal",
    help="Output format (default: terminal).",
)
def apps(config_path: str, output_format: str) -> None:
    """List the apps resolved from the configuration.

    \b
    Examples:
        license-compliance apps
        license-compliance apps --format json
    """
    format_value = output_format.lower()
    try:
        configuration = Configuration.load_from(config_path)
    except LicenseComplianceError as e:
        _display_error(e, format_value)
        sys.exit(EXIT_ERROR)

    if format_value == "json":
        click.echo(AppsJsonFormatter().format_apps(configuration))
    else:
        AppsFormatter(console=_console).format_apps(configuration)
    sys.exit(EXIT_SUCCESS)


@main.command(name="check-sources")
@_config_option
@click.argument("source_types", nargs=-1, required=True)
def check_sources(config_path: str, source_types: tuple[str, ...]) -> None:
    """Show which source types each app enables.

    \b
    Examples:
        license-compliance check-sources npm bundler pip
    """
    try:
        configuration = Configuration.load_from(config_path)
    except LicenseComplianceError as e:
        _display_error(e, "terminal")
        sys.exit(EXIT_ERROR)

    AppsFormatter(console=_console).format_enabled_sources(configuration, source_types)
    sys.exit(EXIT_SUCCESS)


def _display_error(error: LicenseComplianceError, format_type: str) -> None:
    """Display error message to user.

    All errors are written to stderr for consistent CI/CD behavior.

    Args:
        error: The exception that occurred.
        format_type: Output format type for styling.
    """
    error_type = type(error).__name__
    message = f"Error: {error_type}: {error}"

    if format_type == "terminal":
        _error_console.print(f"[red bold]{message}[/red bold]")
    else:
        click.echo(message, err=True)


if __name__ == "__main__":
    main()
