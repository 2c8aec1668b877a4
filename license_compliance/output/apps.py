"""Formatters for resolved app configurations."""
from __future__ import annotations

import json
from typing import Iterable, Optional

from rich.console import Console
from rich.table import Table

from license_compliance.config.configuration import Configuration


class AppsFormatter:
    """Display resolved apps as a Rich table."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
        """
        self._console = console if console is not None else Console()

    def format_apps(self, configuration: Configuration) -> None:
        """Print one row per app with its resolved paths."""
        if not configuration.apps:
            self._console.print("[yellow]No apps configured[/yellow]")
            return

        table = Table(title="Configured Apps")
        table.add_column("App", style="cyan", no_wrap=True)
        table.add_column("Source Path", style="green")
        table.add_column("Cache Path", style="magenta")
        table.add_column("Root")

        for app in configuration.apps:
            table.add_row(app.name, str(app.source_dir), str(app.cache_dir), app.root)

        self._console.print(table)
        self._console.print(f"\n[bold]Total apps:[/bold] {len(configuration.apps)}")

    def format_enabled_sources(
        self, configuration: Configuration, source_types: Iterable[str]
    ) -> None:
        """Print which of the given source types each app enables."""
        source_types = list(source_types)
        table = Table(title="Enabled Sources")
        table.add_column("App", style="cyan", no_wrap=True)
        for source_type in source_types:
            table.add_column(source_type)

        for app in configuration.apps:
            cells = [
                "[green]yes[/green]" if app.is_enabled(source_type) else "[red]no[/red]"
                for source_type in source_types
            ]
            table.add_row(app.name, *cells)

        self._console.print(table)


class AppsJsonFormatter:
    """Render resolved apps as JSON."""

    def format_apps(self, configuration: Configuration) -> str:
        """Return a JSON document with the resolved options of every app."""
        output = {
            "apps": [app.to_options() for app in configuration.apps],
        }
        return json.dumps(output, indent=2, sort_keys=True, default=str)
