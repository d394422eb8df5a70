"""``eventrelay settings`` — show the active settings and where they come from."""

from __future__ import annotations

import os

from rich.console import Console
from rich.table import Table

from eventrelay.config import RelaySettings

console = Console()


def settings_cmd() -> None:
    """Show the active eventrelay settings.

    Values set through ``EVENTRELAY_*`` environment variables are marked
    as such; everything else comes from ``.env`` or the defaults.
    """
    current = RelaySettings()
    prefix = current.model_config.get("env_prefix", "")

    table = Table(title="eventrelay settings", header_style="bold cyan")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_column("Source", justify="center")

    for name, value in current.model_dump(mode="json").items():
        env_name = f"{prefix}{name}".upper()
        source = "[green]env[/green]" if env_name in os.environ else "[dim].env/default[/dim]"
        table.add_row(name, str(value), source)

    console.print(table)
