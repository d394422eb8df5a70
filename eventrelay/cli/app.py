"""Main Typer application — imports and registers all CLI commands.

Entry point: ``eventrelay`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from eventrelay.cli.commands.demo import demo_cmd
from eventrelay.cli.commands.settings_cmd import settings_cmd
from eventrelay.config import settings

app = typer.Typer(
    name="eventrelay",
    help="eventrelay: in-process pub/sub fan-out from event emitters to sinks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="demo", help="Relay ticker events to a set of sinks.")(demo_cmd)
app.command(name="settings", help="Show the active eventrelay settings.")(settings_cmd)


@app.callback()
def configure(
    log_level: str = typer.Option(
        None, "--log-level", "-l", help="Override EVENTRELAY_LOG_LEVEL."
    ),
) -> None:
    """Configure logging before running a command."""
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
