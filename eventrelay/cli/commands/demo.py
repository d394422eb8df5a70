"""``eventrelay demo`` — relay ticker events to a set of sinks.

Connects a ticker ``EventEmitter`` to a dispatcher whose handler
broadcasts every tick, attaches recording sinks (and optionally a
JSON-lines file sink), closes one sink half way to show auto-detach, and
stops the dispatcher before a final tick that must not be relayed.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from eventrelay.core.dispatcher import EventDispatcher
from eventrelay.emitter import EventEmitter
from eventrelay.sinks.base import ClosableSink
from eventrelay.sinks.jsonl_file import JsonLinesFileSink
from eventrelay.sinks.memory import RecordingSink

console = Console()


def closed_cell(sink: ClosableSink) -> str:
    """Render the "Closed" column for *sink*."""
    return "[yellow]Yes[/yellow]" if sink.closed else "[green]No[/green]"


async def run_demo(
    sink_count: int, tick_count: int, output: Path | None = None
) -> tuple[list[RecordingSink], JsonLinesFileSink | None]:
    """Run the demo relay and return the sinks it fed."""
    ticker = EventEmitter()
    dispatcher = EventDispatcher()

    recorders = [RecordingSink(f"sink-{i}") for i in range(sink_count)]
    for recorder in recorders:
        dispatcher.attach(recorder)

    file_sink = None
    if output is not None:
        file_sink = JsonLinesFileSink(output)
        dispatcher.attach(file_sink)

    dispatcher.connect(ticker, {"tick": lambda n: dispatcher.broadcast("tick", n)})
    await dispatcher.start()

    for n in range(tick_count):
        if recorders and n == tick_count // 2:
            recorders[0].close()
        ticker.emit("tick", n)

    await dispatcher.stop()
    # Not relayed: the handler is no longer registered
    ticker.emit("tick", tick_count)

    return recorders, file_sink


def demo_cmd(
    sinks: int = typer.Option(
        3, "--sinks", "-n", min=0, help="Number of recording sinks to attach."
    ),
    ticks: int = typer.Option(
        5, "--ticks", "-t", min=0, help="Number of ticks to emit while running."
    ),
    output: Path = typer.Option(
        None, "--output", "-o", help="Also append events to this JSON-lines file."
    ),
) -> None:
    """Relay ticker events through a dispatcher and show what each sink got."""
    recorders, file_sink = asyncio.run(run_demo(sinks, ticks, output))

    table = Table(show_header=True, header_style="bold cyan", expand=True)
    table.add_column("Sink", min_width=12)
    table.add_column("Received", justify="right")
    table.add_column("Closed", justify="center")
    table.add_column("Ticks")

    for recorder in recorders:
        ticks_seen = ", ".join(str(args[0]) for _, args in recorder.received)
        table.add_row(
            recorder.sink_name, str(len(recorder.received)), closed_cell(recorder), ticks_seen
        )

    if file_sink is not None:
        written = file_sink.read_events()
        table.add_row(
            f"{file_sink.sink_name} ({file_sink.path})",
            str(len(written)),
            closed_cell(file_sink),
            ", ".join(str(record.args[0]) for record in written),
        )

    console.print()
    console.print(
        Panel(
            table,
            title="[bold]Relay Demo[/bold]",
            subtitle=f"{ticks} ticks, {sinks} sinks",
            border_style="cyan",
            padding=(1, 2),
        )
    )
    console.print()
