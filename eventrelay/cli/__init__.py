"""eventrelay CLI — Typer-based command-line interface.

Provides the ``eventrelay`` command with a self-contained relay demo and
a settings report.  All output uses Rich for formatted terminal display.
"""
