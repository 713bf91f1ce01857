"""Rich formatting helpers for the lightchat CLI.

Provides functions that format session results for terminal display.
Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from lightchat.models.fixture import Fixture
    from lightchat.session.models import StepResult, TurnResult

ASSISTANT_PREFIX = "Assistant > "


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False, soft_wrap=True)


def format_error(message: str, console: Console) -> None:
    """Display an error message in red."""
    console.print(f"[red]Error:[/red] {escape(message)}")


def format_reply(result: TurnResult, console: Console) -> None:
    """Display one assistant reply line."""
    text = Text(ASSISTANT_PREFIX + result.reply)
    if result.failed:
        text.stylize("red")
    console.print(text)


def format_step(step: StepResult, console: Console) -> None:
    """Display a completed tool call (verbose mode)."""
    tc = step.tool_call
    args = json.dumps(tc.arguments, sort_keys=True)
    if step.success:
        status = "[green]ok[/green]"
        detail = step.result.output
    else:
        status = "[red]failed[/red]"
        detail = step.result.error
    console.print(
        f"[dim]  tool {step.step}:[/dim] [cyan]{escape(tc.name)}[/cyan]"
        f"{escape(args)} {status} [dim]{escape(detail)}[/dim]"
    )


def format_fixtures(fixtures: list[Fixture], console: Console) -> None:
    """Display fixtures as a table."""
    if not fixtures:
        console.print("[dim]No lights.[/dim]")
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Id", justify="right", style="yellow")
    table.add_column("Name")
    table.add_column("State")

    for fixture in fixtures:
        if fixture.is_on is None:
            state = "[dim]unknown[/dim]"
        elif fixture.is_on:
            state = "[green]on[/green]"
        else:
            state = "off"
        table.add_row(str(fixture.id), escape(fixture.name), state)

    console.print(table)
