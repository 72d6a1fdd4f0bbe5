# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from goodday import state as app_state
from goodday.terminal.custom_typer import AliasedTyperGroup, report_errors
from goodday.terminal.item import DayOption
from goodday.view import reflection as reflection_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    text: str,
    score: Annotated[
        int, typer.Option("--score", "-s", help="Fulfilment from 1 to 10")
    ] = 5,
    day: DayOption = None,
) -> None:
    """Write or edit the reflection for today or yesterday."""
    tracker = app_state.get_tracker()
    with report_errors():
        note = tracker.save_reflection_note(text, score, day)
    reflection_report.reflection_note_view(note["day"], note)


@app.command("show, s")
def show(day: DayOption = None) -> None:
    """Show the reflection of a day."""
    tracker = app_state.get_tracker()
    day = day or tracker.today()
    note = tracker.reflection_note(day)
    if note is None:
        typer.echo(f"No reflection for {day}")
        raise typer.Exit(1)
    reflection_report.reflection_note_view(day, note)


@app.command("list, ls")
def list_notes(
    days: Annotated[
        Optional[int], typer.Option("--days", "-n", help="Number of days to show")
    ] = None,
) -> None:
    """List recent reflections, newest first."""
    tracker = app_state.get_tracker()
    with report_errors():
        notes = tracker.recent_reflection_notes(days)
    reflection_report.reflection_notes_view(tracker.today(), notes)
