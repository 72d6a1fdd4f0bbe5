# SPDX-License-Identifier: MIT

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from goodday.model.reflection_note import ReflectionNote
from goodday.time import day_to_display_str
from goodday.view.header import header


def reflection_note_view(day: pendulum.Date, note: ReflectionNote) -> None:
    header(day, "reflection")

    console = Console()
    locked = " [dim](locked)[/dim]" if note["locked"] else ""
    console.print(
        f"[cyan]{day_to_display_str(note['day'])}[/cyan] "
        f"score {note['score']}/10{locked}"
    )
    console.print(note["text"])


def reflection_notes_view(day: pendulum.Date, notes: list[ReflectionNote]) -> None:
    header(day, "reflections")

    notes_table = Table(box=box.SIMPLE)
    notes_table.add_column("day")
    notes_table.add_column("score", justify="right")
    notes_table.add_column("text")
    notes_table.add_column("locked")
    for note in notes:
        notes_table.add_row(
            day_to_display_str(note["day"]),
            str(note["score"]),
            note["text"],
            "locked" if note["locked"] else "",
        )
    Console().print(notes_table)
