# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from goodday import state as app_state
from goodday.terminal import configuration, day, group, item, reflect
from goodday.terminal.custom_typer import OrderedAliasedTyperGroup

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="goodday - Habits, streaks and good days in the CLI",
    no_args_is_help=True,
)
app.add_typer(item.app, name="item, i", help="Manage and complete habits and tasks")
app.add_typer(group.app, name="group, g", help="Groups of interchangeable items")
app.add_typer(day.app, name="day, d", help="Good-day verdicts and statistics")
app.add_typer(reflect.app, name="reflect, r", help="Daily reflection notes")
app.add_typer(configuration.app, name="config, c", help="Configuration settings")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
) -> None:
    """
    goodday - Habits, streaks and good days in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        app_state.set_show_header(False)


def run() -> None:
    app()
