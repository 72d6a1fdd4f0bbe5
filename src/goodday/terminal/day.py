# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from goodday import state as app_state
from goodday.terminal.custom_typer import AliasedTyperGroup, report_errors
from goodday.terminal.item import DayOption
from goodday.terminal.parse import parse_day
from goodday.time import day_range
from goodday.view import day as day_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("status, s")
def status(
    day: Annotated[
        Optional[pendulum.Date],
        typer.Argument(parser=parse_day, help="Day to evaluate (default: today)"),
    ] = None,
) -> None:
    """Show whether a day is a good day and how far along it is."""
    tracker = app_state.get_tracker()
    day = day or tracker.today()
    day_report.day_status_view(
        day,
        tracker.is_good_day(day),
        tracker.locks.is_locked(day),
        tracker.mandatory_progress(day),
    )


@app.command("lock, l")
def lock(
    day: Annotated[
        Optional[pendulum.Date],
        typer.Argument(
            parser=parse_day,
            help="Finished day to lock; without it every finished day is locked",
        ),
    ] = None,
) -> None:
    """Freeze the verdict of finished days."""
    tracker = app_state.get_tracker()
    with report_errors():
        if day is not None:
            day_report.lock_view(tracker.lock_day(day))
            return
        verdicts, notes = tracker.run_lock_pass()
    for verdict in verdicts:
        day_report.lock_view(verdict)
    typer.echo(f"Locked {len(verdicts)} days and {len(notes)} reflection notes")


@app.command("stats, sts")
def stats(
    window: Annotated[
        Optional[int], typer.Option("--window", "-w", help="Window in days")
    ] = None,
    day: DayOption = None,
) -> None:
    """Show the good-day rate and the current good-day streak."""
    tracker = app_state.get_tracker()
    day = day or tracker.today()
    window_days = window or tracker.configuration["default_window_days"]
    with report_errors():
        rate = tracker.good_day_rate(window_days, day)
        good_day_count = len(
            tracker.good_days(day.subtract(days=window_days - 1), day)
        )
        streak = tracker.good_day_streak(day)
    day_report.day_stats_view(day, window_days, good_day_count, rate, streak)


@app.command("history, h")
def history(
    days: Annotated[
        int, typer.Option("--days", "-n", help="Number of days to show")
    ] = 7,
    day: DayOption = None,
) -> None:
    """Show the verdict of recent days, newest first."""
    tracker = app_state.get_tracker()
    end = day or tracker.today()
    if days < 1:
        raise typer.BadParameter("--days must be at least 1")
    rows = [
        (
            history_day,
            tracker.is_good_day(history_day),
            tracker.locks.is_locked(history_day),
        )
        for history_day in day_range(end.subtract(days=days - 1), end)
    ]
    day_report.day_history_view(end, list(reversed(rows)))
