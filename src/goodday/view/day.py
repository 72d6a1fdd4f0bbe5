# SPDX-License-Identifier: MIT

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from goodday.model.day_verdict import DayVerdict
from goodday.time import day_to_display_str
from goodday.view.header import header
from goodday.view.util import format_check, format_percent


def day_status_view(
    day: pendulum.Date,
    is_good_day: bool,
    locked: bool,
    progress: tuple[int, int],
) -> None:
    header(day, "day")

    satisfied, total = progress
    verdict = "[green]good day[/green]" if is_good_day else "[red]not a good day[/red]"
    state = "locked" if locked else "live"

    console = Console()
    console.print(f"{verdict} ({state})")
    console.print(f"mandatory progress: {satisfied}/{total}")


def day_history_view(
    day: pendulum.Date,
    history: list[tuple[pendulum.Date, bool, bool]],
) -> None:
    """Display (day, is_good_day, locked) rows, newest first."""
    header(day, "history")

    history_table = Table(box=box.SIMPLE)
    history_table.add_column("day")
    history_table.add_column("good")
    history_table.add_column("locked")
    for history_day, is_good_day, locked in history:
        history_table.add_row(
            day_to_display_str(history_day),
            format_check(is_good_day),
            "locked" if locked else "",
        )
    Console().print(history_table)


def day_stats_view(
    day: pendulum.Date,
    window_days: int,
    good_day_count: int,
    rate: float,
    streak: int,
) -> None:
    header(day, "good day statistics")

    stats_table = Table(box=box.SIMPLE, show_header=False)
    stats_table.add_column("statistic", style="cyan")
    stats_table.add_column("value", justify="right")
    stats_table.add_row(f"good days ({window_days}d)", str(good_day_count))
    stats_table.add_row(f"good day rate ({window_days}d)", format_percent(rate))
    stats_table.add_row("good day streak", str(streak))
    Console().print(stats_table)


def lock_view(verdict: DayVerdict) -> None:
    verdict_str = "good" if verdict["is_good_day"] else "not good"
    Console().print(f"{day_to_display_str(verdict['day'])} locked as {verdict_str}")
