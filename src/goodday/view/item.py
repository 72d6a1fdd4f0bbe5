# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from goodday.model.completion import CompletionRecord
from goodday.model.item import Item
from goodday.time import day_to_display_str, day_to_str
from goodday.view.header import header
from goodday.view.util import format_check, format_optional, format_percent, short_id


def items_view(
    day: pendulum.Date,
    report_name: str,
    items: list[Item],
    completed_ids: set[str],
) -> None:
    """Display items in a table with their completion for the day."""
    header(day, report_name)

    items_table = Table(box=box.SIMPLE)
    items_table.add_column("id")
    items_table.add_column("name", no_wrap=True, overflow="ellipsis")
    items_table.add_column("kind")
    items_table.add_column("priority")
    items_table.add_column("frequency")
    items_table.add_column("streak", justify="right")
    items_table.add_column("best", justify="right")
    items_table.add_column("done")

    for item in items:
        frequency = item["frequency"]
        if frequency in ("weekly", "monthly"):
            frequency = f"{frequency} x{item['frequency_target']}"
        name = item["name"] if item["active"] else f"[dim]{item['name']}[/dim]"
        items_table.add_row(
            short_id(item["id"]),
            name,
            item["kind"],
            item["priority"],
            frequency,
            str(item["current_streak"]),
            str(item["best_streak"]),
            format_check(item["id"] in completed_ids),
        )

    console = Console()
    console.print(items_table)


def single_item_view(
    day: pendulum.Date,
    item: Item,
    records: list[CompletionRecord],
    recent_limit: int = 10,
) -> None:
    """Display the details of an item followed by its most recent records."""
    header(day, "item")

    item_table = Table(box=box.SIMPLE, show_header=False)
    item_table.add_column("field", style="cyan")
    item_table.add_column("value")

    item_table.add_row("id", format_optional(item["id"]))
    item_table.add_row("name", item["name"])
    item_table.add_row("description", format_optional(item["description"]))
    item_table.add_row("kind", item["kind"])
    item_table.add_row("priority", item["priority"])
    item_table.add_row("frequency", item["frequency"])
    item_table.add_row("target", str(item["frequency_target"]))
    item_table.add_row("success criteria", format_optional(item["success_criteria"]))
    item_table.add_row("options", ", ".join(item["options"] or []))
    item_table.add_row("group", short_id(item["group_id"]))
    item_table.add_row("current streak", str(item["current_streak"]))
    item_table.add_row("best streak", str(item["best_streak"]))
    item_table.add_row("active", format_check(item["active"]))
    item_table.add_row("created", day_to_display_str(item["created"]))

    console = Console()
    console.print(item_table)

    if len(records) == 0:
        return

    records_table = Table(box=box.SIMPLE)
    records_table.add_column("day")
    records_table.add_column("done")
    records_table.add_column("value", justify="right")
    records_table.add_column("option")
    records_table.add_column("note")
    for record in records[-recent_limit:]:
        records_table.add_row(
            day_to_display_str(record["day"]),
            format_check(record["completed"]),
            format_optional(record["measured_value"]),
            format_optional(record["selected_option"]),
            format_optional(record["note"]),
        )
    console.print(records_table)


def completion_view(item: Item, record: CompletionRecord) -> None:
    state = "done" if record["completed"] else "not done"
    Console().print(
        f"{item['name']} on {day_to_str(record['day'])}: {state} "
        f"(streak {item['current_streak']}, best {item['best_streak']})"
    )


def item_stats_view(
    day: pendulum.Date,
    item: Item,
    current_streak: int,
    best_streak: int,
    rate: float,
    window_days: int,
    last_completed: Optional[pendulum.Date],
) -> None:
    header(day, f"{item['name']} statistics")

    stats_table = Table(box=box.SIMPLE, show_header=False)
    stats_table.add_column("statistic", style="cyan")
    stats_table.add_column("value", justify="right")
    stats_table.add_row("current streak", str(current_streak))
    stats_table.add_row("best streak", str(best_streak))
    stats_table.add_row(f"completion rate ({window_days}d)", format_percent(rate))
    stats_table.add_row(
        "last completed",
        day_to_display_str(last_completed) if last_completed is not None else "never",
    )
    Console().print(stats_table)
