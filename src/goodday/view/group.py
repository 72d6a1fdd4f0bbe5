# SPDX-License-Identifier: MIT

from typing import Any

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from goodday.model.group import Group
from goodday.view.header import header
from goodday.view.util import format_check, short_id


def groups_view(
    day: pendulum.Date,
    groups: list[Group],
    statuses: dict[str, dict[str, Any]],
) -> None:
    """Display groups with their quorum progress for the day."""
    header(day, "groups")

    groups_table = Table(box=box.SIMPLE)
    groups_table.add_column("id")
    groups_table.add_column("name")
    groups_table.add_column("priority")
    groups_table.add_column("members", justify="right")
    groups_table.add_column("progress", justify="right")
    groups_table.add_column("satisfied")

    for group in groups:
        status = statuses[group["id"] or ""]
        groups_table.add_row(
            short_id(group["id"]),
            group["name"],
            group["priority"],
            str(len(group["member_ids"])),
            f"{status['completed']}/{status['required']}",
            format_check(status["satisfied"]),
        )

    Console().print(groups_table)


def group_status_view(day: pendulum.Date, group: Group, status: dict[str, Any]) -> None:
    header(day, f"group {group['name']}")

    console = Console()
    console.print(
        f"{status['completed']}/{status['required']} required completions "
        f"{format_check(status['satisfied'])}"
    )

    members_table = Table(box=box.SIMPLE)
    members_table.add_column("id")
    members_table.add_column("name")
    members_table.add_column("done")
    for member in status["members"]:
        item = member["item"]
        name = item["name"] if item["active"] else f"[dim]{item['name']}[/dim]"
        members_table.add_row(
            short_id(item["id"]), name, format_check(member["completed"])
        )
    console.print(members_table)
