# SPDX-License-Identifier: MIT

from typing import Any

from goodday.model.group import Group
from goodday.model.item import Item
from goodday.service.ledger import CompletionLedger
from goodday.time import DayLike, day_key


def group_members(group: Group, items: list[Item]) -> list[Item]:
    return [item for item in items if item["id"] in group["member_ids"]]


def group_completed_count(
    group: Group,
    day: DayLike,
    items: list[Item],
    ledger: CompletionLedger,
) -> int:
    """Count active members completed on the day; archived members are skipped."""
    day = day_key(day)
    return sum(
        1
        for item in group_members(group, items)
        if item["active"]
        and item["id"] is not None
        and ledger.is_completed(item["id"], day)
    )


def is_group_satisfied(
    group: Group,
    day: DayLike,
    items: list[Item],
    ledger: CompletionLedger,
) -> bool:
    return group_completed_count(group, day, items, ledger) >= group["require_count"]


def group_status(
    group: Group,
    day: DayLike,
    items: list[Item],
    ledger: CompletionLedger,
) -> dict[str, Any]:
    """
    Summarize a group for a day.
    Returns: {
        "completed": int,
        "required": int,
        "members": list[dict],  # {"item": Item, "completed": bool}
        "satisfied": bool,
    }
    """
    day = day_key(day)
    completed = group_completed_count(group, day, items, ledger)
    members = [
        {
            "item": item,
            "completed": item["id"] is not None
            and ledger.is_completed(item["id"], day),
        }
        for item in group_members(group, items)
    ]
    return {
        "completed": completed,
        "required": group["require_count"],
        "members": members,
        "satisfied": completed >= group["require_count"],
    }
