# SPDX-License-Identifier: MIT

import pendulum

from goodday.model.group import Group
from goodday.model.item import Item
from goodday.service.group import is_group_satisfied
from goodday.service.ledger import CompletionLedger
from goodday.time import DayLike, day_key


def items_on_day(day: pendulum.Date, items: list[Item]) -> list[Item]:
    """Active items that already existed on the day."""
    return [item for item in items if item["active"] and item["created"] <= day]


def standalone_mandatory_items(
    day: pendulum.Date, items: list[Item], groups: list[Group]
) -> list[Item]:
    grouped_ids = {member_id for group in groups for member_id in group["member_ids"]}
    return [
        item
        for item in items_on_day(day, items)
        if item["priority"] == "mandatory"
        and item["kind"] == "positive"
        and item["id"] not in grouped_ids
    ]


def mandatory_groups(
    day: pendulum.Date, items: list[Item], groups: list[Group]
) -> list[Group]:
    """Mandatory groups with at least one member that existed on the day."""
    existing_ids = {item["id"] for item in items_on_day(day, items)}
    return [
        group
        for group in groups
        if group["priority"] == "mandatory"
        and any(member_id in existing_ids for member_id in group["member_ids"])
    ]


def negative_items(day: pendulum.Date, items: list[Item]) -> list[Item]:
    return [item for item in items_on_day(day, items) if item["kind"] == "negative"]


def is_good_day_live(
    day: DayLike,
    items: list[Item],
    groups: list[Group],
    ledger: CompletionLedger,
) -> bool:
    """
    Evaluate a day from the current items and ledger.

    A day with nothing mandatory to achieve is never a good day.
    """
    day = day_key(day)
    standalone = standalone_mandatory_items(day, items, groups)
    required_groups = mandatory_groups(day, items, groups)

    if len(standalone) == 0 and len(required_groups) == 0:
        return False

    all_standalone_done = all(
        item["id"] is not None and ledger.is_completed(item["id"], day)
        for item in standalone
    )
    all_groups_satisfied = all(
        is_group_satisfied(group, day, items, ledger) for group in required_groups
    )
    no_slips = not any(
        item["id"] is not None and ledger.is_completed(item["id"], day)
        for item in negative_items(day, items)
    )

    return all_standalone_done and all_groups_satisfied and no_slips


def mandatory_progress(
    day: DayLike,
    items: list[Item],
    groups: list[Group],
    ledger: CompletionLedger,
) -> tuple[int, int]:
    """(satisfied, total) over standalone mandatory items and mandatory groups."""
    day = day_key(day)
    standalone = standalone_mandatory_items(day, items, groups)
    required_groups = mandatory_groups(day, items, groups)

    satisfied = sum(
        1
        for item in standalone
        if item["id"] is not None and ledger.is_completed(item["id"], day)
    )
    satisfied += sum(
        1
        for group in required_groups
        if is_group_satisfied(group, day, items, ledger)
    )
    return satisfied, len(standalone) + len(required_groups)
