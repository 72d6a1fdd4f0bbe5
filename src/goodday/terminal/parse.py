# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from goodday import state as app_state
from goodday.errors import NotFoundError
from goodday.model.entity_id import EntityId
from goodday.model.entity_type import EntityType
from goodday.service.habit import HabitTracker
from goodday.time import day_from_str


def parse_day(day_param: Optional[str]) -> Optional[pendulum.Date]:
    """
    Parse a day argument.

    Accepts YYYY-MM-DD, today/t, yesterday/y, tomorrow/o or a signed day
    offset from today such as -1 or 3. Relative days follow the clock of the
    running tracker.
    """
    if day_param is None:
        return None

    day = str(day_param).strip().lower()
    today = app_state.get_tracker().today()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", day):
        try:
            return day_from_str(day)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")
    if re.match(r"^[+-]?\d+$", day):
        return today.add(days=int(day))
    if day in ("today", "t"):
        return today
    if day in ("yesterday", "y"):
        return today.subtract(days=1)
    if day in ("tomorrow", "o"):
        return today.add(days=1)
    raise typer.BadParameter("Incorrect day format")


def resolve_item_id(tracker: HabitTracker, reference: str) -> EntityId:
    """Find an item by full id, unique id prefix or exact name."""
    items = tracker.items(include_archived=True)
    for item in items:
        if item["id"] == reference:
            return reference

    by_prefix = [
        item["id"] for item in items if item["id"] and item["id"].startswith(reference)
    ]
    if len(by_prefix) == 1:
        return by_prefix[0]

    by_name = [
        item["id"]
        for item in items
        if item["id"] and item["name"].lower() == reference.lower()
    ]
    if len(by_name) == 1:
        return by_name[0]

    if len(by_prefix) > 1 or len(by_name) > 1:
        raise typer.BadParameter(f"'{reference}' matches more than one item")
    raise NotFoundError(EntityType.ITEM, reference)


def resolve_group_id(tracker: HabitTracker, reference: str) -> EntityId:
    """Find a group by full id, unique id prefix or exact name."""
    groups = tracker.groups()
    for group in groups:
        if group["id"] == reference:
            return reference

    matches = [
        group["id"]
        for group in groups
        if group["id"]
        and (
            group["id"].startswith(reference)
            or group["name"].lower() == reference.lower()
        )
    ]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise typer.BadParameter(f"'{reference}' matches more than one group")
    raise NotFoundError(EntityType.GROUP, reference)
