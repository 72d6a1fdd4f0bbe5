# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Callable

import pendulum

from goodday.configuration import Configuration
from goodday.model.entity_id import EntityId
from goodday.model.item import Item
from goodday.service.ledger import CompletionLedger
from goodday.time import (
    DayLike,
    day_key,
    days_between,
    end_of_month,
    start_of_month,
    start_of_week,
)


def compute_streak(
    item: Item,
    as_of: DayLike,
    ledger: CompletionLedger,
    configuration: Configuration,
) -> tuple[int, int]:
    """
    Compute (current, best) streak for an item as of a day.

    best is the larger of the stored best and current, so it never goes down.
    """
    current = compute_current_streak(item, as_of, ledger, configuration)
    best = max(item["best_streak"], current)
    return current, best


def apply_streak(
    item: Item,
    as_of: DayLike,
    ledger: CompletionLedger,
    configuration: Configuration,
) -> Item:
    """Return a copy of the item with its cached streak fields refreshed."""
    updated_item = deepcopy(item)
    current, best = compute_streak(item, as_of, ledger, configuration)
    updated_item["current_streak"] = current
    updated_item["best_streak"] = best
    return updated_item


def compute_current_streak(
    item: Item,
    as_of: DayLike,
    ledger: CompletionLedger,
    configuration: Configuration,
) -> int:
    if item["id"] is None:
        raise ValueError("Item must have an ID")

    as_of = day_key(as_of)
    max_lookback_days = configuration["max_lookback_days"]

    # Tasks are not streakable
    if item["frequency"] == "once":
        return 0

    if item["kind"] == "negative":
        return days_since_last_slip(item, as_of, ledger)

    if item["frequency"] == "daily":
        return daily_streak(item["id"], as_of, ledger, max_lookback_days)

    if item["frequency"] == "weekly":
        week_start = configuration["week_start"]
        return period_streak(
            item["id"],
            as_of,
            item["frequency_target"],
            ledger,
            max_lookback_days,
            period_start=lambda day: start_of_week(day, week_start),
            period_end=lambda start: start.add(days=6),
            previous_period=lambda start: start.subtract(weeks=1),
        )

    if item["frequency"] == "monthly":
        return period_streak(
            item["id"],
            as_of,
            item["frequency_target"],
            ledger,
            max_lookback_days,
            period_start=start_of_month,
            period_end=end_of_month,
            previous_period=lambda start: start.subtract(months=1),
        )

    raise ValueError(f"Unknown frequency: {item['frequency']}")


def daily_streak(
    item_id: EntityId,
    as_of: pendulum.Date,
    ledger: CompletionLedger,
    max_lookback_days: int,
) -> int:
    """
    Contiguous run of completed days ending at as_of or the day before.

    A day without any record yet leaves the streak alive, an explicit
    incomplete record on as_of ends it.
    """
    streak = 0
    today_record = ledger.query(item_id, as_of)
    if today_record is not None:
        if not today_record["completed"]:
            return 0
        streak = 1

    earliest = as_of.subtract(days=max_lookback_days)
    check_day = as_of.subtract(days=1)
    while check_day >= earliest and ledger.is_completed(item_id, check_day):
        streak += 1
        check_day = check_day.subtract(days=1)

    return streak


def days_since_last_slip(
    item: Item, as_of: pendulum.Date, ledger: CompletionLedger
) -> int:
    """Days since the item was last done, or since it was created."""
    if item["id"] is None:
        raise ValueError("Item must have an ID")
    last_slip = ledger.last_completed_on_or_before(item["id"], as_of)
    since = last_slip if last_slip is not None else item["created"]
    return max(0, days_between(since, as_of))


def period_streak(
    item_id: EntityId,
    as_of: pendulum.Date,
    target: int,
    ledger: CompletionLedger,
    max_lookback_days: int,
    period_start: Callable[[pendulum.Date], pendulum.Date],
    period_end: Callable[[pendulum.Date], pendulum.Date],
    previous_period: Callable[[pendulum.Date], pendulum.Date],
) -> int:
    """
    Number of consecutive calendar periods reaching the target.

    The running period is only judged on completions up to as_of; if it has
    not reached the target yet the streak is 0.
    """
    start = period_start(as_of)
    if ledger.completion_count(item_id, start, as_of) < target:
        return 0

    streak = 1
    earliest = as_of.subtract(days=max_lookback_days)
    start = previous_period(start)
    while start >= earliest:
        if ledger.completion_count(item_id, start, period_end(start)) < target:
            break
        streak += 1
        start = previous_period(start)

    return streak
