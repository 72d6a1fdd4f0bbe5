# SPDX-License-Identifier: MIT

from typing import Callable

import pendulum

from goodday.configuration import Configuration
from goodday.errors import ValidationError
from goodday.model.item import Item
from goodday.service.ledger import CompletionLedger
from goodday.time import DayLike, day_key, day_range

GoodDayQuery = Callable[[pendulum.Date], bool]


def window_bounds(
    window_days: int, as_of: DayLike
) -> tuple[pendulum.Date, pendulum.Date]:
    """Inclusive window of window_days days ending at as_of."""
    if window_days < 1:
        raise ValidationError("Window must be at least 1 day")
    end = day_key(as_of)
    return end.subtract(days=window_days - 1), end


def completion_rate(
    item: Item,
    window_days: int,
    as_of: DayLike,
    ledger: CompletionLedger,
) -> float:
    if item["id"] is None:
        raise ValueError("Item must have an ID")
    start, end = window_bounds(window_days, as_of)
    return ledger.completion_count(item["id"], start, end) / window_days


def good_days(
    start: DayLike, end: DayLike, is_good_day: GoodDayQuery
) -> list[pendulum.Date]:
    return [day for day in day_range(day_key(start), day_key(end)) if is_good_day(day)]


def good_day_rate(window_days: int, as_of: DayLike, is_good_day: GoodDayQuery) -> float:
    start, end = window_bounds(window_days, as_of)
    return len(good_days(start, end, is_good_day)) / window_days


def current_good_day_streak(
    as_of: DayLike,
    is_good_day: GoodDayQuery,
    configuration: Configuration,
) -> int:
    """
    Consecutive good days ending at as_of.

    A day that is not good (yet) does not break the streak when it is as_of
    itself; counting then starts from the day before.
    """
    as_of = day_key(as_of)
    streak = 1 if is_good_day(as_of) else 0

    earliest = as_of.subtract(days=configuration["max_lookback_days"])
    check_day = as_of.subtract(days=1)
    while check_day >= earliest and is_good_day(check_day):
        streak += 1
        check_day = check_day.subtract(days=1)

    return streak
