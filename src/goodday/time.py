# SPDX-License-Identifier: MIT

import datetime
from typing import Iterator, Optional, Union, cast

import pendulum

DayLike = Union[pendulum.Date, datetime.date, datetime.datetime, str]

WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today() -> pendulum.Date:
    return pendulum.today("local").date()


def day_key(value: DayLike) -> pendulum.Date:
    """
    Normalize any timestamp to its local calendar day.

    Datetimes (naive ones are read as local time) are converted to the local
    timezone before the date is taken, so 23:30 local and 04:30 UTC of the
    next morning can land on the same day-key.
    """
    if isinstance(value, str):
        return day_key(cast(pendulum.DateTime, pendulum.parse(value, tz="local")))
    if isinstance(value, datetime.datetime):
        return pendulum.instance(value, tz="local").in_tz("local").date()
    return pendulum.date(value.year, value.month, value.day)


def day_key_optional(value: Optional[DayLike]) -> Optional[pendulum.Date]:
    if value is None:
        return None
    return day_key(value)


def days_between(start: pendulum.Date, end: pendulum.Date) -> int:
    """Signed number of calendar days from start to end."""
    return end.toordinal() - start.toordinal()


def day_range(start: pendulum.Date, end: pendulum.Date) -> Iterator[pendulum.Date]:
    """Yield every day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current = current.add(days=1)


def start_of_week(day: pendulum.Date, week_start: str = "monday") -> pendulum.Date:
    first = WEEKDAYS[week_start]
    return day.subtract(days=(day.weekday() - first) % 7)


def start_of_month(day: pendulum.Date) -> pendulum.Date:
    return day.start_of("month")


def end_of_month(day: pendulum.Date) -> pendulum.Date:
    return day.end_of("month")


def day_to_str(day: pendulum.Date) -> str:
    return day.to_date_string()


def day_to_str_optional(day: Optional[pendulum.Date]) -> Optional[str]:
    if day is None:
        return None
    return day_to_str(day)


def day_from_str(day: str) -> pendulum.Date:
    year, month, date = map(int, day.split("-"))
    return pendulum.date(year, month, date)


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def day_to_display_str(day: pendulum.Date) -> str:
    return day.format("YYYY-MM-DD ddd")

