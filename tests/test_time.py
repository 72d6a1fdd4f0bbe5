# SPDX-License-Identifier: MIT

import datetime

import pendulum
import pytest

from goodday.time import (
    day_from_str,
    day_key,
    day_range,
    day_to_str,
    days_between,
    end_of_month,
    start_of_month,
    start_of_week,
)


def test_day_key_of_date_string():
    assert day_key("2024-03-13") == pendulum.date(2024, 3, 13)


def test_day_key_of_plain_date():
    assert day_key(datetime.date(2024, 3, 13)) == pendulum.date(2024, 3, 13)


def test_day_key_uses_local_timezone():
    late_evening = pendulum.datetime(2024, 3, 13, 23, 30, tz="local")
    early_morning = pendulum.datetime(2024, 3, 13, 0, 5, tz="local")
    assert day_key(late_evening) == pendulum.date(2024, 3, 13)
    assert day_key(early_morning) == pendulum.date(2024, 3, 13)


def test_day_key_converts_other_timezones_to_local():
    moment = pendulum.datetime(2024, 3, 13, 12, 0, tz="UTC")
    assert day_key(moment) == moment.in_tz("local").date()


def test_day_key_of_naive_datetime_is_local():
    assert day_key(datetime.datetime(2024, 3, 13, 23, 59)) == pendulum.date(
        2024, 3, 13
    )


def test_days_between_is_signed():
    start = pendulum.date(2024, 2, 27)
    end = pendulum.date(2024, 3, 2)
    assert days_between(start, end) == 4
    assert days_between(end, start) == -4


def test_day_range_is_inclusive():
    days = list(day_range(pendulum.date(2024, 2, 28), pendulum.date(2024, 3, 1)))
    assert days == [
        pendulum.date(2024, 2, 28),
        pendulum.date(2024, 2, 29),
        pendulum.date(2024, 3, 1),
    ]


def test_day_range_empty_when_reversed():
    assert list(day_range(pendulum.date(2024, 3, 2), pendulum.date(2024, 3, 1))) == []


@pytest.mark.parametrize(
    "week_start, expected",
    [
        ("monday", pendulum.date(2024, 3, 11)),
        ("sunday", pendulum.date(2024, 3, 10)),
        ("wednesday", pendulum.date(2024, 3, 13)),
        ("thursday", pendulum.date(2024, 3, 7)),
    ],
)
def test_start_of_week(week_start, expected):
    assert start_of_week(pendulum.date(2024, 3, 13), week_start) == expected


def test_month_bounds():
    day = pendulum.date(2024, 2, 14)
    assert start_of_month(day) == pendulum.date(2024, 2, 1)
    assert end_of_month(day) == pendulum.date(2024, 2, 29)


def test_day_string_conversion():
    day = pendulum.date(2024, 3, 5)
    assert day_to_str(day) == "2024-03-05"
    assert day_from_str("2024-03-05") == day
