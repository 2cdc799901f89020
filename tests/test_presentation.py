"""Tests for display formatting."""

from __future__ import annotations

import pytest

from habitflow.models.calendar_day import CalendarDay
from habitflow.services import presentation

TODAY = CalendarDay(2024, 3, 15)


@pytest.mark.parametrize(
    "ratio, expected",
    [(0.0, 0), (1.0, 100), (2 / 3, 67), (10 / 14, 71), (0.254, 25), (-0.3, 0), (1.7, 100)],
)
def test_percent_rounds_and_clamps(ratio, expected):
    assert presentation.percent(ratio) == expected


@pytest.mark.parametrize("ratio, expected", [(0.125, 12), (0.375, 38), (0.625, 62), (0.875, 88)])
def test_percent_halves_round_to_even(ratio, expected):
    assert presentation.percent(ratio) == expected


def test_format_percent():
    assert presentation.format_percent(2 / 3) == "67%"
    assert presentation.format_percent(0) == "0%"


@pytest.mark.parametrize(
    "days_back, label",
    [
        (0, "today"),
        (1, "yesterday"),
        (2, "2 days ago"),
        (6, "6 days ago"),
        (7, "1 weeks ago"),
        (8, "1 weeks ago"),
        (14, "2 weeks ago"),
        (29, "4 weeks ago"),
        (30, "1 months ago"),
        (59, "1 months ago"),
        (65, "2 months ago"),
        (400, "13 months ago"),
    ],
)
def test_relative_day_label_thresholds(days_back, label):
    assert presentation.relative_day_label(TODAY.add_days(-days_back), TODAY) == label


def test_relative_day_label_future_day_is_today():
    assert presentation.relative_day_label(TODAY.add_days(3), TODAY) == "today"


@pytest.mark.parametrize(
    "days, label",
    [(0, "today"), (1, "1 day"), (5, "5 days"), (7, "1 wk"), (14, "2 wk"), (45, "1 mo")],
)
def test_habit_age_label(days, label):
    assert presentation.habit_age_label(TODAY.add_days(-days), TODAY) == label


def test_format_day_styles():
    day = CalendarDay(2024, 3, 15)

    assert presentation.format_day(day, "full") == "Friday, 15 March 2024"
    assert presentation.format_day(day, "long") == "15 March 2024"
    assert presentation.format_day(day, "short") == "15 Mar 2024"
    assert presentation.format_day(day) == "15 March 2024"


def test_format_day_rejects_unknown_style():
    with pytest.raises(ValueError):
        presentation.format_day(TODAY, "medium")


def test_month_title():
    assert presentation.month_title(2026, 10) == "October 2026"


def test_weekday_symbols_follow_first_weekday():
    assert presentation.weekday_symbols(0) == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert presentation.weekday_symbols(6)[:2] == ["Sun", "Mon"]


@pytest.mark.parametrize(
    "hour, minute, expected",
    [(9, 5, "09:05"), (19, 30, "19:30"), (7, None, "07:00"), (None, None, None)],
)
def test_format_reminder(hour, minute, expected):
    assert presentation.format_reminder(hour, minute) == expected
