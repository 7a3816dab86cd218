"""ISO-8601 week arithmetic on civil dates.

Every value handled here is a plain ``datetime.date``: there is no time of
day and no time zone, so a week can never shift because of a UTC offset or
a DST transition. ISO weeks run Monday..Sunday and week 1 is the week that
contains the year's first Thursday. The Thursday of a week always lies in
the week's ISO year, which is why both directions are anchored on it.

Week indexes are 0-based (``week_index = week_number - 1``). Out-of-range
indexes are not validated; ``week_anchor_date(52, y)`` simply lands in the
following ISO year.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import NamedTuple

THURSDAY = 3  # date.weekday(): Monday == 0


class ISOWeekLocator(NamedTuple):
    week_number: int
    iso_year: int


class WeekRange(NamedTuple):
    monday: date
    sunday: date

    def contains(self, day: date) -> bool:
        return self.monday <= day <= self.sunday

    def to_dict(self) -> dict:
        return {"monday": self.monday.isoformat(), "sunday": self.sunday.isoformat()}


def start_of_week(day: date) -> date:
    """Monday of the ISO week containing ``day``."""
    return day - timedelta(days=day.weekday())


def thursday_of_week(day: date) -> date:
    return start_of_week(day) + timedelta(days=THURSDAY)


def iso_week_locator(day: date) -> ISOWeekLocator:
    """Return the ISO week number and ISO year of ``day``."""
    thursday = thursday_of_week(day)
    iso_year = thursday.year
    days_since_jan1 = (thursday - date(iso_year, 1, 1)).days
    # ceil((days + 1) / 7) without floats
    week_number = days_since_jan1 // 7 + 1
    return ISOWeekLocator(week_number, iso_year)


def first_thursday(year: int) -> date:
    jan1 = date(year, 1, 1)
    return jan1 + timedelta(days=(THURSDAY - jan1.weekday()) % 7)


def week_anchor_date(week_index: int, year: int) -> date:
    """Thursday of ISO week ``week_index + 1`` of ``year``."""
    return first_thursday(year) + timedelta(weeks=week_index)


def week_date_range(week_index: int, year: int) -> WeekRange:
    """Monday..Sunday (inclusive) of ISO week ``week_index + 1`` of ``year``."""
    monday = week_anchor_date(week_index, year) - timedelta(days=THURSDAY)
    return WeekRange(monday, monday + timedelta(days=6))


def iso_weeks_in_year(year: int) -> int:
    """52 or 53. Dec 28 always falls in the last ISO week of its year."""
    return iso_week_locator(date(year, 12, 28)).week_number
