"""Mapping between grid weeks and "weeks since birth".

The ordinal is the number of whole 7-day periods between the birth date and
the Thursday anchor of a week. It identifies a week independently of the
year grid currently on screen, so the UI refers to weeks by it and converts
back to ``(year, week_index)`` when it needs the stored records.
"""
from __future__ import annotations

import math
from datetime import date, timedelta
from typing import NamedTuple, Optional

from momentry.logic.calendar.iso_week import iso_week_locator, start_of_week, week_anchor_date
from momentry.utilities.constants import DAYS_PER_YEAR


class YearWeek(NamedTuple):
    year: int
    week_index: int


def weeks_since_birth(week_index: int, year: int, birth: Optional[date]) -> int:
    """Weeks between ``birth`` and the Thursday of the given week.

    Weeks before birth saturate to 0. Without a birth date the slot's
    1-based position is returned as a placeholder, not a real count.
    """
    if birth is None:
        return week_index + 1
    days = (week_anchor_date(week_index, year) - birth).days
    return max(0, days // 7)


def _year_week(day: date) -> YearWeek:
    locator = iso_week_locator(day)
    return YearWeek(locator.iso_year, locator.week_number - 1)


def year_and_week_index_from_weeks_since_birth(n: int, birth: Optional[date]) -> Optional[YearWeek]:
    """Inverse of :func:`weeks_since_birth`.

    Returns the week whose weeks-since-birth equals ``n``, or ``None`` if
    ``n`` is negative or no birth date is set. The search starts from the
    Monday of the birth week plus ``n`` weeks. For a birth on Friday..Sunday
    the Thursday anchor of that week is still behind the birth date, so the
    forward count lags one week and the target moves one week further.

    Only ``n == 0`` can match two weeks: the birth week and, for a
    Friday..Sunday birth, the week after it. The birth week then starts
    before birth and is not shown as a lived week, so the week after wins.
    """
    if birth is None or n < 0:
        return None
    birth_monday = start_of_week(birth)
    if n == 0:
        if birth_monday < birth:
            following = _year_week(birth_monday + timedelta(weeks=1))
            if weeks_since_birth(following.week_index, following.year, birth) == 0:
                return following
        return _year_week(birth_monday)
    target = birth_monday + timedelta(weeks=n)
    resolved = _year_week(target)
    if weeks_since_birth(resolved.week_index, resolved.year, birth) < n:
        resolved = _year_week(target + timedelta(weeks=1))
    return resolved


def age_and_weeks_lived(birth: Optional[date], today: date) -> tuple[int, int]:
    if birth is None:
        return 0, 0
    days = (today - birth).days
    return math.floor(days / DAYS_PER_YEAR), days // 7


def ordinal_suffix(num: int) -> str:
    if 11 <= num % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(num % 10, "th")


def life_summary(birth: Optional[date], today: date) -> str:
    """Header line, e.g. ``You are 34 years old. This is your 1,790th week.``"""
    age, weeks = age_and_weeks_lived(birth, today)
    return f"You are {age} years old. This is your {weeks:,}{ordinal_suffix(weeks)} week."
