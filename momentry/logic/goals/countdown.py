"""Countdown to the nearest future goals (memories stored on future weeks)."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from momentry.infra.Year_Data_Repository import YearDataStore
from momentry.logic.calendar.birth_weeks import weeks_since_birth
from momentry.logic.calendar.iso_week import week_date_range
from momentry.utilities.constants import GOAL_LOOKAHEAD_YEARS, MAX_GOALS


@dataclass(frozen=True)
class Goal:
    title: str
    memory_id: str
    weeks_since_birth: int
    weeks_until: int
    days_until: int
    week_date: date
    goal_date: date

    def to_dict(self):
        return {
            "title": self.title,
            "memory_id": self.memory_id,
            "weeks_since_birth": self.weeks_since_birth,
            "weeks_until": self.weeks_until,
            "days_until": self.days_until,
            "week_date": self.week_date.isoformat(),
            "goal_date": self.goal_date.isoformat(),
        }


def upcoming_goals(store: YearDataStore, birth: Optional[date], today: date,
                   lookahead_years: int = GOAL_LOOKAHEAD_YEARS, limit: int = MAX_GOALS) -> List[Goal]:
    """Goals in weeks starting after ``today``, soonest first, at most ``limit``.

    The current week is not a goal even if it holds entries.
    """
    if birth is None:
        return []
    goals = []
    for year in range(today.year, today.year + lookahead_years + 1):
        for week_index, record in enumerate(store.load(year)):
            if not record.has_data():
                continue
            monday = week_date_range(week_index, year).monday
            if monday <= today:
                continue
            days_until = (monday - today).days
            ordinal = weeks_since_birth(week_index, year, birth)
            for memory in record.memories:
                goals.append(Goal(
                    title=memory.label,
                    memory_id=memory.id,
                    weeks_since_birth=ordinal,
                    weeks_until=days_until // 7 + 1,
                    days_until=days_until,
                    week_date=monday,
                    goal_date=memory.date or monday,
                ))
    goals.sort(key=lambda g: g.week_date)
    return goals[:limit]
