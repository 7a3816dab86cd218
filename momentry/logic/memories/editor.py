"""Memory/goal CRUD addressed by weeks-since-birth.

The UI only knows a week by its weeks-since-birth ordinal, so every call
first resolves it to ``(year, week_index)``. An ordinal that cannot be
resolved (no birth date, negative value) makes the call return ``None``;
the caller must refuse the action instead of guessing a week.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional

from momentry.domain.Memory import MemoryEntry
from momentry.events.Event_Bus import GLOBAL_EVENT_BUS, MEMORIES_CHANGED, EventBus
from momentry.infra.Year_Data_Repository import YearDataStore
from momentry.logic.calendar.birth_weeks import YearWeek, year_and_week_index_from_weeks_since_birth
from momentry.logic.calendar.iso_week import WeekRange, week_date_range
from momentry.utilities.constants import SLOTS_PER_YEAR

logger = logging.getLogger(__name__)


class MemoryValidationError(ValueError):
    pass


@dataclass
class WeekDetails:
    weeks_since_birth: int
    year: int
    week_index: int
    date_range: WeekRange
    is_future: bool
    memories: List[MemoryEntry] = field(default_factory=list)

    def to_dict(self):
        return {
            "weeks_since_birth": self.weeks_since_birth,
            "year": self.year,
            "week_index": self.week_index,
            "week_number": self.week_index + 1,
            "date_range": self.date_range.to_dict(),
            "is_future": self.is_future,
            "memories": [m.to_dict() for m in self.memories],
        }


class MemoryEditor:
    def __init__(self, store: YearDataStore, birth: Optional[date],
                 today_provider: Callable[[], date] = date.today, event_bus: Optional[EventBus] = None):
        self.store = store
        self.birth = birth
        self.today_provider = today_provider
        self.event_bus = event_bus or GLOBAL_EVENT_BUS

    def resolve(self, weeks_since_birth: int) -> Optional[YearWeek]:
        resolved = year_and_week_index_from_weeks_since_birth(weeks_since_birth, self.birth)
        if resolved is None:
            logger.warning(f"Could not determine year and week index for weeks since birth: {weeks_since_birth}")
            return None
        if resolved.week_index >= SLOTS_PER_YEAR:
            # ISO week 53 has no slot in the 52-circle grid
            logger.warning(f"Week {resolved.week_index + 1}/{resolved.year} is outside the year grid")
            return None
        return resolved

    def _validate(self, text: str, day: date, year_week: YearWeek) -> str:
        text = (text or "").strip()
        if not text:
            raise MemoryValidationError("Please enter a memory or goal.")
        week_range = week_date_range(year_week.week_index, year_week.year)
        if not week_range.contains(day):
            raise MemoryValidationError(
                f"The date must be within Week {year_week.week_index + 1} "
                f"({week_range.monday.isoformat()} to {week_range.sunday.isoformat()})."
            )
        return text

    def _save(self, year_week: YearWeek, records):
        records[year_week.week_index].sort_newest_first()
        self.store.save(year_week.year, records)

    def _publish(self, year_week: YearWeek):
        self.event_bus.publish(MEMORIES_CHANGED, {"year": year_week.year, "week_index": year_week.week_index})

    def describe_week(self, weeks_since_birth: int) -> Optional[WeekDetails]:
        year_week = self.resolve(weeks_since_birth)
        if year_week is None:
            return None
        week_range = week_date_range(year_week.week_index, year_week.year)
        record = self.store.load(year_week.year)[year_week.week_index]
        return WeekDetails(
            weeks_since_birth=weeks_since_birth,
            year=year_week.year,
            week_index=year_week.week_index,
            date_range=week_range,
            is_future=week_range.monday > self.today_provider(),
            memories=sorted(record.memories, key=lambda m: m.date, reverse=True),
        )

    def list_memories(self, weeks_since_birth: int) -> Optional[List[MemoryEntry]]:
        details = self.describe_week(weeks_since_birth)
        return details.memories if details else None

    def add_memory(self, weeks_since_birth: int, text: str, day: date, title: Optional[str] = None,
                   image_data: Optional[str] = None) -> Optional[MemoryEntry]:
        year_week = self.resolve(weeks_since_birth)
        if year_week is None:
            return None
        text = self._validate(text, day, year_week)
        memory = MemoryEntry(text=text, day=day, title=(title or "").strip() or None, image_data=image_data)
        with self.store.lock:
            records = self.store.load(year_week.year)
            records[year_week.week_index].memories.append(memory)
            self._save(year_week, records)
        self._publish(year_week)
        logger.info(f"Added memory {memory.id} to week {year_week.week_index + 1}/{year_week.year}")
        return memory

    def edit_memory(self, weeks_since_birth: int, memory_id: str, text: str, day: date,
                    title: Optional[str] = None) -> Optional[MemoryEntry]:
        year_week = self.resolve(weeks_since_birth)
        if year_week is None:
            return None
        text = self._validate(text, day, year_week)
        with self.store.lock:
            records = self.store.load(year_week.year)
            memory = records[year_week.week_index].find(memory_id)
            if memory is None:
                return None
            memory.text = text
            memory.date = day
            if title is not None:
                memory.title = title.strip() or None
            memory.touch()
            self._save(year_week, records)
        self._publish(year_week)
        return memory

    def delete_memory(self, weeks_since_birth: int, memory_id: str) -> bool:
        year_week = self.resolve(weeks_since_birth)
        if year_week is None:
            return False
        with self.store.lock:
            records = self.store.load(year_week.year)
            record = records[year_week.week_index]
            before = len(record.memories)
            record.memories = [m for m in record.memories if m.id != memory_id]
            if len(record.memories) == before:
                return False
            self._save(year_week, records)
        self._publish(year_week)
        logger.info(f"Deleted memory {memory_id} from week {year_week.week_index + 1}/{year_week.year}")
        return True
