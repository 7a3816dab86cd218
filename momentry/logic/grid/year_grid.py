"""Year grid state: 52 week slots per displayed year.

Slot state comes in two tiers:

* fixed for a given ``(slot_index, year, birth)``: date range, weeks since
  birth, before-birth flag. Computed once when the grid is built.
* time/data dependent: ``is_past``, ``is_current_week``, ``has_data``.
  Re-derived by :func:`refresh` without touching the fixed tier.

The fixed tier is only valid for the birth date it was built with. A new
birth date invalidates every cached year, which is rebuilt from scratch;
slots are never patched in place for a different birth date.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterator, List, Optional, Tuple

from momentry.domain.WeekRecord import WeekRecord
from momentry.domain.WeekSlot import WeekSlot
from momentry.events.Event_Bus import BIRTH_CHANGED, EventBus
from momentry.infra.Year_Data_Repository import YearDataStore
from momentry.logic.calendar.birth_weeks import weeks_since_birth
from momentry.logic.calendar.iso_week import iso_week_locator, week_date_range
from momentry.utilities.constants import GRID_ROWS, ROW_WIDTHS, SLOTS_PER_YEAR

logger = logging.getLogger(__name__)


def honeycomb_positions() -> Iterator[Tuple[int, int]]:
    """(row, column) per slot: even rows hold 7 circles, odd rows 8."""
    for row in range(GRID_ROWS):
        for column in range(ROW_WIDTHS[row % 2]):
            yield row, column


def clamp_year(year: int, birth: Optional[date]) -> int:
    if birth is not None and year < birth.year:
        logger.info(f"Year {year} is before birth year {birth.year}; using {birth.year}")
        return birth.year
    return year


def current_week_index(year: int, today: date) -> int:
    """0-based ISO week index of ``today`` if ``year`` is today's ISO year, else -1."""
    locator = iso_week_locator(today)
    return locator.week_number - 1 if locator.iso_year == year else -1


def _has_data(records: List[WeekRecord], slot_index: int) -> bool:
    return 0 <= slot_index < len(records) and records[slot_index].has_data()


def _derive(slot: WeekSlot, records: List[WeekRecord], today: date, today_index: int):
    slot.is_past = slot.date_range.monday < today
    slot.is_current_week = slot.slot_index == today_index
    slot.has_data = _has_data(records, slot.slot_index)


def initialize_year(year: int, birth: Optional[date], today: date, store: YearDataStore) -> List[WeekSlot]:
    """Build the 52 slots of ``year`` (clamped to the birth year)."""
    year = clamp_year(year, birth)
    records = store.load(year)
    today_index = current_week_index(year, today)
    slots = []
    for slot_index, (row, column) in zip(range(SLOTS_PER_YEAR), honeycomb_positions()):
        date_range = week_date_range(slot_index, year)
        slot = WeekSlot(
            slot_index=slot_index,
            year=year,
            date_range=date_range,
            weeks_since_birth=weeks_since_birth(slot_index, year, birth),
            is_before_birth=birth is not None and date_range.monday < birth,
            row=row,
            column=column,
        )
        _derive(slot, records, today, today_index)
        slots.append(slot)
    return slots


def refresh(year: int, slots: List[WeekSlot], birth: Optional[date], today: date,
            store: YearDataStore) -> List[WeekSlot]:
    """Re-derive has_data / is_past / is_current_week of existing slots in place.

    ``birth`` must be the birth date the slots were built with; the fixed
    tier (date range, weeks since birth, before-birth) is left untouched.
    """
    year = clamp_year(year, birth)
    records = store.load(year)
    today_index = current_week_index(year, today)
    for slot in slots:
        _derive(slot, records, today, today_index)
    return slots


class YearGridState:
    """Per-year slot cache bound to one birth date."""

    def __init__(self, store: YearDataStore, birth: Optional[date] = None):
        self.store = store
        self._birth = birth
        self._grids: Dict[int, List[WeekSlot]] = {}

    def attach(self, event_bus: EventBus):
        """Follow birth date changes published for this store."""
        event_bus.subscribe(BIRTH_CHANGED, self._on_birth_changed)

    def detach(self, event_bus: EventBus):
        event_bus.unsubscribe(BIRTH_CHANGED, self._on_birth_changed)

    def _on_birth_changed(self, event_name, payload):
        payload = payload or {}
        if payload.get("store") is self.store:
            self.set_birth_date(payload.get("birth_date"))

    @property
    def birth(self) -> Optional[date]:
        return self._birth

    def set_birth_date(self, birth: Optional[date]):
        if birth != self._birth:
            logger.debug(f"Birth date changed ({self._birth} -> {birth}); dropping {len(self._grids)} cached years")
            self._birth = birth
            self._grids.clear()
        return self

    def invalidate(self, year: Optional[int] = None):
        if year is None:
            self._grids.clear()
        else:
            self._grids.pop(year, None)

    def is_cached(self, year: int) -> bool:
        return year in self._grids

    def grid(self, year: int, today: date) -> List[WeekSlot]:
        """Slots for ``year``: cached ones refreshed for ``today``, or freshly built."""
        year = clamp_year(year, self._birth)
        cached = self._grids.get(year)
        if cached is not None:
            return refresh(year, cached, self._birth, today, self.store)
        slots = initialize_year(year, self._birth, today, self.store)
        self._grids[year] = slots
        return slots

    def refresh_year(self, year: int, today: date) -> Optional[List[WeekSlot]]:
        cached = self._grids.get(year)
        if cached is None:
            return None
        return refresh(year, cached, self._birth, today, self.store)

    def slot(self, year: int, slot_index: int, today: date) -> Optional[WeekSlot]:
        slots = self.grid(year, today)
        return slots[slot_index] if 0 <= slot_index < len(slots) else None


__all__ = [
    'YearGridState', 'initialize_year', 'refresh', 'clamp_year', 'current_week_index',
    'honeycomb_positions',
]
