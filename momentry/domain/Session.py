"""Session aggregate: the birth anchor, the displayed year and its grid.

Everything the grid needs (storage, clock, event bus) is passed in, so a
session can be built on any storage and any clock.
"""
import logging
from datetime import date
from typing import Callable, List, Optional

from momentry.domain.WeekSlot import WeekSlot
from momentry.events.Event_Bus import BIRTH_CHANGED, GLOBAL_EVENT_BUS, MEMORIES_CHANGED, EventBus
from momentry.infra.Birth_Date_Repository import BirthDateRepository
from momentry.infra.Year_Data_Repository import YearDataStore
from momentry.infra.storage import KeyValueStorage
from momentry.logic.calendar.birth_weeks import age_and_weeks_lived, life_summary
from momentry.logic.grid.year_grid import YearGridState, clamp_year, current_week_index
from momentry.logic.memories.editor import MemoryEditor

logger = logging.getLogger(__name__)


class Session:
    def __init__(self, storage: KeyValueStorage, today_provider: Callable[[], date] = date.today,
                 event_bus: Optional[EventBus] = None):
        self.today_provider = today_provider
        self.event_bus = event_bus or GLOBAL_EVENT_BUS
        self.store = YearDataStore(storage, today_provider)
        self.birth_repository = BirthDateRepository(storage)
        self.grid_state = YearGridState(self.store)
        self.grid_state.attach(self.event_bus)
        self.birth_date: Optional[date] = None
        self.display_year: Optional[int] = None
        self.slots: List[WeekSlot] = []
        self.event_bus.subscribe(MEMORIES_CHANGED, self._on_memories_changed)

    # --- lifecycle -------------------------------------------------------------
    @property
    def active(self) -> bool:
        return self.birth_date is not None

    def enter(self, birth: Optional[date] = None, year: Optional[int] = None) -> bool:
        """Start (or resume) the grid view.

        With ``birth`` the date is persisted first; otherwise the saved one is
        used. Returns False when there is no birth date to resume with.
        """
        if birth is not None:
            self.birth_repository.save(birth)
        else:
            birth = self.birth_repository.load()
        if birth is None:
            logger.info("No saved birth date; staying on the starting page")
            return False
        if birth != self.grid_state.birth:
            # the grid cache drops every year built for the old date
            self.event_bus.publish(BIRTH_CHANGED, {"birth_date": birth, "store": self.store})
        self.birth_date = birth
        self._show(year if year is not None else self.today_provider().year)
        return True

    def return_home(self):
        """Suspend the birth anchor; the persisted value is kept for re-entry."""
        self.birth_date = None
        self.display_year = None
        self.slots = []
        logger.info("Returned to starting page")

    def close(self):
        self.event_bus.unsubscribe(MEMORIES_CHANGED, self._on_memories_changed)
        self.grid_state.detach(self.event_bus)

    # --- navigation --------------------------------------------------------------
    def _show(self, year: int):
        year = clamp_year(year, self.birth_date)
        # build fully before replacing the visible grid
        slots = self.grid_state.grid(year, self.today_provider())
        self.display_year = year
        self.slots = slots

    def navigate_to_year(self, year: int) -> bool:
        if not self.active:
            logger.info("Cannot navigate without a birth date")
            return False
        if year < self.birth_date.year:
            logger.info(f"Cannot navigate to year {year} - before birth year {self.birth_date.year}")
            return False
        if year == self.display_year:
            return False
        self._show(year)
        return True

    def can_go_back(self) -> bool:
        return self.active and self.display_year is not None and self.display_year > self.birth_date.year

    def current_week_index(self) -> int:
        if self.display_year is None:
            return -1
        return current_week_index(self.display_year, self.today_provider())

    def refresh(self):
        """Re-derive time/data dependent slot state (e.g. after midnight)."""
        if self.display_year is not None:
            self.slots = self.grid_state.grid(self.display_year, self.today_provider())
        return self.slots

    def _on_memories_changed(self, event_name, payload):
        year = (payload or {}).get("year")
        if year is not None and year == self.display_year:
            self.grid_state.refresh_year(year, self.today_provider())

    # --- collaborators -------------------------------------------------------------
    def memory_editor(self) -> MemoryEditor:
        return MemoryEditor(self.store, self.birth_date, self.today_provider, self.event_bus)

    def summary(self) -> dict:
        today = self.today_provider()
        age, weeks_lived = age_and_weeks_lived(self.birth_date, today)
        return {
            "active": self.active,
            "birth_date": self.birth_date.isoformat() if self.birth_date else None,
            "has_saved_birth_date": self.birth_repository.exists(),
            "display_year": self.display_year,
            "current_week_index": self.current_week_index(),
            "can_go_back": self.can_go_back(),
            "age": age,
            "weeks_lived": weeks_lived,
            "header": life_summary(self.birth_date, today) if self.active else None,
        }
