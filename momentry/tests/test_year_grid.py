import unittest
from datetime import date

from momentry.domain.Memory import MemoryEntry
from momentry.events.Event_Bus import BIRTH_CHANGED, EventBus
from momentry.infra.Year_Data_Repository import YearDataStore
from momentry.infra.storage import InMemoryStorage
from momentry.logic.calendar.birth_weeks import weeks_since_birth
from momentry.logic.grid.year_grid import (
    YearGridState,
    clamp_year,
    current_week_index,
    honeycomb_positions,
    initialize_year,
    refresh,
)

TODAY = date(2024, 5, 15)  # Wednesday of ISO week 20
BIRTH = date(1990, 5, 15)


def _add_memory(store, year, slot_index, text="note"):
    records = store.load(year)
    records[slot_index].memories.append(MemoryEntry(text=text, day=date(year, 6, 1)))
    store.save(year, records)


class TestInitializeYear(unittest.TestCase):
    def setUp(self):
        self.store = YearDataStore(InMemoryStorage(), lambda: TODAY)

    def test_always_52_slots(self):
        for year in (2020, 2021, 2024, 2026):  # 53 and 52 week years alike
            slots = initialize_year(year, BIRTH, TODAY, self.store)
            self.assertEqual(len(slots), 52)
            self.assertEqual([s.slot_index for s in slots], list(range(52)))
            self.assertTrue(all(s.year == year for s in slots))
            self.assertFalse(any(s.has_data for s in slots))

    def test_past_and_current_flags(self):
        slots = initialize_year(2024, BIRTH, TODAY, self.store)
        current = [s.slot_index for s in slots if s.is_current_week]
        self.assertEqual(current, [19])
        self.assertTrue(all(s.is_past for s in slots[:20]))
        self.assertFalse(any(s.is_past for s in slots[20:]))

    def test_no_current_week_in_other_years(self):
        for year in (2023, 2025):
            slots = initialize_year(year, BIRTH, TODAY, self.store)
            self.assertFalse(any(s.is_current_week for s in slots))

    def test_current_week_follows_iso_year(self):
        new_years_eve = date(2024, 12, 31)  # ISO week 1 of 2025
        self.assertFalse(any(s.is_current_week for s in initialize_year(2024, BIRTH, new_years_eve, self.store)))
        slots_2025 = initialize_year(2025, BIRTH, new_years_eve, self.store)
        self.assertTrue(slots_2025[0].is_current_week)
        self.assertEqual(current_week_index(2025, new_years_eve), 0)
        self.assertEqual(current_week_index(2024, new_years_eve), -1)

    def test_date_ranges_and_weeks_since_birth(self):
        slots = initialize_year(2024, BIRTH, TODAY, self.store)
        self.assertEqual(slots[0].date_range.monday, date(2024, 1, 1))
        self.assertEqual(slots[51].date_range.sunday, date(2024, 12, 29))
        for slot in slots:
            self.assertEqual(slot.weeks_since_birth, weeks_since_birth(slot.slot_index, 2024, BIRTH))

    def test_before_birth_slots(self):
        birth = date(2024, 3, 6)  # Wednesday of ISO week 10
        slots = initialize_year(2024, birth, TODAY, self.store)
        before = [s.slot_index for s in slots if s.is_before_birth]
        self.assertEqual(before, list(range(10)))
        for slot in slots[:10]:
            self.assertEqual(slot.weeks_since_birth, 0)
            self.assertFalse(slot.is_interactive)
        self.assertEqual(slots[10].weeks_since_birth, 1)
        self.assertEqual(slots[11].weeks_since_birth, 2)

    def test_without_birth_date(self):
        slots = initialize_year(2024, None, TODAY, self.store)
        self.assertEqual([s.weeks_since_birth for s in slots], list(range(1, 53)))
        self.assertFalse(any(s.is_before_birth for s in slots))

    def test_clamped_to_birth_year(self):
        birth = date(2024, 3, 6)
        slots = initialize_year(2023, birth, TODAY, self.store)
        self.assertTrue(all(s.year == 2024 for s in slots))
        self.assertEqual(clamp_year(2023, birth), 2024)
        self.assertEqual(clamp_year(2025, birth), 2025)
        self.assertEqual(clamp_year(1900, None), 1900)

    def test_has_data_from_store(self):
        _add_memory(self.store, 2024, 3)
        slots = initialize_year(2024, BIRTH, TODAY, self.store)
        self.assertEqual([s.slot_index for s in slots if s.has_data], [3])

    def test_goal_flag(self):
        _add_memory(self.store, 2024, 30)
        _add_memory(self.store, 2024, 2)
        slots = initialize_year(2024, BIRTH, TODAY, self.store)
        self.assertTrue(slots[30].is_goal)
        self.assertFalse(slots[2].is_goal)

    def test_honeycomb_layout(self):
        positions = list(honeycomb_positions())
        self.assertEqual(len(positions), 52)
        slots = initialize_year(2024, BIRTH, TODAY, self.store)
        self.assertEqual((slots[0].row, slots[0].column), (0, 0))
        self.assertEqual((slots[7].row, slots[7].column), (1, 0))
        self.assertEqual((slots[14].row, slots[14].column), (1, 7))
        self.assertEqual((slots[51].row, slots[51].column), (6, 6))


class TestRefresh(unittest.TestCase):
    def setUp(self):
        self.store = YearDataStore(InMemoryStorage(), lambda: TODAY)
        self.slots = initialize_year(2024, BIRTH, TODAY, self.store)

    def test_picks_up_new_data_without_rebuilding(self):
        ranges = [s.date_range for s in self.slots]
        _add_memory(self.store, 2024, 25)
        refreshed = refresh(2024, self.slots, BIRTH, TODAY, self.store)
        self.assertIs(refreshed, self.slots)
        self.assertTrue(self.slots[25].has_data)
        for slot, week_range in zip(self.slots, ranges):
            self.assertIs(slot.date_range, week_range)

    def test_idempotent(self):
        _add_memory(self.store, 2024, 4)
        first = [s.state() for s in refresh(2024, self.slots, BIRTH, TODAY, self.store)]
        second = [s.state() for s in refresh(2024, self.slots, BIRTH, TODAY, self.store)]
        self.assertEqual(first, second)

    def test_day_tick_moves_current_week(self):
        refresh(2024, self.slots, BIRTH, date(2024, 5, 20), self.store)
        self.assertEqual([s.slot_index for s in self.slots if s.is_current_week], [20])
        self.assertTrue(self.slots[19].is_past)
        self.assertFalse(self.slots[20].is_past)

    def test_year_tick_clears_current_week(self):
        refresh(2024, self.slots, BIRTH, date(2025, 1, 6), self.store)
        self.assertFalse(any(s.is_current_week for s in self.slots))
        self.assertTrue(all(s.is_past for s in self.slots))


class TestYearGridState(unittest.TestCase):
    def setUp(self):
        self.store = YearDataStore(InMemoryStorage(), lambda: TODAY)
        self.state = YearGridState(self.store, BIRTH)

    def test_caches_per_year(self):
        first = self.state.grid(2024, TODAY)
        self.assertIs(self.state.grid(2024, TODAY), first)
        self.assertTrue(self.state.is_cached(2024))
        self.assertFalse(self.state.is_cached(2025))

    def test_cached_grid_is_refreshed(self):
        slots = self.state.grid(2024, TODAY)
        _add_memory(self.store, 2024, 8)
        self.assertTrue(self.state.grid(2024, TODAY)[8].has_data)
        self.assertTrue(slots[8].has_data)

    def test_birth_change_rebuilds_every_year(self):
        old_2024 = self.state.grid(2024, TODAY)
        self.state.grid(2025, TODAY)
        new_birth = date(2000, 1, 1)
        self.state.set_birth_date(new_birth)
        self.assertFalse(self.state.is_cached(2025))
        rebuilt = self.state.grid(2024, TODAY)
        self.assertIsNot(rebuilt, old_2024)
        expected = initialize_year(2024, new_birth, TODAY, self.store)
        self.assertEqual([s.to_dict() for s in rebuilt], [s.to_dict() for s in expected])

    def test_same_birth_keeps_cache(self):
        slots = self.state.grid(2024, TODAY)
        self.state.set_birth_date(BIRTH)
        self.assertIs(self.state.grid(2024, TODAY), slots)

    def test_clamps_requested_year(self):
        slots = self.state.grid(1980, TODAY)
        self.assertTrue(all(s.year == 1990 for s in slots))

    def test_invalidate_and_slot_lookup(self):
        slots = self.state.grid(2024, TODAY)
        self.state.invalidate(2024)
        self.assertIsNot(self.state.grid(2024, TODAY), slots)
        self.assertEqual(self.state.slot(2024, 19, TODAY).slot_index, 19)
        self.assertIsNone(self.state.slot(2024, 52, TODAY))
        self.assertIsNone(self.state.refresh_year(2030, TODAY))

    def test_follows_birth_changes_for_its_store(self):
        bus = EventBus()
        self.state.attach(bus)
        slots = self.state.grid(2024, TODAY)
        other_store = YearDataStore(InMemoryStorage(), lambda: TODAY)
        bus.publish(BIRTH_CHANGED, {"birth_date": date(2000, 1, 1), "store": other_store})
        self.assertIs(self.state.grid(2024, TODAY), slots)

        bus.publish(BIRTH_CHANGED, {"birth_date": date(2000, 1, 1), "store": self.store})
        self.assertEqual(self.state.birth, date(2000, 1, 1))
        self.assertIsNot(self.state.grid(2024, TODAY), slots)

        self.state.detach(bus)
        bus.publish(BIRTH_CHANGED, {"birth_date": BIRTH, "store": self.store})
        self.assertEqual(self.state.birth, date(2000, 1, 1))


if __name__ == '__main__':
    unittest.main()
