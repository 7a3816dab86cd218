"""Per-year week records on top of a key-value storage.

One storage entry per year (``momentryData_<year>``) holds a versioned
envelope::

    {"schema_version": 2, "year": 2024, "weeks": [{"memories": [...]}, ... x52]}

Older versions wrote bare lists, either ``[{"memory": "text"}, ...]``
(v0) or ``[{"memories": [...]}, ...]`` (v1), and the very first build kept a
single list under ``momentryData`` with no year at all. All of these are
recognised here, converted to WeekRecord objects and written back as v2, so
callers only ever see the normalised shape. The year-less entry is merged
into the current year once, when the store is built.
"""
import json
import logging
from datetime import date
from threading import RLock
from typing import Callable, List, Optional

from momentry.domain.Memory import MemoryEntry
from momentry.domain.WeekRecord import WeekRecord
from momentry.infra.storage import KeyValueStorage
from momentry.utilities.constants import LEGACY_DATA_KEY, SCHEMA_VERSION, SLOTS_PER_YEAR, YEAR_KEY_PREFIX

logger = logging.getLogger(__name__)


class CorruptYearData(ValueError):
    """Stored value is not one of the known schema versions."""


def year_key(year: int) -> str:
    return f"{YEAR_KEY_PREFIX}{year}"


def empty_year() -> List[WeekRecord]:
    return [WeekRecord() for _ in range(SLOTS_PER_YEAR)]


def detect_schema_version(parsed) -> int:
    """Classify a decoded storage value; raises CorruptYearData if unknown."""
    if isinstance(parsed, dict):
        version = parsed.get("schema_version")
        if version == SCHEMA_VERSION and isinstance(parsed.get("weeks"), list):
            return SCHEMA_VERSION
        raise CorruptYearData(f"unsupported envelope (schema_version={version!r})")
    if not isinstance(parsed, list):
        raise CorruptYearData(f"expected list or envelope, got {type(parsed).__name__}")
    version = 1
    for i, week in enumerate(parsed):
        if not isinstance(week, dict):
            raise CorruptYearData(f"week {i} is {type(week).__name__}, expected object")
        if isinstance(week.get("memory"), str) and "memories" not in week:
            version = 0
        elif "memories" in week and not isinstance(week["memories"], list):
            raise CorruptYearData(f"week {i} has non-list memories")
    return version


def _legacy_week(week: dict, fallback_day: date) -> WeekRecord:
    text = week.get("memory")
    if isinstance(text, str) and "memories" not in week:
        # v0: one untitled memory per non-empty string
        return WeekRecord([MemoryEntry(text=text, day=fallback_day)] if text else [])
    return WeekRecord.from_dict(week, fallback_day)


def _fit(records: List[WeekRecord]) -> List[WeekRecord]:
    records = records[:SLOTS_PER_YEAR]
    records.extend(WeekRecord() for _ in range(SLOTS_PER_YEAR - len(records)))
    return records


class YearDataStore:
    def __init__(self, storage: KeyValueStorage, today_provider: Callable[[], date] = date.today):
        self.storage = storage
        self.today_provider = today_provider
        # held across load-mutate-save by writers (API routes run on a threadpool)
        self.lock = RLock()
        self._migrate_legacy_global()

    # --- decoding ------------------------------------------------------------
    def _decode(self, raw: str) -> tuple:
        parsed = json.loads(raw)
        version = detect_schema_version(parsed)
        today = self.today_provider()
        if version == SCHEMA_VERSION:
            weeks = [WeekRecord.from_dict(w, today) for w in parsed["weeks"]]
        else:
            weeks = [_legacy_week(w, today) for w in parsed]
        return _fit(weeks), version

    def _migrate_legacy_global(self):
        """Move the year-less ``momentryData`` entry into the current year."""
        raw = self.storage.load(LEGACY_DATA_KEY)
        if raw is None:
            return
        try:
            legacy, version = self._decode(raw)
        except (json.JSONDecodeError, CorruptYearData) as e:
            logger.error(f"Dropping unreadable legacy data: {e}")
            self.storage.remove(LEGACY_DATA_KEY)
            return
        year = self.today_provider().year
        existing = self._load_year(year)
        for current, old in zip(existing, legacy):
            current.memories.extend(old.memories)
        self.save(year, existing)
        self.storage.remove(LEGACY_DATA_KEY)
        logger.info(f"Migrated legacy data (schema v{version}) into {year_key(year)}")

    def _load_year(self, year: int) -> List[WeekRecord]:
        key = year_key(year)
        raw = self.storage.load(key)
        if raw is None:
            return empty_year()
        try:
            records, version = self._decode(raw)
        except (json.JSONDecodeError, CorruptYearData) as e:
            logger.error(f"Error parsing data for year {year}: {e}. Resetting it.")
            self.storage.remove(key)
            return empty_year()
        if version != SCHEMA_VERSION:
            self.save(year, records)
            logger.info(f"Upgraded {key} from schema v{version} to v{SCHEMA_VERSION}")
        return records

    # --- public contract -------------------------------------------------------
    def load(self, year: int) -> List[WeekRecord]:
        """Always returns SLOTS_PER_YEAR records, empty when nothing is stored."""
        with self.lock:
            return self._load_year(year)

    def save(self, year: int, records: List[WeekRecord]) -> None:
        payload = {
            "schema_version": SCHEMA_VERSION,
            "year": year,
            "weeks": [r.to_dict() for r in _fit(list(records))],
        }
        with self.lock:
            self.storage.save(year_key(year), json.dumps(payload, ensure_ascii=False))
        logger.debug(f"Saved {year_key(year)}")

    def record(self, year: int, week_index: int) -> Optional[WeekRecord]:
        records = self.load(year)
        if 0 <= week_index < len(records):
            return records[week_index]
        return None
