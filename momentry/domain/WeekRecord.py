"""WeekRecord domain entity: the memories stored for one week slot of a year."""
from datetime import date
from typing import List, Optional

from momentry.domain.Memory import MemoryEntry


class WeekRecord:
    def __init__(self, memories: Optional[List[MemoryEntry]] = None):
        self.memories = list(memories) if memories else []

    def has_data(self) -> bool:
        return len(self.memories) > 0

    def find(self, memory_id: str) -> Optional[MemoryEntry]:
        return next((m for m in self.memories if m.id == memory_id), None)

    def sort_newest_first(self):
        self.memories.sort(key=lambda m: m.date, reverse=True)
        return self

    def __str__(self) -> str:
        return f"WeekRecord({len(self.memories)} memories)"

    __repr__ = __str__

    @staticmethod
    def from_dict(data, fallback_day: Optional[date] = None):
        d = data if isinstance(data, dict) else {}
        raw = d.get("memories")
        entries = raw if isinstance(raw, list) else []
        return WeekRecord([MemoryEntry.from_dict(m, fallback_day) for m in entries if isinstance(m, dict)])

    def to_dict(self):
        return {"memories": [m.to_dict() for m in self.memories]}
