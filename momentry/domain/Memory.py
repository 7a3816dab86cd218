"""Memory domain entity: a note (memory or goal) attached to one week."""
import time
from datetime import date, datetime, timezone
from typing import Optional
from uuid import uuid4

from momentry.utilities.constants import DATE_FORMAT


def generate_memory_id() -> str:
    return f"mem_{int(time.time() * 1000)}_{uuid4().hex[:9]}"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class MemoryEntry:
    def __init__(self, text: str = "", day: Optional[date] = None, title: Optional[str] = None,
                 memory_id: Optional[str] = None, timestamp: Optional[str] = None,
                 image_data: Optional[str] = None):
        self.id = memory_id or generate_memory_id()
        self.title = title or None
        self.text = text or ""
        self.date = day or date.today()
        self.timestamp = timestamp or _now_iso()
        # opaque data URL; resizing happens in the browser
        self.image_data = image_data or None

    def touch(self):
        self.timestamp = _now_iso()

    @property
    def label(self) -> str:
        return self.title or self.text or "Untitled"

    def __str__(self) -> str:
        return f"{self.id} [{self.date.strftime(DATE_FORMAT)}] {self.label}"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, MemoryEntry):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data, fallback_day: Optional[date] = None):
        '''Creates a MemoryEntry from a stored dict, filling any missing field.'''
        d = dict(data) if isinstance(data, dict) else {}
        day = d.get("date")
        if isinstance(day, str):
            try:
                day = datetime.strptime(day[:10], DATE_FORMAT).date()
            except ValueError:
                day = None
        elif isinstance(day, datetime):
            day = day.date()
        elif not isinstance(day, date):
            day = None
        return MemoryEntry(
            text=d.get("text") or "",
            day=day or fallback_day,
            title=d.get("title"),
            memory_id=d.get("id"),
            timestamp=d.get("timestamp"),
            image_data=d.get("imageData"),
        )

    def to_dict(self):
        '''Converts the MemoryEntry to the persisted (browser compatible) shape.'''
        return {
            "id": self.id,
            "title": self.title,
            "text": self.text,
            "date": self.date.strftime(DATE_FORMAT),
            "timestamp": self.timestamp,
            "imageData": self.image_data,
        }
