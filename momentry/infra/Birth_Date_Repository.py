import logging
from datetime import date, datetime
from typing import Optional

from momentry.infra.storage import KeyValueStorage
from momentry.utilities.constants import BIRTH_DATE_KEY, DATE_FORMAT

logger = logging.getLogger(__name__)


class BirthDateRepository:
    """Persists the birth date as a ``YYYY-MM-DD`` string."""

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def exists(self) -> bool:
        return self.storage.load(BIRTH_DATE_KEY) is not None

    def load(self) -> Optional[date]:
        raw = self.storage.load(BIRTH_DATE_KEY)
        if raw is None:
            return None
        try:
            return datetime.strptime(raw.strip()[:10], DATE_FORMAT).date()
        except ValueError:
            logger.warning(f"Ignoring unparsable stored birth date: {raw!r}")
            return None

    def save(self, birth: date) -> None:
        self.storage.save(BIRTH_DATE_KEY, birth.strftime(DATE_FORMAT))
        logger.info(f"Birth date saved: {birth.isoformat()}")
