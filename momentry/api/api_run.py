from datetime import date
from typing import Callable, Optional
import logging

from fastapi import FastAPI

from momentry.api.routes import goals, grid, weeks
from momentry.domain.Session import Session
from momentry.infra.storage import JsonFileStorage, KeyValueStorage
from momentry.utilities.config import STORAGE_FILE

# Logging
logger = logging.getLogger("momentry_app")


def create_app(storage: Optional[KeyValueStorage] = None,
               today_provider: Callable[[], date] = date.today,
               session: Optional[Session] = None) -> FastAPI:
    """Build the API around one session (default: JSON file storage)."""
    if session is None:
        session = Session(storage or JsonFileStorage(STORAGE_FILE), today_provider)
    app = FastAPI(title="Momentry - Life in Weeks API")
    app.state.session = session

    app.include_router(grid.router)
    app.include_router(weeks.router)
    app.include_router(goals.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # Resume with a previously saved birth date, like reopening the page
    if session.enter():
        logger.info("Resumed session for birth date %s (year %s)", session.birth_date, session.display_year)
    return app


app = create_app()
