from typing import Optional

from fastapi import APIRouter, Depends, Query

from momentry.api.dependencies import get_active_session, get_session
from momentry.domain.Session import Session
from momentry.utilities.validators import BirthDateInput, NavigateInput

router = APIRouter(prefix="/api", tags=["grid"])


@router.get("/session")
def read_session(session: Session = Depends(get_session)):
    return session.summary()


@router.post("/birth-date")
def set_birth_date(payload: BirthDateInput, session: Session = Depends(get_session)):
    session.enter(payload.birth_date)
    return session.summary()


@router.post("/home")
def return_home(session: Session = Depends(get_session)):
    session.return_home()
    return session.summary()


@router.post("/enter")
def resume(session: Session = Depends(get_session)):
    """Resume with the saved birth date (starting page 'continue')."""
    entered = session.enter()
    return {"entered": entered, **session.summary()}


@router.get("/grid")
def read_grid(year: Optional[int] = Query(default=None), session: Session = Depends(get_active_session)):
    if year is not None and year != session.display_year:
        session.navigate_to_year(max(year, session.birth_date.year))
    else:
        session.refresh()
    return {
        "year": session.display_year,
        "current_week_index": session.current_week_index(),
        "can_go_back": session.can_go_back(),
        "slots": [slot.to_dict() for slot in session.slots],
    }


@router.post("/grid/navigate")
def navigate(payload: NavigateInput, session: Session = Depends(get_active_session)):
    navigated = session.navigate_to_year(payload.year)
    return {"navigated": navigated, "year": session.display_year, "can_go_back": session.can_go_back()}
