from fastapi import HTTPException, Request

from momentry.domain.Session import Session


def get_session(request: Request) -> Session:
    return request.app.state.session


def get_active_session(request: Request) -> Session:
    """Session with a birth date; 409 while on the starting page."""
    session = get_session(request)
    if not session.active:
        raise HTTPException(status_code=409, detail="No birth date set")
    return session
