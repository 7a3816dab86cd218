from fastapi import APIRouter, Depends

from momentry.api.dependencies import get_session
from momentry.domain.Session import Session
from momentry.logic.goals.countdown import upcoming_goals
from momentry.utilities.config import GOAL_LOOKAHEAD_YEARS, MAX_GOALS

router = APIRouter(prefix="/api", tags=["goals"])


@router.get("/goals")
def list_goals(session: Session = Depends(get_session)):
    """Nearest future goals; empty while no birth date is active."""
    goals = upcoming_goals(session.store, session.birth_date, session.today_provider(),
                           lookahead_years=GOAL_LOOKAHEAD_YEARS, limit=MAX_GOALS)
    return {"count": len(goals), "goals": [g.to_dict() for g in goals]}
