from fastapi import APIRouter, Depends, HTTPException

from momentry.api.dependencies import get_active_session
from momentry.domain.Session import Session
from momentry.logic.memories.editor import MemoryValidationError
from momentry.utilities.validators import MemoryInput

router = APIRouter(prefix="/api/weeks", tags=["weeks"])


def _unresolved(weeks_since_birth: int):
    return HTTPException(status_code=404, detail=f"Could not determine week information for {weeks_since_birth}")


@router.get("/{weeks_since_birth}")
def read_week(weeks_since_birth: int, session: Session = Depends(get_active_session)):
    details = session.memory_editor().describe_week(weeks_since_birth)
    if details is None:
        raise _unresolved(weeks_since_birth)
    return details.to_dict()


@router.post("/{weeks_since_birth}/memories", status_code=201)
def add_memory(weeks_since_birth: int, payload: MemoryInput, session: Session = Depends(get_active_session)):
    try:
        memory = session.memory_editor().add_memory(
            weeks_since_birth, payload.text, payload.date, title=payload.title, image_data=payload.image_data
        )
    except MemoryValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if memory is None:
        raise _unresolved(weeks_since_birth)
    return memory.to_dict()


@router.put("/{weeks_since_birth}/memories/{memory_id}")
def edit_memory(weeks_since_birth: int, memory_id: str, payload: MemoryInput,
                session: Session = Depends(get_active_session)):
    try:
        memory = session.memory_editor().edit_memory(
            weeks_since_birth, memory_id, payload.text, payload.date, title=payload.title
        )
    except MemoryValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if memory is None:
        raise HTTPException(status_code=404, detail="Memory not found")
    return memory.to_dict()


@router.delete("/{weeks_since_birth}/memories/{memory_id}")
def delete_memory(weeks_since_birth: int, memory_id: str, session: Session = Depends(get_active_session)):
    if not session.memory_editor().delete_memory(weeks_since_birth, memory_id):
        raise HTTPException(status_code=404, detail="Memory not found")
    return {"status": "deleted", "id": memory_id}
