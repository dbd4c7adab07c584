"""Per-exercise history and personal bests for the calling user."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gymjournal.api.deps import get_current_user_id
from gymjournal.database import get_db
from gymjournal.models.workout import WorkoutSet
from gymjournal.schemas.workout import PaginatedSets, WorkoutSetRead
from gymjournal.workouts import service

router = APIRouter(prefix="/api/exercises", tags=["exercises"])


@router.get("/{exercise_id}/history", response_model=PaginatedSets)
async def get_exercise_history(
    exercise_id: int,
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=50, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> PaginatedSets:
    """Completed sets for this exercise, most recent first."""
    sets, total = await service.get_exercise_history(
        session, user_id, exercise_id, page, per_page
    )
    return PaginatedSets(
        items=[WorkoutSetRead.model_validate(s) for s in sets],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/{exercise_id}/pbs", response_model=list[WorkoutSetRead])
async def get_personal_bests(
    exercise_id: int,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> list[WorkoutSet]:
    """Heaviest set per rep count, highest rep count first."""
    return await service.get_personal_bests(session, user_id, exercise_id)
