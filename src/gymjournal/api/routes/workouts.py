"""Workout session endpoints: lifecycle, completion with PB detection, and set CRUD."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gymjournal.api.deps import get_current_user_id
from gymjournal.database import get_db
from gymjournal.models.workout import WorkoutSet
from gymjournal.schemas.workout import (
    PaginatedSessions,
    WorkoutSessionCreate,
    WorkoutSessionRead,
    WorkoutSessionSummary,
    WorkoutSessionUpdate,
    WorkoutSetCreate,
    WorkoutSetRead,
    WorkoutSetUpdate,
)
from gymjournal.workouts import service

router = APIRouter(prefix="/api/workouts", tags=["workouts"])


@router.post("", response_model=WorkoutSessionRead, status_code=201)
async def start_session(
    body: WorkoutSessionCreate,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> WorkoutSessionRead:
    """Start a session, free-form or from a routine (its items become planned sets).

    The name defaults to "<routine> - <date>" or "Free Workout - <date>".
    """
    workout = await service.start_session(session, user_id, body)
    return await service.build_session_response(session, workout)


@router.get("", response_model=PaginatedSessions)
async def list_sessions(
    status: str | None = Query(
        default=None, pattern=r"^(IN_PROGRESS|COMPLETED|in_progress|completed)$"
    ),
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=20, ge=1, le=50),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> PaginatedSessions:
    """List sessions newest first, optionally filtered by status."""
    sessions, total = await service.list_sessions(session, user_id, status, page, per_page)
    return PaginatedSessions(
        items=[WorkoutSessionSummary.model_validate(s) for s in sessions],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/{session_id}", response_model=WorkoutSessionRead)
async def get_session(
    session_id: int,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> WorkoutSessionRead:
    """Full session detail with sets grouped by slot."""
    return await service.get_session(session, user_id, session_id)


@router.patch("/{session_id}", response_model=WorkoutSessionRead)
async def patch_session(
    session_id: int,
    body: WorkoutSessionUpdate,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> WorkoutSessionRead:
    return await service.patch_session(session, user_id, session_id, body)


@router.post("/{session_id}/complete", response_model=WorkoutSessionRead)
async def complete_session(
    session_id: int,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> WorkoutSessionRead:
    """Mark the session completed and flag personal bests.

    Idempotent: completing an already completed session returns it unchanged.
    """
    return await service.complete_session(session, user_id, session_id)


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    session_id: int,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> None:
    """Delete the session and all of its sets."""
    await service.delete_session(session, user_id, session_id)


@router.post("/{session_id}/sets", response_model=WorkoutSetRead, status_code=201)
async def add_set(
    session_id: int,
    body: WorkoutSetCreate,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> WorkoutSet:
    """Add an EXERCISE, REST or CARDIO set to the session."""
    return await service.add_set(session, user_id, session_id, body)


@router.put("/{session_id}/sets/{set_id}", response_model=WorkoutSetRead)
async def update_set(
    session_id: int,
    set_id: int,
    body: WorkoutSetUpdate,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> WorkoutSet:
    """Update actual reps, weight, RPE, notes or completion time (partial update)."""
    return await service.update_set(session, user_id, session_id, set_id, body)


@router.delete("/{session_id}/sets/{set_id}", status_code=204)
async def delete_set(
    session_id: int,
    set_id: int,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> None:
    await service.delete_set(session, user_id, session_id, set_id)
