"""Routine endpoints: browse public or own routines, CRUD and clone."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gymjournal.api.deps import get_current_user_id
from gymjournal.database import get_db
from gymjournal.models.routine import Routine
from gymjournal.routines import service
from gymjournal.schemas.routine import (
    PaginatedRoutines,
    RoutineCreate,
    RoutineRead,
    RoutineSummary,
    RoutineUpdate,
)

router = APIRouter(prefix="/api/routines", tags=["routines"])


@router.get("", response_model=PaginatedRoutines)
async def list_routines(
    mine: bool = False,
    search: str | None = Query(default=None, max_length=100),
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=20, ge=1, le=50),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> PaginatedRoutines:
    """Public routines, or with ``mine=true`` the caller's own including private ones."""
    routines, total = await service.list_routines(session, user_id, mine, search, page, per_page)
    return PaginatedRoutines(
        items=[RoutineSummary.model_validate(r) for r in routines],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/{routine_id}", response_model=RoutineRead)
async def get_routine(
    routine_id: int,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> Routine:
    return await service.get_visible_routine(session, user_id, routine_id)


@router.post("", response_model=RoutineRead, status_code=201)
async def create_routine(
    body: RoutineCreate,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> Routine:
    return await service.create_routine(session, user_id, body)


@router.put("/{routine_id}", response_model=RoutineRead)
async def update_routine(
    routine_id: int,
    body: RoutineUpdate,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> Routine:
    """Partial update; only the creator may edit."""
    return await service.update_routine(session, user_id, routine_id, body)


@router.delete("/{routine_id}", status_code=204)
async def delete_routine(
    routine_id: int,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> None:
    await service.delete_routine(session, user_id, routine_id)


@router.post("/{routine_id}/clone", response_model=RoutineRead, status_code=201)
async def clone_routine(
    routine_id: int,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> Routine:
    """Copy a public (or own) routine into a private routine owned by the caller."""
    return await service.clone_routine(session, user_id, routine_id)
