"""Routine templates: browse, CRUD and clone."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gymjournal.errors import ForbiddenError, NotFoundError
from gymjournal.models.routine import Routine
from gymjournal.schemas.routine import RoutineCreate, RoutineItem, RoutineUpdate

logger = logging.getLogger(__name__)


def _dump_items(items: list[RoutineItem]) -> list[dict]:
    dumped = []
    for item in items:
        data = item.model_dump()
        data["item_type"] = data["item_type"].upper()
        dumped.append(data)
    return dumped


async def _get_routine(session: AsyncSession, routine_id: int) -> Routine:
    routine = await session.get(Routine, routine_id)
    if routine is None:
        raise NotFoundError(f"Routine {routine_id} not found")
    return routine


async def get_visible_routine(session: AsyncSession, user_id: str, routine_id: int) -> Routine:
    """A routine the user may read: any public one, or their own."""
    routine = await _get_routine(session, routine_id)
    if not routine.is_public and routine.created_by != user_id:
        raise ForbiddenError(f"Routine {routine_id} is private")
    return routine


async def _get_owned_routine(session: AsyncSession, user_id: str, routine_id: int) -> Routine:
    routine = await _get_routine(session, routine_id)
    if routine.created_by != user_id:
        raise ForbiddenError(f"Routine {routine_id} does not belong to this user")
    return routine


async def list_routines(
    session: AsyncSession,
    user_id: str,
    mine: bool = False,
    search: str | None = None,
    page: int = 1,
    per_page: int = 20,
) -> tuple[list[Routine], int]:
    """Public routines, or only the caller's own (public and private) when ``mine``.

    ``search`` is a case-insensitive substring match on the name.
    """
    if mine:
        condition = Routine.created_by == user_id
    else:
        condition = Routine.is_public.is_(True)
    base_query = select(Routine).where(condition)
    count_query = select(func.count(Routine.id)).where(condition)

    term = (search or "").strip()
    if term:
        pattern = f"%{term.lower()}%"
        base_query = base_query.where(func.lower(Routine.name).like(pattern))
        count_query = count_query.where(func.lower(Routine.name).like(pattern))

    total = (await session.execute(count_query)).scalar_one()
    result = await session.execute(
        base_query.order_by(Routine.updated_at.desc(), Routine.id.desc())
        .offset((page - 1) * per_page)
        .limit(per_page)
    )
    return list(result.scalars().all()), total


async def create_routine(session: AsyncSession, user_id: str, body: RoutineCreate) -> Routine:
    routine = Routine(
        name=body.name.strip(),
        description=body.description.strip(),
        items=_dump_items(body.items),
        estimated_minutes=body.estimated_minutes,
        tags=body.tags,
        is_public=body.is_public,
        created_by=user_id,
    )
    session.add(routine)
    await session.commit()
    await session.refresh(routine)
    return routine


async def update_routine(
    session: AsyncSession, user_id: str, routine_id: int, body: RoutineUpdate
) -> Routine:
    """Partial update by the creator only."""
    routine = await _get_owned_routine(session, user_id, routine_id)

    update_data = body.model_dump(exclude_unset=True, exclude_none=True)
    if "items" in update_data:
        update_data["items"] = _dump_items(body.items or [])
    for field in ("name", "description"):
        if field in update_data:
            update_data[field] = update_data[field].strip()
    for field, value in update_data.items():
        setattr(routine, field, value)

    await session.commit()
    await session.refresh(routine)
    return routine


async def delete_routine(session: AsyncSession, user_id: str, routine_id: int) -> None:
    routine = await _get_owned_routine(session, user_id, routine_id)
    await session.delete(routine)
    await session.commit()


async def clone_routine(session: AsyncSession, user_id: str, routine_id: int) -> Routine:
    """Private copy of a visible routine, owned by the caller."""
    source = await get_visible_routine(session, user_id, routine_id)
    clone = Routine(
        name=source.name,
        description=source.description,
        items=list(source.items),
        estimated_minutes=source.estimated_minutes,
        tags=list(source.tags),
        is_public=False,
        created_by=user_id,
    )
    session.add(clone)
    await session.commit()
    await session.refresh(clone)
    logger.info("Routine %s cloned as %s for %s", routine_id, clone.id, user_id)
    return clone
