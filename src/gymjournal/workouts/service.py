"""Workout sessions and sets: lifecycle, set CRUD, exercise history and personal bests."""

import logging
from datetime import datetime
from itertools import groupby

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gymjournal.config import get_settings
from gymjournal.errors import ForbiddenError, NotFoundError
from gymjournal.models.workout import WorkoutSession, WorkoutSet
from gymjournal.routines.service import get_visible_routine
from gymjournal.schemas.workout import (
    SessionItemGroup,
    WorkoutSessionCreate,
    WorkoutSessionRead,
    WorkoutSessionUpdate,
    WorkoutSetCreate,
    WorkoutSetRead,
    WorkoutSetUpdate,
)
from gymjournal.workouts.personal_best import evaluate_and_flag_personal_bests, parse_weight

logger = logging.getLogger(__name__)

IN_PROGRESS = "IN_PROGRESS"
COMPLETED = "COMPLETED"


# ── Lookups ─────────────────────────────────────────────────────────


async def _get_owned_session(
    session: AsyncSession, user_id: str, session_id: int
) -> WorkoutSession:
    workout = await session.get(WorkoutSession, session_id)
    if workout is None:
        raise NotFoundError(f"Workout session {session_id} not found")
    if workout.user_id != user_id:
        raise ForbiddenError(f"Workout session {session_id} does not belong to this user")
    return workout


async def _get_session_set(session: AsyncSession, session_id: int, set_id: int) -> WorkoutSet:
    workout_set = await session.get(WorkoutSet, set_id)
    if workout_set is None:
        raise NotFoundError(f"Set {set_id} not found")
    if workout_set.session_id != session_id:
        raise NotFoundError(f"Set {set_id} does not belong to session {session_id}")
    return workout_set


async def _get_session_sets(session: AsyncSession, session_id: int) -> list[WorkoutSet]:
    stmt = (
        select(WorkoutSet)
        .where(WorkoutSet.session_id == session_id)
        .order_by(WorkoutSet.order_in_session, WorkoutSet.set_number, WorkoutSet.id)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def build_session_response(
    session: AsyncSession, workout: WorkoutSession
) -> WorkoutSessionRead:
    """Full session detail with sets grouped by their ``order_in_session`` slot."""
    sets = await _get_session_sets(session, workout.id)
    groups = []
    for order, slot in groupby(sets, key=lambda s: s.order_in_session):
        slot_sets = list(slot)
        first = slot_sets[0]
        groups.append(
            SessionItemGroup(
                order_in_session=order,
                item_type=first.item_type,
                exercise_id=first.exercise_id,
                exercise_name=first.exercise_name,
                sets=[WorkoutSetRead.model_validate(s) for s in slot_sets],
            )
        )

    response = WorkoutSessionRead.model_validate(workout)
    response.exercises = groups
    return response


# ── Sessions ────────────────────────────────────────────────────────


def build_planned_sets(items: list[dict], session_id: int, user_id: str) -> list[WorkoutSet]:
    """Expand stored routine items into planned set rows.

    An EXERCISE item becomes one row per planned set (at least one); REST and
    CARDIO items become a single row each. An item's ``order`` of 0 falls back
    to its 1-based list position.
    """
    planned = []
    for position, item in enumerate(items, start=1):
        item_type = item.get("item_type", "EXERCISE").upper()
        common = {
            "session_id": session_id,
            "user_id": user_id,
            "item_type": item_type,
            "order_in_session": item.get("order") or position,
        }
        if item_type == "EXERCISE":
            for set_number in range(1, max(item.get("sets") or 1, 1) + 1):
                planned.append(
                    WorkoutSet(
                        **common,
                        exercise_id=item.get("exercise_id") or 0,
                        exercise_name=item.get("exercise_name") or "",
                        set_number=set_number,
                        planned_reps=item.get("reps_per_set") or 0,
                        planned_weight_kg=item.get("weight_kg") or "0",
                        notes=item.get("notes") or "",
                    )
                )
        elif item_type == "REST":
            planned.append(
                WorkoutSet(**common, duration_seconds=item.get("duration_seconds") or 0)
            )
        else:
            planned.append(
                WorkoutSet(
                    **common,
                    exercise_name=item.get("cardio_name") or "Cardio",
                    duration_seconds=(item.get("duration_minutes") or 0) * 60,
                )
            )
    return planned


async def start_session(
    session: AsyncSession, user_id: str, body: WorkoutSessionCreate
) -> WorkoutSession:
    """Start a session, free-form or pre-populated from a visible routine."""
    now = datetime.utcnow()
    today = now.date().isoformat()
    routine = None
    if body.routine_id is not None:
        routine = await get_visible_routine(session, user_id, body.routine_id)

    default_name = f"{routine.name} - {today}" if routine else f"Free Workout - {today}"
    workout = WorkoutSession(
        user_id=user_id,
        routine_id=routine.id if routine else None,
        routine_name=routine.name if routine else "",
        name=(body.name or "").strip() or default_name,
        status=IN_PROGRESS,
        started_at=body.started_at or now,
        notes="",
    )
    session.add(workout)
    await session.flush()

    if routine is not None:
        session.add_all(build_planned_sets(routine.items or [], workout.id, user_id))
        logger.info(
            "Session %d started from routine %d for user %s", workout.id, routine.id, user_id
        )

    await session.commit()
    await session.refresh(workout)
    return workout


async def list_sessions(
    session: AsyncSession,
    user_id: str,
    status: str | None = None,
    page: int = 1,
    per_page: int = 20,
) -> tuple[list[WorkoutSession], int]:
    """One page of the user's sessions, newest first, plus the total count."""
    base_query = select(WorkoutSession).where(WorkoutSession.user_id == user_id)
    count_query = select(func.count(WorkoutSession.id)).where(WorkoutSession.user_id == user_id)
    if status:
        base_query = base_query.where(WorkoutSession.status == status.upper())
        count_query = count_query.where(WorkoutSession.status == status.upper())

    total = (await session.execute(count_query)).scalar_one()
    result = await session.execute(
        base_query.order_by(WorkoutSession.started_at.desc(), WorkoutSession.id.desc())
        .offset((page - 1) * per_page)
        .limit(per_page)
    )
    return list(result.scalars().all()), total


async def get_session(session: AsyncSession, user_id: str, session_id: int) -> WorkoutSessionRead:
    workout = await _get_owned_session(session, user_id, session_id)
    return await build_session_response(session, workout)


async def patch_session(
    session: AsyncSession, user_id: str, session_id: int, body: WorkoutSessionUpdate
) -> WorkoutSessionRead:
    workout = await _get_owned_session(session, user_id, session_id)
    if body.name is not None:
        workout.name = body.name.strip()
    if body.notes is not None:
        workout.notes = body.notes
    await session.commit()
    await session.refresh(workout)
    return await build_session_response(session, workout)


async def complete_session(
    session: AsyncSession, user_id: str, session_id: int
) -> WorkoutSessionRead:
    """Mark the session COMPLETED and flag personal bests among its exercise sets.

    Calling it on an already completed session changes nothing. Status change
    and PB flags are committed together.
    """
    workout = await _get_owned_session(session, user_id, session_id)
    if workout.status == COMPLETED:
        return await build_session_response(session, workout)

    workout.status = COMPLETED
    workout.completed_at = datetime.utcnow()

    exercise_sets = [
        s for s in await _get_session_sets(session, session_id) if s.item_type == "EXERCISE"
    ]

    async def fetch_history(uid: str, exercise_id: int) -> list[WorkoutSet]:
        return await find_exercise_history(session, uid, exercise_id)

    async def flag(set_id: int) -> None:
        await mark_personal_best(session, set_id)

    await evaluate_and_flag_personal_bests(
        session_id, user_id, exercise_sets, fetch_history, flag
    )

    await session.commit()
    await session.refresh(workout)
    return await build_session_response(session, workout)


async def delete_session(session: AsyncSession, user_id: str, session_id: int) -> None:
    workout = await _get_owned_session(session, user_id, session_id)
    await session.execute(delete(WorkoutSet).where(WorkoutSet.session_id == session_id))
    await session.delete(workout)
    await session.commit()


# ── Sets ────────────────────────────────────────────────────────────


async def add_set(
    session: AsyncSession, user_id: str, session_id: int, body: WorkoutSetCreate
) -> WorkoutSet:
    await _get_owned_session(session, user_id, session_id)
    data = body.model_dump()
    data["item_type"] = data["item_type"].upper()
    data["exercise_name"] = data["exercise_name"].strip()
    workout_set = WorkoutSet(session_id=session_id, user_id=user_id, is_personal_best=False, **data)
    session.add(workout_set)
    await session.commit()
    await session.refresh(workout_set)
    return workout_set


async def update_set(
    session: AsyncSession, user_id: str, session_id: int, set_id: int, body: WorkoutSetUpdate
) -> WorkoutSet:
    """Partial update; only fields present in the request are applied."""
    await _get_owned_session(session, user_id, session_id)
    workout_set = await _get_session_set(session, session_id, set_id)

    update_data = body.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(workout_set, field, value)

    await session.commit()
    await session.refresh(workout_set)
    return workout_set


async def delete_set(session: AsyncSession, user_id: str, session_id: int, set_id: int) -> None:
    await _get_owned_session(session, user_id, session_id)
    workout_set = await _get_session_set(session, session_id, set_id)
    await session.delete(workout_set)
    await session.commit()


# ── Set store used by PB detection ──────────────────────────────────


async def find_exercise_history(
    session: AsyncSession, user_id: str, exercise_id: int
) -> list[WorkoutSet]:
    """Completed EXERCISE sets for one exercise, most recent first."""
    stmt = (
        select(WorkoutSet)
        .where(
            WorkoutSet.user_id == user_id,
            WorkoutSet.exercise_id == exercise_id,
            WorkoutSet.item_type == "EXERCISE",
            WorkoutSet.completed_at.is_not(None),
        )
        .order_by(WorkoutSet.completed_at.desc(), WorkoutSet.id.desc())
        .limit(get_settings().exercise_history_limit)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def mark_personal_best(session: AsyncSession, set_id: int) -> None:
    """Raise the PB flag on a set. Does not commit."""
    workout_set = await session.get(WorkoutSet, set_id)
    if workout_set is None:
        raise NotFoundError(f"Set {set_id} not found")
    workout_set.is_personal_best = True


# ── Exercise history & PBs ──────────────────────────────────────────


async def get_exercise_history(
    session: AsyncSession, user_id: str, exercise_id: int, page: int = 1, per_page: int = 50
) -> tuple[list[WorkoutSet], int]:
    history = await find_exercise_history(session, user_id, exercise_id)
    offset = (page - 1) * per_page
    return history[offset : offset + per_page], len(history)


async def get_personal_bests(
    session: AsyncSession, user_id: str, exercise_id: int
) -> list[WorkoutSet]:
    """Heaviest set per distinct rep count, highest rep count first."""
    history = await find_exercise_history(session, user_id, exercise_id)

    best_by_reps: dict[int, WorkoutSet] = {}
    for workout_set in history:
        if workout_set.actual_reps <= 0:
            continue
        current = best_by_reps.get(workout_set.actual_reps)
        if current is None or _weight_or_zero(workout_set) > _weight_or_zero(current):
            best_by_reps[workout_set.actual_reps] = workout_set

    return [best_by_reps[reps] for reps in sorted(best_by_reps, reverse=True)]


def _weight_or_zero(workout_set: WorkoutSet) -> float:
    weight = parse_weight(workout_set.actual_weight_kg)
    return weight if weight is not None else 0.0
