"""Water intake log: entries plus daily totals against the configured goal."""

from collections import defaultdict
from datetime import date, datetime, time, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gymjournal.config import get_settings
from gymjournal.errors import ForbiddenError, NotFoundError
from gymjournal.models.water import WaterIntakeEntry
from gymjournal.schemas.water import (
    DailyWaterSummary,
    WaterDayTotal,
    WaterEntryCreate,
    WaterEntryRead,
    WaterEntryUpdate,
)


def _progress_percent(total_ml: int, goal_ml: int) -> int:
    return min(int(total_ml / goal_ml * 100), 100)


def _day_total(day: date, total_ml: int) -> WaterDayTotal:
    goal_ml = get_settings().water_daily_goal_ml
    return WaterDayTotal(
        day=day,
        total_ml=total_ml,
        goal_ml=goal_ml,
        progress_percent=_progress_percent(total_ml, goal_ml),
    )


async def _find_between(
    session: AsyncSession, user_id: str, start: date, end: date
) -> list[WaterIntakeEntry]:
    """Entries logged from ``start`` through ``end`` (both inclusive), oldest first."""
    stmt = (
        select(WaterIntakeEntry)
        .where(
            WaterIntakeEntry.user_id == user_id,
            WaterIntakeEntry.logged_at >= datetime.combine(start, time.min),
            WaterIntakeEntry.logged_at < datetime.combine(end + timedelta(days=1), time.min),
        )
        .order_by(WaterIntakeEntry.logged_at, WaterIntakeEntry.id)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def log_water(
    session: AsyncSession, user_id: str, body: WaterEntryCreate
) -> WaterIntakeEntry:
    entry = WaterIntakeEntry(
        user_id=user_id,
        logged_at=body.logged_at or datetime.now(),
        amount_ml=body.amount_ml,
        notes=body.notes.strip(),
    )
    session.add(entry)
    await session.commit()
    await session.refresh(entry)
    return entry


async def get_daily_summary(session: AsyncSession, user_id: str, day: date) -> DailyWaterSummary:
    entries = await _find_between(session, user_id, day, day)
    total = _day_total(day, sum(e.amount_ml for e in entries))
    return DailyWaterSummary(
        **total.model_dump(),
        entries=[WaterEntryRead.model_validate(e) for e in entries],
    )


async def get_history(
    session: AsyncSession, user_id: str, start: date, end: date
) -> list[WaterDayTotal]:
    """Daily totals for days with at least one entry, newest day first."""
    if start > end:
        raise ValueError("start_date must not be after end_date")

    totals: dict[date, int] = defaultdict(int)
    for entry in await _find_between(session, user_id, start, end):
        totals[entry.logged_at.date()] += entry.amount_ml
    return [_day_total(day, totals[day]) for day in sorted(totals, reverse=True)]


async def _get_owned_entry(session: AsyncSession, user_id: str, entry_id: int) -> WaterIntakeEntry:
    entry = await session.get(WaterIntakeEntry, entry_id)
    if entry is None:
        raise NotFoundError(f"Water entry {entry_id} not found")
    if entry.user_id != user_id:
        raise ForbiddenError(f"Water entry {entry_id} does not belong to this user")
    return entry


async def update_entry(
    session: AsyncSession, user_id: str, entry_id: int, body: WaterEntryUpdate
) -> WaterIntakeEntry:
    entry = await _get_owned_entry(session, user_id, entry_id)
    if body.amount_ml is not None:
        entry.amount_ml = body.amount_ml
    if body.notes is not None:
        entry.notes = body.notes.strip()
    await session.commit()
    await session.refresh(entry)
    return entry


async def delete_entry(session: AsyncSession, user_id: str, entry_id: int) -> None:
    entry = await _get_owned_entry(session, user_id, entry_id)
    await session.delete(entry)
    await session.commit()
