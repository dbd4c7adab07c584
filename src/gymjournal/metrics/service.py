"""Body metric entries: logging, lookup by date, history and the latest-value snapshot."""

from datetime import date, datetime, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gymjournal.config import get_settings
from gymjournal.errors import ForbiddenError, NotFoundError
from gymjournal.metrics.snapshot import DERIVED_TYPES, build_snapshot
from gymjournal.models.metric import BodyMetricEntry
from gymjournal.schemas.metric import MetricEntryCreate, MetricEntryUpdate, MetricSnapshotItem


async def batch_log(
    session: AsyncSession, user_id: str, entries: list[MetricEntryCreate]
) -> list[BodyMetricEntry]:
    """Store every entry of the batch, or none of them.

    Raises ValueError if any entry targets a derived metric type.
    """
    for req in entries:
        if req.metric_type.strip() in DERIVED_TYPES:
            raise ValueError(
                f"'{req.metric_type}' is a computed metric and cannot be stored directly."
            )

    rows = [
        BodyMetricEntry(
            user_id=user_id,
            metric_type=req.metric_type.strip(),
            value=req.value,
            unit=req.unit.strip(),
            log_date=req.log_date,
            notes=req.notes.strip(),
        )
        for req in entries
    ]
    session.add_all(rows)
    await session.commit()
    for row in rows:
        await session.refresh(row)
    return rows


async def get_entries_for_date(
    session: AsyncSession, user_id: str, log_date: date
) -> list[BodyMetricEntry]:
    stmt = (
        select(BodyMetricEntry)
        .where(BodyMetricEntry.user_id == user_id, BodyMetricEntry.log_date == log_date)
        .order_by(BodyMetricEntry.metric_type)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_history(
    session: AsyncSession,
    user_id: str,
    metric_type: str,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[BodyMetricEntry]:
    """Entries for one metric type, oldest first. Defaults to the configured trailing window."""
    end = end_date or date.today()
    start = start_date or end - timedelta(days=get_settings().metric_history_days)
    stmt = (
        select(BodyMetricEntry)
        .where(
            BodyMetricEntry.user_id == user_id,
            BodyMetricEntry.metric_type == metric_type,
            BodyMetricEntry.log_date >= start,
            BodyMetricEntry.log_date <= end,
        )
        .order_by(BodyMetricEntry.log_date, BodyMetricEntry.id)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_snapshot(session: AsyncSession, user_id: str) -> list[MetricSnapshotItem]:
    """Most recent value per metric type plus derived bmi / smiComputed."""
    stmt = (
        select(BodyMetricEntry)
        .where(BodyMetricEntry.user_id == user_id)
        .order_by(BodyMetricEntry.log_date.desc(), BodyMetricEntry.id.desc())
        .limit(get_settings().snapshot_window)
    )
    result = await session.execute(stmt)
    return build_snapshot(result.scalars().all())


async def _get_owned_entry(session: AsyncSession, user_id: str, entry_id: int) -> BodyMetricEntry:
    entry = await session.get(BodyMetricEntry, entry_id)
    if entry is None:
        raise NotFoundError(f"Metric entry {entry_id} not found")
    if entry.user_id != user_id:
        raise ForbiddenError(f"Metric entry {entry_id} does not belong to this user")
    return entry


async def update_entry(
    session: AsyncSession, user_id: str, entry_id: int, body: MetricEntryUpdate
) -> BodyMetricEntry:
    """Partial update; only fields present in the request are applied."""
    entry = await _get_owned_entry(session, user_id, entry_id)

    update_data = body.model_dump(exclude_unset=True, exclude_none=True)
    for field in ("unit", "notes"):
        if field in update_data:
            update_data[field] = update_data[field].strip()
    for field, value in update_data.items():
        setattr(entry, field, value)
    entry.updated_at = datetime.utcnow()

    await session.commit()
    await session.refresh(entry)
    return entry


async def delete_entry(session: AsyncSession, user_id: str, entry_id: int) -> None:
    entry = await _get_owned_entry(session, user_id, entry_id)
    await session.delete(entry)
    await session.commit()
