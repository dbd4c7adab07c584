"""Body metric endpoints: batch logging, per-date entries, history, snapshot and insights."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gymjournal.api.deps import get_current_user_id, get_insights_engine
from gymjournal.database import get_db
from gymjournal.insights.composite import CompositeInsightsEngine
from gymjournal.insights.models import Gender, MetricInsight
from gymjournal.insights.service import get_insights
from gymjournal.metrics import service
from gymjournal.models.metric import BodyMetricEntry
from gymjournal.schemas.metric import (
    BatchLogMetricRequest,
    MetricEntryRead,
    MetricEntryUpdate,
    MetricSnapshotItem,
)

router = APIRouter(prefix="/api/metrics", tags=["metrics"])


@router.post("/entries", response_model=list[MetricEntryRead], status_code=201)
async def batch_log(
    body: BatchLogMetricRequest,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> list[BodyMetricEntry]:
    """Log one or more measurements. Computed types (bmi, smiComputed) are rejected with 400."""
    return await service.batch_log(session, user_id, body.entries)


@router.get("/entries", response_model=list[MetricEntryRead])
async def get_entries_for_date(
    log_date: date | None = Query(default=None, alias="date"),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> list[BodyMetricEntry]:
    """All entries logged on a date (default today), sorted by metric type."""
    return await service.get_entries_for_date(session, user_id, log_date or date.today())


@router.put("/entries/{entry_id}", response_model=MetricEntryRead)
async def update_entry(
    entry_id: int,
    body: MetricEntryUpdate,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> BodyMetricEntry:
    return await service.update_entry(session, user_id, entry_id, body)


@router.delete("/entries/{entry_id}", status_code=204)
async def delete_entry(
    entry_id: int,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> None:
    await service.delete_entry(session, user_id, entry_id)


@router.get("/snapshot", response_model=list[MetricSnapshotItem])
async def get_snapshot(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> list[MetricSnapshotItem]:
    """Latest value per metric type, plus bmi and smiComputed when their sources exist."""
    return await service.get_snapshot(session, user_id)


@router.get("/insights", response_model=list[MetricInsight])
async def get_metric_insights(
    gender: str | None = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
    engine: CompositeInsightsEngine = Depends(get_insights_engine),
) -> list[MetricInsight]:
    """Health insights from the latest metrics.

    ``gender`` (male|female) enables sex-specific body fat and SMI cutoffs;
    anything else falls back to the conservative blended ranges.
    """
    return await get_insights(session, user_id, Gender.parse(gender), engine)


@router.get("/{metric_type}/history", response_model=list[MetricEntryRead])
async def get_history(
    metric_type: str,
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> list[BodyMetricEntry]:
    """Entries for one metric type, oldest first. Defaults to the last 90 days."""
    return await service.get_history(session, user_id, metric_type, start_date, end_date)
