"""Water intake endpoints: log drinks and read daily progress against the goal."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gymjournal.api.deps import get_current_user_id
from gymjournal.database import get_db
from gymjournal.models.water import WaterIntakeEntry
from gymjournal.schemas.water import (
    DailyWaterSummary,
    WaterDayTotal,
    WaterEntryCreate,
    WaterEntryRead,
    WaterEntryUpdate,
)
from gymjournal.water import service

router = APIRouter(prefix="/api/water", tags=["water"])


@router.post("", response_model=WaterEntryRead, status_code=201)
async def log_water(
    body: WaterEntryCreate,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> WaterIntakeEntry:
    return await service.log_water(session, user_id, body)


@router.get("/today", response_model=DailyWaterSummary)
async def get_today(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> DailyWaterSummary:
    return await service.get_daily_summary(session, user_id, date.today())


@router.get("/daily", response_model=DailyWaterSummary)
async def get_daily(
    day: date = Query(alias="date"),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> DailyWaterSummary:
    return await service.get_daily_summary(session, user_id, day)


@router.get("/history", response_model=list[WaterDayTotal])
async def get_history(
    start_date: date,
    end_date: date,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> list[WaterDayTotal]:
    """Per-day totals in the inclusive range, newest first. Days without entries are omitted."""
    return await service.get_history(session, user_id, start_date, end_date)


@router.put("/{entry_id}", response_model=WaterEntryRead)
async def update_entry(
    entry_id: int,
    body: WaterEntryUpdate,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> WaterIntakeEntry:
    return await service.update_entry(session, user_id, entry_id, body)


@router.delete("/{entry_id}", status_code=204)
async def delete_entry(
    entry_id: int,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> None:
    await service.delete_entry(session, user_id, entry_id)
