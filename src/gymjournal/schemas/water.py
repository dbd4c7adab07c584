from datetime import date, datetime

from pydantic import BaseModel, Field


class WaterEntryCreate(BaseModel):
    amount_ml: int = Field(ge=1)
    logged_at: datetime | None = None  # defaults to now
    notes: str = ""


class WaterEntryUpdate(BaseModel):
    amount_ml: int | None = Field(default=None, ge=1)
    notes: str | None = None


class WaterEntryRead(BaseModel):
    id: int
    logged_at: datetime
    amount_ml: int
    notes: str

    model_config = {"from_attributes": True}


class WaterDayTotal(BaseModel):
    day: date
    total_ml: int
    goal_ml: int
    progress_percent: int  # capped at 100


class DailyWaterSummary(WaterDayTotal):
    entries: list[WaterEntryRead]
