from datetime import date, datetime

from pydantic import BaseModel, Field


class MetricEntryBase(BaseModel):
    metric_type: str = Field(min_length=1, max_length=100)
    value: float = Field(allow_inf_nan=False)
    unit: str = Field(min_length=1, max_length=20)
    log_date: date = Field(default_factory=date.today)
    notes: str = ""


class MetricEntryCreate(MetricEntryBase):
    pass


class BatchLogMetricRequest(BaseModel):
    entries: list[MetricEntryCreate] = Field(min_length=1)


class MetricEntryUpdate(BaseModel):
    value: float | None = Field(default=None, allow_inf_nan=False)
    unit: str | None = Field(default=None, max_length=20)
    log_date: date | None = None
    notes: str | None = None


class MetricEntryRead(MetricEntryBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MetricSnapshotItem(BaseModel):
    """Latest known value for one metric type (stored or derived)."""

    metric_type: str
    value: float
    unit: str
    log_date: date

    model_config = {"frozen": True, "from_attributes": True}
