from datetime import date, datetime

from sqlalchemy import Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gymjournal.database import Base


class BodyMetricEntry(Base):
    """One logged measurement. Computed types (bmi, smiComputed) are never stored."""

    __tablename__ = "body_metric_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(100), index=True)
    metric_type: Mapped[str] = mapped_column(String(100))  # weight, bodyFat, custom_sgpt, ...
    value: Mapped[float] = mapped_column(Float)
    unit: Mapped[str] = mapped_column(String(20))  # kg, %, mg/dL
    log_date: Mapped[date]
    notes: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)
