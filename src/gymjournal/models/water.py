from datetime import datetime

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gymjournal.database import Base


class WaterIntakeEntry(Base):
    """One drink. Daily totals are summed on read, never stored."""

    __tablename__ = "water_intake_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(100), index=True)
    logged_at: Mapped[datetime] = mapped_column(index=True)
    amount_ml: Mapped[int]
    notes: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
