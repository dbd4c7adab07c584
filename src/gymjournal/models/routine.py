from datetime import datetime

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gymjournal.database import Base


class Routine(Base):
    """A reusable workout template.

    ``items`` is an ordered JSON list of EXERCISE, REST and CARDIO entries
    (see ``schemas.routine.RoutineItem``). Public routines can be browsed and
    cloned by anyone; private ones only by their creator.
    """

    __tablename__ = "routines"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    description: Mapped[str] = mapped_column(Text, default="")
    items: Mapped[list[dict]] = mapped_column(JSON, default=list)
    estimated_minutes: Mapped[int] = mapped_column(default=0)  # 0 = not set
    tags: Mapped[list[str]] = mapped_column(JSON, default=list)
    is_public: Mapped[bool] = mapped_column(default=False)
    created_by: Mapped[str] = mapped_column(String(100), index=True)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def item_count(self) -> int:
        return len(self.items or [])
