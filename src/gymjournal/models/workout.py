from datetime import datetime

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gymjournal.database import Base


class WorkoutSession(Base):
    __tablename__ = "workout_sessions"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(100), index=True)
    routine_id: Mapped[int | None] = mapped_column(default=None)  # None for free workouts
    routine_name: Mapped[str] = mapped_column(String(100), default="")
    name: Mapped[str] = mapped_column(String(100))
    status: Mapped[str] = mapped_column(String(20), default="IN_PROGRESS")  # IN_PROGRESS, COMPLETED
    started_at: Mapped[datetime]
    completed_at: Mapped[datetime | None] = mapped_column(default=None)
    notes: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)


class WorkoutSet(Base):
    """A single set row. ``item_type`` decides which columns are meaningful:

    EXERCISE uses the exercise, reps, weight, rpe and personal-best columns;
    REST uses ``duration_seconds``; CARDIO uses ``exercise_name`` as the
    activity name plus duration and distance.
    """

    __tablename__ = "workout_sets"

    id: Mapped[int] = mapped_column(primary_key=True)
    session_id: Mapped[int] = mapped_column(ForeignKey("workout_sessions.id"), index=True)
    user_id: Mapped[str] = mapped_column(String(100), index=True)
    exercise_id: Mapped[int] = mapped_column(default=0)  # 0 for REST / CARDIO
    exercise_name: Mapped[str] = mapped_column(String(100), default="")
    item_type: Mapped[str] = mapped_column(String(20), default="EXERCISE")
    order_in_session: Mapped[int] = mapped_column(default=1)  # groups sets of one slot
    set_number: Mapped[int] = mapped_column(default=1)
    planned_reps: Mapped[int] = mapped_column(default=0)
    planned_weight_kg: Mapped[str] = mapped_column(String(20), default="0")
    actual_reps: Mapped[int] = mapped_column(default=0)  # 0 = not performed
    actual_weight_kg: Mapped[str] = mapped_column(String(20), default="0")
    duration_seconds: Mapped[int] = mapped_column(default=0)
    distance_km: Mapped[str] = mapped_column(String(20), default="0")
    rpe: Mapped[int] = mapped_column(default=0)  # 1-10, 0 = unset
    is_personal_best: Mapped[bool] = mapped_column(default=False)
    notes: Mapped[str] = mapped_column(Text, default="")
    completed_at: Mapped[datetime | None] = mapped_column(default=None)
