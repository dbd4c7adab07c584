from datetime import datetime

from pydantic import BaseModel, Field


class WorkoutSessionCreate(BaseModel):
    routine_id: int | None = None  # None = free workout
    name: str | None = Field(default=None, max_length=100)
    started_at: datetime | None = None


class WorkoutSessionUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    notes: str | None = None


class WorkoutSetBase(BaseModel):
    exercise_id: int = 0
    exercise_name: str = Field(default="", max_length=100)
    item_type: str = Field(
        default="EXERCISE", pattern=r"^(EXERCISE|REST|CARDIO|exercise|rest|cardio)$"
    )
    order_in_session: int = Field(default=1, ge=1)
    set_number: int = Field(default=1, ge=1)
    planned_reps: int = Field(default=0, ge=0)
    planned_weight_kg: str = "0"
    actual_reps: int = Field(default=0, ge=0)
    actual_weight_kg: str = "0"
    duration_seconds: int = Field(default=0, ge=0)
    distance_km: str = "0"
    rpe: int = Field(default=0, ge=0, le=10)
    notes: str = ""
    completed_at: datetime | None = None


class WorkoutSetCreate(WorkoutSetBase):
    pass


class WorkoutSetUpdate(BaseModel):
    actual_reps: int | None = Field(default=None, ge=0)
    actual_weight_kg: str | None = None
    planned_reps: int | None = Field(default=None, ge=0)
    planned_weight_kg: str | None = None
    duration_seconds: int | None = Field(default=None, ge=0)
    distance_km: str | None = None
    rpe: int | None = Field(default=None, ge=0, le=10)
    notes: str | None = None
    completed_at: datetime | None = None


class WorkoutSetRead(WorkoutSetBase):
    id: int
    session_id: int
    is_personal_best: bool

    model_config = {"from_attributes": True}


class SessionItemGroup(BaseModel):
    """Sets sharing one ``order_in_session`` slot."""

    order_in_session: int
    item_type: str
    exercise_id: int
    exercise_name: str
    sets: list[WorkoutSetRead]


class WorkoutSessionSummary(BaseModel):
    id: int
    routine_id: int | None = None
    routine_name: str = ""
    name: str
    status: str
    started_at: datetime
    completed_at: datetime | None = None
    updated_at: datetime

    model_config = {"from_attributes": True}


class WorkoutSessionRead(WorkoutSessionSummary):
    notes: str
    created_at: datetime
    exercises: list[SessionItemGroup] = Field(default_factory=list)


class PaginatedSessions(BaseModel):
    items: list[WorkoutSessionSummary]
    total: int
    page: int
    per_page: int


class PaginatedSets(BaseModel):
    items: list[WorkoutSetRead]
    total: int
    page: int
    per_page: int
