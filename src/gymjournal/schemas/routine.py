from datetime import datetime

from pydantic import BaseModel, Field

ITEM_TYPE_PATTERN = r"^(EXERCISE|REST|CARDIO|exercise|rest|cardio)$"


class RoutineItem(BaseModel):
    """One ordered slot of a routine. Which fields apply depends on ``item_type``:

    EXERCISE uses exercise_id, exercise_name, sets, reps_per_set, weight_kg,
    rest_after_seconds and notes; REST uses duration_seconds; CARDIO uses
    cardio_name, duration_minutes and target_speed_kmh.
    """

    order: int = Field(default=0, ge=0)  # 0 = use list position
    item_type: str = Field(pattern=ITEM_TYPE_PATTERN)

    exercise_id: int | None = None
    exercise_name: str | None = Field(default=None, max_length=100)
    sets: int | None = Field(default=None, ge=0)
    reps_per_set: int | None = Field(default=None, ge=0)
    weight_kg: str | None = None  # None = bodyweight
    rest_after_seconds: int | None = Field(default=None, ge=0)
    notes: str | None = None

    duration_seconds: int | None = Field(default=None, ge=0)

    cardio_name: str | None = Field(default=None, max_length=100)
    duration_minutes: int | None = Field(default=None, ge=0)
    target_speed_kmh: str | None = None


class RoutineBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = ""
    items: list[RoutineItem] = Field(min_length=1)
    estimated_minutes: int = Field(default=0, ge=0)
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False


class RoutineCreate(RoutineBase):
    pass


class RoutineUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    items: list[RoutineItem] | None = Field(default=None, min_length=1)
    estimated_minutes: int | None = Field(default=None, ge=0)
    tags: list[str] | None = None
    is_public: bool | None = None


class RoutineRead(RoutineBase):
    id: int
    created_by: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RoutineSummary(BaseModel):
    id: int
    name: str
    description: str
    estimated_minutes: int
    tags: list[str]
    item_count: int
    is_public: bool
    created_by: str
    updated_at: datetime

    model_config = {"from_attributes": True}


class PaginatedRoutines(BaseModel):
    items: list[RoutineSummary]
    total: int
    page: int
    per_page: int
