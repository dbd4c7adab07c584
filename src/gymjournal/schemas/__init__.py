from gymjournal.schemas.metric import (
    BatchLogMetricRequest,
    MetricEntryCreate,
    MetricEntryRead,
    MetricEntryUpdate,
    MetricSnapshotItem,
)
from gymjournal.schemas.routine import (
    PaginatedRoutines,
    RoutineCreate,
    RoutineItem,
    RoutineRead,
    RoutineSummary,
    RoutineUpdate,
)
from gymjournal.schemas.water import (
    DailyWaterSummary,
    WaterDayTotal,
    WaterEntryCreate,
    WaterEntryRead,
    WaterEntryUpdate,
)
from gymjournal.schemas.workout import (
    PaginatedSessions,
    PaginatedSets,
    SessionItemGroup,
    WorkoutSessionCreate,
    WorkoutSessionRead,
    WorkoutSessionSummary,
    WorkoutSessionUpdate,
    WorkoutSetCreate,
    WorkoutSetRead,
    WorkoutSetUpdate,
)

__all__ = [
    "BatchLogMetricRequest",
    "DailyWaterSummary",
    "MetricEntryCreate",
    "MetricEntryRead",
    "MetricEntryUpdate",
    "MetricSnapshotItem",
    "PaginatedRoutines",
    "PaginatedSessions",
    "PaginatedSets",
    "RoutineCreate",
    "RoutineItem",
    "RoutineRead",
    "RoutineSummary",
    "RoutineUpdate",
    "SessionItemGroup",
    "WaterDayTotal",
    "WaterEntryCreate",
    "WaterEntryRead",
    "WaterEntryUpdate",
    "WorkoutSessionCreate",
    "WorkoutSessionRead",
    "WorkoutSessionSummary",
    "WorkoutSessionUpdate",
    "WorkoutSetCreate",
    "WorkoutSetRead",
    "WorkoutSetUpdate",
]
