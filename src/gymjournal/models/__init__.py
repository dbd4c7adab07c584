from gymjournal.models.metric import BodyMetricEntry
from gymjournal.models.routine import Routine
from gymjournal.models.water import WaterIntakeEntry
from gymjournal.models.workout import WorkoutSession, WorkoutSet

__all__ = [
    "BodyMetricEntry",
    "Routine",
    "WaterIntakeEntry",
    "WorkoutSession",
    "WorkoutSet",
]
