"""Personal-best detection for sets of a just-completed workout session."""

import logging
import math
from collections import defaultdict
from collections.abc import Awaitable, Callable, Iterable, Sequence

from gymjournal.models.workout import WorkoutSet

logger = logging.getLogger(__name__)

HistoryFetcher = Callable[[str, int], Awaitable[Sequence[WorkoutSet]]]
FlagSetter = Callable[[int], Awaitable[None]]


def parse_weight(raw: str | None) -> float | None:
    """Parse a weight stored as text; blank, non-numeric and non-finite values are None."""
    if raw is None:
        return None
    try:
        weight = float(raw.strip())
    except ValueError:
        return None
    return weight if math.isfinite(weight) else None


def is_personal_best(candidate: WorkoutSet, history: Iterable[WorkoutSet]) -> bool:
    """True if ``candidate`` lifts at least as much as any comparable earlier set.

    Only historical sets done for at least as many reps are comparable. With
    nothing comparable the set is a first at this rep count and counts as a
    PB. Ties count. Bodyweight or unparsable candidate weights never do.
    """
    weight = parse_weight(candidate.actual_weight_kg)
    if weight is None or weight <= 0:
        return False

    comparable = [h for h in history if h.actual_reps >= candidate.actual_reps]
    if not comparable:
        return True

    weights = (parse_weight(h.actual_weight_kg) for h in comparable)
    historical = [w for w in weights if w is not None]
    if not historical:
        return True

    return weight >= max(historical)


async def evaluate_and_flag_personal_bests(
    session_id: int,
    user_id: str,
    sets: Iterable[WorkoutSet],
    history_fetcher: HistoryFetcher,
    flag_setter: FlagSetter,
) -> list[int]:
    """Flag every performed set of the session that is a personal best.

    History is fetched once per exercise and excludes this session and any
    uncompleted set. Flags are only ever raised, never cleared. Errors from
    ``history_fetcher`` or ``flag_setter`` propagate unchanged.

    ``flag_setter`` is called for every positive result, including sets that
    already carry the flag. Returns the ids passed to it.
    """
    by_exercise: dict[int, list[WorkoutSet]] = defaultdict(list)
    for workout_set in sets:
        if workout_set.actual_reps > 0:
            by_exercise[workout_set.exercise_id].append(workout_set)

    flagged: list[int] = []
    for exercise_id, candidates in by_exercise.items():
        history = [
            h
            for h in await history_fetcher(user_id, exercise_id)
            if h.session_id != session_id and h.completed_at is not None
        ]
        for candidate in candidates:
            if not is_personal_best(candidate, history):
                continue
            await flag_setter(candidate.id)
            flagged.append(candidate.id)

    if flagged:
        logger.info(
            "Session %s: flagged %d personal best set(s): %s", session_id, len(flagged), flagged
        )
    return flagged
