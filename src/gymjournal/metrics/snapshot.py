"""Latest-value-per-metric snapshot, including the derived bmi and smiComputed."""

import math
from collections.abc import Iterable

from gymjournal.models.metric import BodyMetricEntry
from gymjournal.schemas.metric import MetricSnapshotItem

# Derived type -> numerator metric type; the denominator is always height (cm).
DERIVED_TYPES: dict[str, str] = {
    "bmi": "weight",
    "smiComputed": "smm",
}


def derive_per_height_squared(
    metric_type: str, numerator: BodyMetricEntry, height: BodyMetricEntry
) -> MetricSnapshotItem | None:
    """``numerator / (height_cm / 100)^2`` rounded to 1 decimal.

    None if height <= 0 or the result is not a finite number.
    """
    if height.value <= 0:
        return None
    height_m = height.value / 100.0
    raw = numerator.value / height_m**2
    if not math.isfinite(raw):
        return None
    return MetricSnapshotItem(
        metric_type=metric_type,
        value=round(raw * 10) / 10,
        unit="kg/m²",
        log_date=max(numerator.log_date, height.log_date),
    )


def build_snapshot(entries: Iterable[BodyMetricEntry]) -> list[MetricSnapshotItem]:
    """Collapse newest-first entries into one item per metric type.

    The first entry seen for a type wins, so callers must pass entries ordered
    by ``log_date`` descending. Derived items are appended after the stored
    ones and silently omitted when a source value is missing.
    """
    latest: dict[str, BodyMetricEntry] = {}
    for entry in entries:
        if entry.metric_type in DERIVED_TYPES:
            continue  # never trust a stored copy of a derived type
        if not math.isfinite(entry.value):
            continue
        latest.setdefault(entry.metric_type, entry)

    items = [MetricSnapshotItem.model_validate(entry) for entry in latest.values()]

    height = latest.get("height")
    if height is not None:
        for derived_type, source_type in DERIVED_TYPES.items():
            source = latest.get(source_type)
            if source is None:
                continue
            item = derive_per_height_squared(derived_type, source, height)
            if item is not None:
                items.append(item)
    return items
