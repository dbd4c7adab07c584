from gymjournal.insights.composite import CompositeInsightsEngine, build_default_engine
from gymjournal.insights.models import (
    Gender,
    InsightContext,
    InsightStatus,
    MetricInsight,
    MetricInsightsEngine,
    ReferenceRange,
)
from gymjournal.insights.reference_range import ReferenceRangeInsightsEngine
from gymjournal.insights.service import compute_insights, get_insights

__all__ = [
    "CompositeInsightsEngine",
    "Gender",
    "InsightContext",
    "InsightStatus",
    "MetricInsight",
    "MetricInsightsEngine",
    "ReferenceRange",
    "ReferenceRangeInsightsEngine",
    "build_default_engine",
    "compute_insights",
    "get_insights",
]
