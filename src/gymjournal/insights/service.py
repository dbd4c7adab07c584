"""Entry points for computing insights from a metric snapshot."""

from collections.abc import Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from gymjournal.insights.composite import CompositeInsightsEngine, build_default_engine
from gymjournal.insights.models import Gender, InsightContext, MetricInsight
from gymjournal.metrics.service import get_snapshot
from gymjournal.schemas.metric import MetricSnapshotItem

default_engine = build_default_engine()


def compute_insights(
    snapshot: Mapping[str, MetricSnapshotItem],
    gender: Gender = Gender.UNSPECIFIED,
    engine: CompositeInsightsEngine | None = None,
) -> list[MetricInsight]:
    """Evaluate a snapshot keyed by metric type. Same input, same output."""
    if not snapshot:
        return []
    context = InsightContext(snapshot=snapshot, gender=gender)
    return (engine or default_engine).analyze(context)


async def get_insights(
    session: AsyncSession,
    user_id: str,
    gender: Gender = Gender.UNSPECIFIED,
    engine: CompositeInsightsEngine | None = None,
) -> list[MetricInsight]:
    """Load the user's snapshot (derived metrics included) and evaluate it.

    Returns an empty list when the user has no metric data yet.
    """
    items = await get_snapshot(session, user_id)
    if not items:
        return []
    context = InsightContext.from_items(items, gender)
    return compute_insights(context.snapshot, gender, engine)
