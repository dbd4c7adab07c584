"""Runs every registered insights engine against one context and merges the results."""

import logging
from collections.abc import Iterable

from gymjournal.insights.models import InsightContext, MetricInsight, MetricInsightsEngine
from gymjournal.insights.reference_range import ReferenceRangeInsightsEngine

logger = logging.getLogger(__name__)


class CompositeInsightsEngine:
    """Ordered collection of engines with per-engine failure isolation.

    Not itself a ``MetricInsightsEngine`` so it cannot be registered into
    another composite by accident.
    """

    def __init__(self, engines: Iterable[MetricInsightsEngine] = ()) -> None:
        self._engines: list[MetricInsightsEngine] = list(engines)

    def register(self, engine: MetricInsightsEngine) -> None:
        self._engines.append(engine)

    @property
    def names(self) -> list[str]:
        return [engine.name for engine in self._engines]

    def analyze(self, context: InsightContext) -> list[MetricInsight]:
        """Run all engines in registration order and concatenate their output.

        An engine that raises contributes nothing; the others still run.
        Overlapping insights from different engines are all kept.
        """
        logger.info("Running %d insights engine(s): %s", len(self._engines), self.names)

        insights: list[MetricInsight] = []
        for engine in self._engines:
            try:
                results = engine.analyze(context)
            except Exception:
                logger.exception("Insights engine '%s' failed", engine.name)
                continue
            logger.info("Insights engine '%s' produced %d insight(s)", engine.name, len(results))
            insights.extend(results)
        return insights


def build_default_engine() -> CompositeInsightsEngine:
    """Registration table for the engines shipped with the app."""
    return CompositeInsightsEngine([ReferenceRangeInsightsEngine()])
