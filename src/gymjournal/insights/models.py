"""Types shared by every insights engine: context in, insights out."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel

from gymjournal.schemas.metric import MetricSnapshotItem


class InsightStatus(str, Enum):
    """Severity classification, in escalating order."""

    OK = "OK"
    BORDERLINE = "BORDERLINE"
    WARNING = "WARNING"
    DANGER = "DANGER"

    @property
    def severity(self) -> int:
        return list(InsightStatus).index(self)


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    UNSPECIFIED = "UNSPECIFIED"

    @classmethod
    def parse(cls, raw: str | None) -> "Gender":
        """Lenient parse of a query value; anything unrecognised is UNSPECIFIED."""
        if not raw:
            return cls.UNSPECIFIED
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return cls.UNSPECIFIED


class ReferenceRange(BaseModel):
    min: float | None = None
    max: float | None = None
    description: str  # e.g. "Normal: 18.5–24.9 kg/m²"

    model_config = {"frozen": True}


class MetricInsight(BaseModel):
    metric_type: str
    value: float
    unit: str
    status: InsightStatus
    message: str
    reference_range: ReferenceRange | None = None

    model_config = {"frozen": True}


@dataclass(frozen=True)
class InsightContext:
    """Everything an engine may read. Built once per request, never mutated.

    ``snapshot`` is keyed by metric type and already contains the derived
    ``bmi`` and ``smiComputed`` values. Gender-aware engines fall back to a
    conservative band when ``gender`` is UNSPECIFIED.
    """

    snapshot: Mapping[str, MetricSnapshotItem] = field(
        default_factory=lambda: MappingProxyType({})
    )
    gender: Gender = Gender.UNSPECIFIED

    def __post_init__(self) -> None:
        object.__setattr__(self, "snapshot", MappingProxyType(dict(self.snapshot)))

    @classmethod
    def from_items(
        cls, items: Iterable[MetricSnapshotItem], gender: Gender = Gender.UNSPECIFIED
    ) -> "InsightContext":
        snapshot: dict[str, MetricSnapshotItem] = {}
        for item in items:
            if item.metric_type in snapshot:
                raise ValueError(f"Duplicate metric type in snapshot: {item.metric_type}")
            snapshot[item.metric_type] = item
        return cls(snapshot=snapshot, gender=gender)


class MetricInsightsEngine(ABC):
    """An engine turning a context into zero or more insights.

    Engines should return an empty list when the context lacks the data they
    need. A raising engine is dropped by the composite runner, not retried.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier used in logs."""
        ...

    @abstractmethod
    def analyze(self, context: InsightContext) -> list[MetricInsight]:
        ...
