"""Tests for the reference-range insights engine: tier boundaries and gender handling."""

from datetime import date

import pytest

from gymjournal.insights.models import Gender, InsightContext, InsightStatus
from gymjournal.insights.reference_range import RULES, ReferenceRangeInsightsEngine
from gymjournal.schemas.metric import MetricSnapshotItem

OK = InsightStatus.OK
BORDERLINE = InsightStatus.BORDERLINE
WARNING = InsightStatus.WARNING
DANGER = InsightStatus.DANGER


def _context(gender: Gender = Gender.UNSPECIFIED, **values: float) -> InsightContext:
    items = [
        MetricSnapshotItem(metric_type=k, value=v, unit="", log_date=date(2025, 1, 10))
        for k, v in values.items()
    ]
    return InsightContext.from_items(items, gender)


def _status(metric_type: str, value: float, gender: Gender = Gender.UNSPECIFIED) -> InsightStatus:
    [insight] = ReferenceRangeInsightsEngine().analyze(_context(gender, **{metric_type: value}))
    return insight.status


# ── Dispatch ────────────────────────────────────────────────────────


def test_name() -> None:
    assert ReferenceRangeInsightsEngine().name == "reference-range"


def test_empty_context_produces_nothing() -> None:
    assert ReferenceRangeInsightsEngine().analyze(InsightContext()) == []


def test_unknown_metrics_are_ignored() -> None:
    insights = ReferenceRangeInsightsEngine().analyze(_context(weight=80.0, custom_sgpt=30.0))
    assert insights == []


def test_one_insight_per_present_metric_in_fixed_order() -> None:
    context = _context(hba1c=5.0, bmi=22.0, cholesterolHDL=65.0, bodyFat=15.0)
    insights = ReferenceRangeInsightsEngine().analyze(context)
    assert [i.metric_type for i in insights] == ["bmi", "bodyFat", "cholesterolHDL", "hba1c"]


def test_all_rules_registered() -> None:
    assert list(RULES) == [
        "bmi",
        "bodyFat",
        "visceralFat",
        "smiComputed",
        "cholesterolTotal",
        "cholesterolLDL",
        "cholesterolHDL",
        "triglycerides",
        "fastingGlucose",
        "hba1c",
    ]


# ── BMI ─────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (16.0, WARNING),
        (18.49, WARNING),
        (18.5, OK),
        (24.9, OK),
        (24.99, OK),
        (25.0, BORDERLINE),
        (29.9, BORDERLINE),
        (30.0, WARNING),
        (34.9, WARNING),
        (35.0, DANGER),
        (42.0, DANGER),
    ],
)
def test_bmi_tiers(value: float, expected: InsightStatus) -> None:
    assert _status("bmi", value) == expected


def test_bmi_insight_fields() -> None:
    [insight] = ReferenceRangeInsightsEngine().analyze(_context(bmi=24.7))
    assert insight.metric_type == "bmi"
    assert insight.value == 24.7
    assert insight.unit == "kg/m²"
    assert insight.status == OK
    assert "healthy range" in insight.message
    assert insight.reference_range is not None
    assert insight.reference_range.min == 18.5
    assert insight.reference_range.max == 24.9


# ── Body fat ────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("gender", "value", "expected"),
    [
        (Gender.MALE, 5.9, DANGER),
        (Gender.MALE, 6.0, OK),
        (Gender.MALE, 17.9, OK),
        (Gender.MALE, 18.0, BORDERLINE),
        (Gender.MALE, 24.9, BORDERLINE),
        (Gender.MALE, 25.0, WARNING),
        (Gender.FEMALE, 15.9, DANGER),
        (Gender.FEMALE, 16.0, OK),
        (Gender.FEMALE, 24.9, OK),
        (Gender.FEMALE, 25.0, BORDERLINE),
        (Gender.FEMALE, 31.9, BORDERLINE),
        (Gender.FEMALE, 32.0, WARNING),
        (Gender.UNSPECIFIED, 9.9, DANGER),
        (Gender.UNSPECIFIED, 10.0, OK),
        (Gender.UNSPECIFIED, 21.9, OK),
        (Gender.UNSPECIFIED, 22.0, BORDERLINE),
        (Gender.UNSPECIFIED, 27.9, BORDERLINE),
        (Gender.UNSPECIFIED, 28.0, WARNING),
    ],
)
def test_body_fat_tiers(gender: Gender, value: float, expected: InsightStatus) -> None:
    assert _status("bodyFat", value, gender) == expected


@pytest.mark.parametrize(
    ("gender", "band"),
    [
        (Gender.MALE, (6.0, 17.0)),
        (Gender.FEMALE, (16.0, 24.0)),
        (Gender.UNSPECIFIED, (10.0, 22.0)),
    ],
)
def test_body_fat_reference_band_depends_on_gender(
    gender: Gender, band: tuple[float, float]
) -> None:
    [insight] = ReferenceRangeInsightsEngine().analyze(_context(gender, bodyFat=20.0))
    assert insight.reference_range is not None
    assert (insight.reference_range.min, insight.reference_range.max) == band
    assert insight.unit == "%"


def test_body_fat_unspecified_gender_asks_for_gender_when_high() -> None:
    [insight] = ReferenceRangeInsightsEngine().analyze(_context(bodyFat=30.0))
    assert "provide your gender" in insight.message
    assert insight.reference_range is not None
    assert "approx" in insight.reference_range.description


# ── Visceral fat (upper bounds inclusive) ───────────────────────────


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1.0, OK),
        (9.0, OK),
        (9.5, BORDERLINE),
        (14.0, BORDERLINE),
        (14.5, WARNING),
        (20.0, WARNING),
    ],
)
def test_visceral_fat_tiers(value: float, expected: InsightStatus) -> None:
    assert _status("visceralFat", value) == expected


def test_visceral_fat_message_shows_rounded_level() -> None:
    [insight] = ReferenceRangeInsightsEngine().analyze(_context(visceralFat=12.0))
    assert "(12)" in insight.message
    assert insight.unit == "level"


# ── SMI ─────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("gender", "value", "expected"),
    [
        (Gender.MALE, 7.0, OK),
        (Gender.MALE, 6.99, BORDERLINE),
        (Gender.MALE, 6.5, BORDERLINE),
        (Gender.MALE, 6.49, WARNING),
        (Gender.FEMALE, 5.7, OK),
        (Gender.FEMALE, 5.2, BORDERLINE),
        (Gender.FEMALE, 5.19, WARNING),
        (Gender.UNSPECIFIED, 6.0, OK),
        (Gender.UNSPECIFIED, 5.5, BORDERLINE),
        (Gender.UNSPECIFIED, 5.49, WARNING),
    ],
)
def test_smi_tiers(gender: Gender, value: float, expected: InsightStatus) -> None:
    assert _status("smiComputed", value, gender) == expected


def test_smi_reference_range_is_one_sided() -> None:
    [insight] = ReferenceRangeInsightsEngine().analyze(_context(Gender.MALE, smiComputed=7.5))
    assert insight.reference_range is not None
    assert insight.reference_range.min == 7.0
    assert insight.reference_range.max is None
    assert "men" in insight.message


# ── Lipids ──────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("value", "expected"),
    [(199.9, OK), (200.0, BORDERLINE), (239.9, BORDERLINE), (240.0, WARNING)],
)
def test_cholesterol_total_tiers(value: float, expected: InsightStatus) -> None:
    assert _status("cholesterolTotal", value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (80.0, OK),
        (100.0, OK),
        (129.9, OK),
        (130.0, BORDERLINE),
        (159.9, BORDERLINE),
        (160.0, WARNING),
        (189.9, WARNING),
        (190.0, DANGER),
    ],
)
def test_cholesterol_ldl_tiers(value: float, expected: InsightStatus) -> None:
    assert _status("cholesterolLDL", value) == expected


def test_ldl_near_optimal_message_differs_from_optimal() -> None:
    engine = ReferenceRangeInsightsEngine()
    [optimal] = engine.analyze(_context(cholesterolLDL=90.0))
    [near] = engine.analyze(_context(cholesterolLDL=110.0))
    assert optimal.status == near.status == OK
    assert "near-optimal" in near.message
    assert "near-optimal" not in optimal.message


@pytest.mark.parametrize(
    ("value", "expected"),
    [(39.9, DANGER), (40.0, BORDERLINE), (59.99, BORDERLINE), (60.0, OK), (75.0, OK)],
)
def test_cholesterol_hdl_tiers_are_inverted(value: float, expected: InsightStatus) -> None:
    assert _status("cholesterolHDL", value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (149.9, OK),
        (150.0, BORDERLINE),
        (199.9, BORDERLINE),
        (200.0, WARNING),
        (499.9, WARNING),
        (500.0, DANGER),
    ],
)
def test_triglycerides_tiers(value: float, expected: InsightStatus) -> None:
    assert _status("triglycerides", value) == expected


# ── Blood sugar ─────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (69.9, WARNING),
        (70.0, OK),
        (99.9, OK),
        (100.0, BORDERLINE),
        (125.9, BORDERLINE),
        (126.0, DANGER),
    ],
)
def test_fasting_glucose_tiers(value: float, expected: InsightStatus) -> None:
    assert _status("fastingGlucose", value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [(5.69, OK), (5.7, BORDERLINE), (6.49, BORDERLINE), (6.5, DANGER)],
)
def test_hba1c_tiers(value: float, expected: InsightStatus) -> None:
    assert _status("hba1c", value) == expected


def test_gender_only_affects_gender_aware_metrics() -> None:
    engine = ReferenceRangeInsightsEngine()
    values = {"bmi": 27.0, "cholesterolTotal": 210.0, "hba1c": 6.0}
    male = engine.analyze(_context(Gender.MALE, **values))
    unspecified = engine.analyze(_context(Gender.UNSPECIFIED, **values))
    assert male == unspecified


# ── Display text ────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("gender", "description"),
    [
        (Gender.MALE, "Normal for male: 6.0–17.0%"),
        (Gender.FEMALE, "Normal for female: 16.0–24.0%"),
        (Gender.UNSPECIFIED, "Normal (approx): 10.0–22.0%"),
    ],
)
def test_body_fat_description_keeps_one_decimal(gender: Gender, description: str) -> None:
    [insight] = ReferenceRangeInsightsEngine().analyze(_context(gender, bodyFat=12.0))
    assert insight.reference_range is not None
    assert insight.reference_range.description == description


def test_body_fat_message_uses_whole_percents() -> None:
    [insight] = ReferenceRangeInsightsEngine().analyze(_context(Gender.MALE, bodyFat=12.0))
    assert insight.message == "Body fat is in the healthy range for men (6–17%)."


@pytest.mark.parametrize(
    ("gender", "expected"),
    [
        (Gender.MALE, "Normal for men: ≥ 7.0 kg/m²"),
        (Gender.FEMALE, "Normal for women: ≥ 5.7 kg/m²"),
        (Gender.UNSPECIFIED, "Normal for adults (varies by sex): ≥ 6.0 kg/m²"),
    ],
)
def test_smi_target_keeps_one_decimal(gender: Gender, expected: str) -> None:
    [insight] = ReferenceRangeInsightsEngine().analyze(_context(gender, smiComputed=8.0))
    assert insight.reference_range is not None
    assert insight.reference_range.description == expected
    assert insight.message.endswith(f"({expected.split(': ')[1]}).")
