"""Reference-range insights: compare snapshot values with clinical cutoffs.

Cutoffs follow WHO (BMI), ACC/AHA ATP III (lipids), ADA (glucose, HbA1c) and
AWGS 2019 (skeletal muscle index). Each tier list is ordered from the lowest
values upwards; a value belongs to the first tier whose upper bound it is
below. The body fat and SMI fallbacks for an unspecified gender are blended
bands, not a published standard.

Adding a metric means writing one ``_<metric>`` rule and listing it in
``RULES``.
"""

from collections.abc import Callable

from gymjournal.insights.models import (
    Gender,
    InsightContext,
    InsightStatus,
    MetricInsight,
    MetricInsightsEngine,
    ReferenceRange,
)

# (exclusive upper bound or None for the open top tier, status, message)
Tier = tuple[float | None, InsightStatus, str]

OK = InsightStatus.OK
BORDERLINE = InsightStatus.BORDERLINE
WARNING = InsightStatus.WARNING
DANGER = InsightStatus.DANGER


def _classify(
    value: float, tiers: list[Tier], inclusive: bool = False
) -> tuple[InsightStatus, str]:
    for upper, status, message in tiers:
        if upper is None or value < upper or (inclusive and value == upper):
            return status, message
    raise ValueError(f"No tier matched {value!r}")  # tier lists always end open


def _fmt(number: float) -> str:
    return f"{number:g}"


def _insight(
    metric_type: str,
    value: float,
    unit: str,
    tiers: list[Tier],
    reference_range: ReferenceRange,
    inclusive: bool = False,
) -> MetricInsight:
    status, message = _classify(value, tiers, inclusive=inclusive)
    return MetricInsight(
        metric_type=metric_type,
        value=value,
        unit=unit,
        status=status,
        message=message,
        reference_range=reference_range,
    )


# ── Body composition ────────────────────────────────────────────────


def _bmi(value: float, gender: Gender) -> MetricInsight:
    tiers: list[Tier] = [
        (18.5, WARNING, "Underweight (BMI < 18.5). Consider consulting a healthcare provider "
                        "about healthy weight gain."),
        (25.0, OK, "BMI is in the healthy range (18.5–24.9)."),
        (30.0, BORDERLINE, "Overweight range (BMI 25–29.9). A healthy target is 18.5–24.9."),
        (35.0, WARNING, "Obese Class I (BMI 30–34.9). Weight management is recommended."),
        (None, DANGER, "Obese Class II+ (BMI ≥ 35). Medical guidance is strongly advised."),
    ]
    return _insight(
        "bmi", value, "kg/m²", tiers,
        ReferenceRange(min=18.5, max=24.9, description="Normal: 18.5–24.9 kg/m²"),
    )


# gender -> (danger below, ok below, borderline below, band min, band max)
_BODY_FAT_CUTOFFS: dict[Gender, tuple[float, float, float, float, float]] = {
    Gender.MALE: (6.0, 18.0, 25.0, 6.0, 17.0),
    Gender.FEMALE: (16.0, 25.0, 32.0, 16.0, 24.0),
    Gender.UNSPECIFIED: (10.0, 22.0, 28.0, 10.0, 22.0),
}


def _body_fat(value: float, gender: Gender) -> MetricInsight:
    danger_below, ok_below, borderline_below, band_min, band_max = _BODY_FAT_CUTOFFS[gender]
    band = f"{_fmt(band_min)}–{_fmt(band_max)}%"
    shown_range = f"{band_min:.1f}–{band_max:.1f}%"  # descriptions keep one decimal

    if gender is Gender.UNSPECIFIED:
        tiers: list[Tier] = [
            (danger_below, DANGER, "Body fat is very low. This level may impair normal "
                                   "bodily functions."),
            (ok_below, OK, "Body fat appears to be in a reasonable healthy range."),
            (borderline_below, BORDERLINE, "Body fat is mildly elevated. Note: healthy range "
                                           "varies by sex."),
            (None, WARNING, "Body fat appears high. For an accurate assessment, provide your "
                            "gender."),
        ]
        description = f"Normal (approx): {shown_range}"
    else:
        who = "men" if gender is Gender.MALE else "women"
        low_effect = (
            "This level can impair organ function."
            if gender is Gender.MALE
            else "This can affect hormonal health."
        )
        tiers = [
            (danger_below, DANGER, f"Extremely low body fat (< {_fmt(danger_below)}% for {who}). "
                                   f"{low_effect}"),
            (ok_below, OK, f"Body fat is in the healthy range for {who} ({band})."),
            (borderline_below, BORDERLINE, f"Body fat is above the ideal range for {who} "
                                           f"({band})."),
            (None, WARNING, f"Body fat is high for {who} (≥ {_fmt(borderline_below)}%). Focus on "
                            "resistance training and diet."),
        ]
        description = f"Normal for {gender.value.lower()}: {shown_range}"

    return _insight(
        "bodyFat", value, "%", tiers,
        ReferenceRange(min=band_min, max=band_max, description=description),
    )


def _visceral_fat(value: float, gender: Gender) -> MetricInsight:
    level = f"{value:.0f}"
    tiers: list[Tier] = [
        (9.0, OK, "Visceral fat level is normal (1–9)."),
        (14.0, BORDERLINE, f"Visceral fat level is mildly elevated ({level}). Target is 1–9."),
        (None, WARNING, f"Visceral fat level is high ({level}). Excess visceral fat is linked "
                        "to metabolic disease."),
    ]
    return _insight(
        "visceralFat", value, "level", tiers,
        ReferenceRange(min=1.0, max=9.0, description="Normal: level 1–9"),
        inclusive=True,
    )


_SMI_CUTOFFS: dict[Gender, tuple[float, str]] = {
    Gender.MALE: (7.0, "men"),
    Gender.FEMALE: (5.7, "women"),
    Gender.UNSPECIFIED: (6.0, "adults (varies by sex)"),
}


def _smi(value: float, gender: Gender) -> MetricInsight:
    cutoff, who = _SMI_CUTOFFS[gender]
    target = f"{cutoff:.1f} kg/m²"
    tiers: list[Tier] = [
        (cutoff - 0.5, WARNING, f"Skeletal muscle index is low for {who} (< {target}). "
                                "This may indicate sarcopenia risk."),
        (cutoff, BORDERLINE, f"Skeletal muscle index is mildly low for {who} "
                             f"(target ≥ {target}). "
                             "Consider adding resistance training."),
        (None, OK, f"Skeletal muscle index is in a healthy range for {who} (≥ {target})."),
    ]
    return _insight(
        "smiComputed", value, "kg/m²", tiers,
        ReferenceRange(min=cutoff, max=None, description=f"Normal for {who}: ≥ {target}"),
    )


# ── Lipid panel ─────────────────────────────────────────────────────


def _cholesterol_total(value: float, gender: Gender) -> MetricInsight:
    tiers: list[Tier] = [
        (200.0, OK, "Total cholesterol is in the desirable range (< 200 mg/dL)."),
        (240.0, BORDERLINE, "Total cholesterol is borderline high (200–239 mg/dL). "
                            "Dietary changes may help."),
        (None, WARNING, "Total cholesterol is high (≥ 240 mg/dL). Consult a doctor about "
                        "cardiovascular risk."),
    ]
    return _insight(
        "cholesterolTotal", value, "mg/dL", tiers,
        ReferenceRange(min=None, max=200.0, description="Desirable: < 200 mg/dL"),
    )


def _cholesterol_ldl(value: float, gender: Gender) -> MetricInsight:
    tiers: list[Tier] = [
        (100.0, OK, "LDL cholesterol is optimal (< 100 mg/dL)."),
        (130.0, OK, "LDL cholesterol is near-optimal (100–129 mg/dL)."),
        (160.0, BORDERLINE, "LDL cholesterol is borderline high (130–159 mg/dL). "
                            "Diet and activity can lower LDL."),
        (190.0, WARNING, "LDL cholesterol is high (160–189 mg/dL). Medical review recommended."),
        (None, DANGER, "LDL cholesterol is very high (≥ 190 mg/dL). Please consult a doctor."),
    ]
    return _insight(
        "cholesterolLDL", value, "mg/dL", tiers,
        ReferenceRange(min=None, max=100.0, description="Optimal: < 100 mg/dL"),
    )


def _cholesterol_hdl(value: float, gender: Gender) -> MetricInsight:
    # Inverted: higher is better
    tiers: list[Tier] = [
        (40.0, DANGER, "HDL cholesterol is low (< 40 mg/dL). Low HDL is a risk factor for "
                       "heart disease."),
        (60.0, BORDERLINE, "HDL cholesterol is acceptable (40–59 mg/dL). "
                           "Above 60 is protective."),
        (None, OK, "HDL cholesterol is at a protective level (≥ 60 mg/dL)."),
    ]
    return _insight(
        "cholesterolHDL", value, "mg/dL", tiers,
        ReferenceRange(min=60.0, max=None, description="Protective: ≥ 60 mg/dL"),
    )


def _triglycerides(value: float, gender: Gender) -> MetricInsight:
    tiers: list[Tier] = [
        (150.0, OK, "Triglycerides are normal (< 150 mg/dL)."),
        (200.0, BORDERLINE, "Triglycerides are borderline high (150–199 mg/dL). Reducing sugar "
                            "and refined carbs helps."),
        (500.0, WARNING, "Triglycerides are high (200–499 mg/dL). Medical evaluation "
                         "recommended."),
        (None, DANGER, "Triglycerides are very high (≥ 500 mg/dL). Risk of pancreatitis, "
                       "please see a doctor."),
    ]
    return _insight(
        "triglycerides", value, "mg/dL", tiers,
        ReferenceRange(min=None, max=150.0, description="Normal: < 150 mg/dL"),
    )


# ── Blood sugar ─────────────────────────────────────────────────────


def _fasting_glucose(value: float, gender: Gender) -> MetricInsight:
    tiers: list[Tier] = [
        (70.0, WARNING, "Fasting glucose is low (< 70 mg/dL, hypoglycemia range). "
                        "Consult a doctor."),
        (100.0, OK, "Fasting glucose is normal (70–99 mg/dL)."),
        (126.0, BORDERLINE, "Fasting glucose is in the prediabetes range (100–125 mg/dL). "
                            "Lifestyle changes can reverse this."),
        (None, DANGER, "Fasting glucose is in the diabetes range (≥ 126 mg/dL). "
                       "Please consult a doctor."),
    ]
    return _insight(
        "fastingGlucose", value, "mg/dL", tiers,
        ReferenceRange(min=70.0, max=99.0, description="Normal: 70–99 mg/dL"),
    )


def _hba1c(value: float, gender: Gender) -> MetricInsight:
    tiers: list[Tier] = [
        (5.7, OK, "HbA1c is in the normal range (< 5.7%)."),
        (6.5, BORDERLINE, "HbA1c is in the prediabetes range (5.7–6.4%). Diet and exercise "
                          "can bring this down."),
        (None, DANGER, "HbA1c is in the diabetes range (≥ 6.5%). Medical management is "
                       "recommended."),
    ]
    return _insight(
        "hba1c", value, "%", tiers,
        ReferenceRange(min=None, max=5.7, description="Normal: < 5.7%"),
    )


# Evaluation order is the output order.
RULES: dict[str, Callable[[float, Gender], MetricInsight]] = {
    "bmi": _bmi,
    "bodyFat": _body_fat,
    "visceralFat": _visceral_fat,
    "smiComputed": _smi,
    "cholesterolTotal": _cholesterol_total,
    "cholesterolLDL": _cholesterol_ldl,
    "cholesterolHDL": _cholesterol_hdl,
    "triglycerides": _triglycerides,
    "fastingGlucose": _fasting_glucose,
    "hba1c": _hba1c,
}


class ReferenceRangeInsightsEngine(MetricInsightsEngine):
    """Stateless; never touches the database."""

    @property
    def name(self) -> str:
        return "reference-range"

    def analyze(self, context: InsightContext) -> list[MetricInsight]:
        insights = []
        for metric_type, rule in RULES.items():
            item = context.snapshot.get(metric_type)
            if item is not None:
                insights.append(rule(item.value, context.gender))
        return insights
