"""Patient demographics, engagement tiers and common health concerns."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import date, datetime, timezone
from typing import Any, Optional

from medinsight.analytics.models import Demographics, HealthConcern, PatientAnalytics
from medinsight.records import first_truthy, get_field, parse_datetime, record_id, safe_num

TOP_N = 10
DEFAULT_CONDITION = "General Checkup"

# Inclusive upper bounds; anything older falls in "65+".
AGE_BANDS: tuple[tuple[str, float], ...] = (
    ("0-18", 18),
    ("19-35", 35),
    ("36-50", 50),
    ("51-65", 65),
    ("65+", float("inf")),
)
GENDERS: tuple[str, ...] = ("male", "female", "other")


def calculate_age(date_of_birth: Any, today: Optional[date] = None) -> int:
    """Whole years since ``date_of_birth``; 0 when missing or unparseable."""
    born = parse_datetime(date_of_birth)
    if born is None:
        return 0
    today = today or datetime.now(timezone.utc).date()
    born_date = born.date()
    age = today.year - born_date.year
    if (today.month, today.day) < (born_date.month, born_date.day):
        age -= 1
    return age


def age_band(age: float) -> str:
    for label, upper in AGE_BANDS:
        if age <= upper:
            return label
    return AGE_BANDS[-1][0]


def engagement_tier(appointment_count: int) -> str:
    """``low`` up to 2 appointments, ``medium`` up to 5, ``high`` beyond."""
    if appointment_count > 5:
        return "high"
    if appointment_count > 2:
        return "medium"
    return "low"


def _appointment_counts(appointments: Sequence[dict[str, Any]]) -> Counter:
    counts: Counter = Counter()
    for apt in appointments:
        patient = get_field(apt, "patient")
        ids = {
            record_id(patient) if isinstance(patient, dict) else None,
            record_id(get_field(apt, "patientId")),
        }
        ids.discard(None)
        counts.update(ids)
    return counts


def analyze_patient_behavior(
    patients: Sequence[dict[str, Any]],
    appointments: Sequence[dict[str, Any]] = (),
    visits: Sequence[dict[str, Any]] = (),
    today: Optional[date] = None,
) -> PatientAnalytics:
    """Bucket patients by age and gender, tier them by appointment count, rank visit reasons."""
    age_groups = {label: 0 for label, _ in AGE_BANDS}
    gender_distribution = {g: 0 for g in GENDERS}
    frequency: dict[str, int] = {}
    per_patient = _appointment_counts(appointments)

    for patient in patients:
        age = safe_num(get_field(patient, "age")) or calculate_age(get_field(patient, "dateOfBirth"), today)
        age_groups[age_band(age)] += 1

        gender = str(get_field(patient, "gender") or "other").lower()
        if gender in gender_distribution:
            gender_distribution[gender] += 1
        else:
            gender_distribution["other"] += 1

        patient_id = record_id(get_field(patient, "_id") or get_field(patient, "id"))
        count = per_patient.get(patient_id, 0) if patient_id else 0
        if count > 0:
            tier = engagement_tier(count)
            frequency[tier] = frequency.get(tier, 0) + 1

    conditions: dict[str, int] = {}
    for visit in visits:
        condition = str(first_truthy(
            get_field(visit, "diagnosis"), get_field(visit, "reason"), default=DEFAULT_CONDITION
        ))
        conditions[condition] = conditions.get(condition, 0) + 1

    top_concerns = sorted(
        (HealthConcern(condition=c, count=n) for c, n in conditions.items()),
        key=lambda h: h.count,
        reverse=True,
    )[:TOP_N]

    return PatientAnalytics(
        demographics=Demographics(
            age_groups=age_groups,
            gender_distribution=gender_distribution,
            total_patients=len(patients),
        ),
        appointment_frequency=frequency,
        top_health_concerns=top_concerns,
        insights=patient_insights(age_groups, top_concerns),
    )


def patient_insights(age_groups: dict[str, int], top_concerns: Sequence[HealthConcern]) -> list[str]:
    label, count = max(age_groups.items(), key=lambda item: item[1])
    insights = [f"Primary patient demographic: {label} age group ({count} patients)."]
    if top_concerns:
        top = top_concerns[0]
        insights.append(f'Most common health concern: "{top.condition}" ({top.count} cases).')
    return insights
