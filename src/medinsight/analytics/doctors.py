"""Specialization demand and per-doctor appointment volume."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from medinsight.analytics.models import DoctorAnalytics, DoctorPerformance, SpecializationDemand
from medinsight.records import first_truthy, get_field, record_id, round_half_up, text_field, to_fixed

TOP_N = 10
DEFAULT_SPECIALIZATION = "General"
HIGH_WORKLOAD_THRESHOLD = 20


def analyze_doctor_specializations(
    appointments: Sequence[dict[str, Any]],
    doctors: Sequence[dict[str, Any]] = (),
) -> DoctorAnalytics:
    """Count appointments per specialization and per doctor.

    ``doctors`` is accepted for call-site symmetry with the other
    aggregators; demand is derived from the doctors seen on appointments.
    """
    demand: dict[str, dict[str, Any]] = {}
    performance: dict[str, dict[str, Any]] = {}

    for apt in appointments:
        doctor = get_field(apt, "doctor")
        spec = str(first_truthy(
            get_field(doctor, "specialization"),
            get_field(apt, "specialization"),
            default=DEFAULT_SPECIALIZATION,
        ))
        doctor_id = record_id(doctor) if isinstance(doctor, dict) else None

        entry = demand.setdefault(spec, {"count": 0, "doctors": set()})
        entry["count"] += 1
        if doctor_id:
            entry["doctors"].add(doctor_id)

        if doctor_id:
            perf = performance.get(doctor_id)
            if perf is None:
                name = f"{text_field(doctor, 'firstName')} {text_field(doctor, 'lastName')}".strip()
                perf = performance[doctor_id] = {
                    "doctor_id": doctor_id,
                    "name": name,
                    "specialization": spec,
                    "total_appointments": 0,
                    "completed": 0,
                    "cancelled": 0,
                }
            perf["total_appointments"] += 1
            status = get_field(apt, "status")
            if status == "completed":
                perf["completed"] += 1
            elif status == "cancelled":
                perf["cancelled"] += 1

    top_specializations = sorted(
        (
            SpecializationDemand(
                specialization=spec,
                demand=data["count"],
                doctor_count=len(data["doctors"]),
                demand_per_doctor=(
                    round_half_up(data["count"] / len(data["doctors"]), 1) if data["doctors"] else 0.0
                ),
            )
            for spec, data in demand.items()
        ),
        key=lambda s: s.demand,
        reverse=True,
    )[:TOP_N]

    top_doctors = sorted(
        (DoctorPerformance(**perf) for perf in performance.values()),
        key=lambda d: d.total_appointments,
        reverse=True,
    )[:TOP_N]

    return DoctorAnalytics(
        top_specializations=top_specializations,
        top_doctors=top_doctors,
        insights=doctor_insights(top_specializations),
    )


def doctor_insights(top_specializations: Sequence[SpecializationDemand]) -> list[str]:
    insights: list[str] = []
    if top_specializations:
        top = top_specializations[0]
        insights.append(
            f"{top.specialization} is the most in-demand specialization with {top.demand} appointments."
        )
        if top.demand_per_doctor > HIGH_WORKLOAD_THRESHOLD:
            insights.append(
                f"High workload detected: {to_fixed(top.demand_per_doctor, 1)} appointments "
                f"per {top.specialization} doctor."
            )
    return insights
