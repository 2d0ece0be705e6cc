"""Scalability bottleneck detection over an explicit metrics snapshot.

Thresholds, each evaluated independently:

* appointment load above 80 %: capacity bottleneck, high severity
* error rate above 5 %: reliability bottleneck, high severity
* average response time above 2000 ms: performance bottleneck, medium severity
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping, Sequence
from typing import Any, Union

from medinsight.analytics.models import (
    Bottleneck,
    Priority,
    ScalabilityAnalytics,
    ScalabilityMetrics,
    ScalabilitySnapshot,
)
from medinsight.records import format_number, get_field, month_key, to_fixed

log = logging.getLogger(__name__)

LOAD_THRESHOLD = 80
ERROR_RATE_THRESHOLD = 5
RESPONSE_TIME_THRESHOLD_MS = 2000


def analyze_scalability(snapshot: Union[ScalabilitySnapshot, Mapping[str, Any], None]) -> ScalabilityAnalytics:
    """Flag bottlenecks and score headroom from 0 to 100."""
    if not isinstance(snapshot, ScalabilitySnapshot):
        snapshot = ScalabilitySnapshot.model_validate(dict(snapshot or {}))

    metrics = ScalabilityMetrics(
        user_growth=list(snapshot.user_growth),
        appointment_load=snapshot.appointment_load,
        system_capacity=snapshot.system_capacity,
        response_time=snapshot.avg_response_time,
        error_rate=snapshot.error_rate,
    )

    growth_trend = calculate_growth_trend(metrics.user_growth)
    bottlenecks = detect_bottlenecks(metrics)
    if bottlenecks:
        log.info("Detected %d scalability bottleneck(s)", len(bottlenecks))

    return ScalabilityAnalytics(
        metrics=metrics,
        growth_trend=growth_trend,
        bottlenecks=bottlenecks,
        scalability_score=calculate_scalability_score(metrics, bottlenecks),
        insights=scalability_insights(bottlenecks, growth_trend),
    )


def detect_bottlenecks(metrics: ScalabilityMetrics) -> list[Bottleneck]:
    bottlenecks: list[Bottleneck] = []
    if metrics.appointment_load > LOAD_THRESHOLD:
        bottlenecks.append(Bottleneck(
            area="Appointment Management",
            severity=Priority.HIGH,
            issue="System approaching capacity limit",
            recommendation="Consider load balancing or capacity expansion",
        ))
    if metrics.error_rate > ERROR_RATE_THRESHOLD:
        bottlenecks.append(Bottleneck(
            area="System Reliability",
            severity=Priority.HIGH,
            issue=f"High error rate: {format_number(metrics.error_rate)}%",
            recommendation="Review error logs and implement error handling improvements",
        ))
    if metrics.response_time > RESPONSE_TIME_THRESHOLD_MS:
        bottlenecks.append(Bottleneck(
            area="Performance",
            severity=Priority.MEDIUM,
            issue="Slow response times detected",
            recommendation="Optimize database queries and implement caching",
        ))
    return bottlenecks


def calculate_scalability_score(metrics: ScalabilityMetrics, bottlenecks: Sequence[Bottleneck]) -> int:
    score = 100
    score -= len(bottlenecks) * 15
    if metrics.error_rate > ERROR_RATE_THRESHOLD:
        score -= 20
    if metrics.response_time > RESPONSE_TIME_THRESHOLD_MS:
        score -= 15
    if metrics.appointment_load > LOAD_THRESHOLD:
        score -= 10
    return max(0, score)


def calculate_growth_trend(user_growth: Sequence[float]) -> float:
    """Percent change between the last two growth points; 0 without a usable base."""
    if len(user_growth) < 2:
        return 0.0
    previous, latest = user_growth[-2], user_growth[-1]
    if not previous:
        return 0.0
    return (latest - previous) / previous * 100


def scalability_insights(bottlenecks: Sequence[Bottleneck], growth_trend: float) -> list[str]:
    insights: list[str] = []
    if not bottlenecks:
        insights.append("System is operating within normal parameters with no critical bottlenecks.")
    else:
        insights.append(f"{len(bottlenecks)} performance bottleneck(s) detected requiring attention.")
    if growth_trend > 0:
        insights.append(f"User base growing at {to_fixed(growth_trend, 1)}% - ensure infrastructure can scale.")
    return insights


def calculate_user_growth(users: Sequence[dict[str, Any]]) -> list[int]:
    """Sign-ups per calendar month, oldest month first."""
    monthly = Counter(
        key for key in (month_key(get_field(user, "createdAt")) for user in users) if key
    )
    return [monthly[month] for month in sorted(monthly)]


def calculate_appointment_load(appointment_count: int, capacity: int = 1000) -> float:
    """Appointments as a percentage of nominal capacity."""
    if capacity <= 0:
        return 0.0
    return appointment_count / capacity * 100
