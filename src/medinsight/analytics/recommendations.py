"""Recommendation synthesis: a fixed, ordered rule list over the aggregate bundle.

Every rule inspects the bundle and emits zero or more recommendations.
Rules are evaluated in declaration order; the combined list is then
stable-sorted by priority, so equal-priority items keep emission order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from medinsight.analytics.models import AggregateBundle, Priority, Recommendation
from medinsight.records import format_number, to_fixed

log = logging.getLogger(__name__)

PRODUCT_GROWTH_THRESHOLD = 20
DEMAND_PER_DOCTOR_THRESHOLD = 15
LOW_ENGAGEMENT_SHARE = 0.6
HEALTH_SCORE_FLOOR = 60


@dataclass(frozen=True)
class RecommendationRule:
    """A named guard-and-build step of the synthesizer."""

    rule_id: str
    name: str
    evaluate: Callable[[AggregateBundle], list[Recommendation]]


def _top_product(bundle: AggregateBundle) -> list[Recommendation]:
    if not bundle.products.top_products:
        return []
    top = bundle.products.top_products[0]
    return [Recommendation(
        category="Products",
        priority=Priority.HIGH,
        title="Optimize Top Product Inventory",
        description=(
            f'"{top.name}" is your most ordered product. '
            "Ensure adequate stock levels and consider bundle offers."
        ),
        action="Increase inventory and create promotional campaigns",
        impact="high",
    )]


def _product_growth(bundle: AggregateBundle) -> list[Recommendation]:
    products = bundle.products
    if not products.top_products or products.growth_rate <= PRODUCT_GROWTH_THRESHOLD:
        return []
    return [Recommendation(
        category="Growth",
        priority=Priority.HIGH,
        title="Scale Product Operations",
        description=(
            f"Product orders growing at {format_number(products.growth_rate)}% monthly. "
            "Prepare for increased demand."
        ),
        action="Expand supplier relationships and storage capacity",
        impact="high",
    )]


def _specialist_demand(bundle: AggregateBundle) -> list[Recommendation]:
    if not bundle.doctors.top_specializations:
        return []
    top = bundle.doctors.top_specializations[0]
    if top.demand_per_doctor <= DEMAND_PER_DOCTOR_THRESHOLD:
        return []
    spec = top.specialization
    return [Recommendation(
        category="Doctors",
        priority=Priority.HIGH,
        title=f"High Demand for {spec} Specialists",
        description=(
            f"Each {spec} doctor handles {to_fixed(top.demand_per_doctor, 1)} appointments. "
            "Consider recruiting more specialists."
        ),
        action=f"Recruit 2-3 additional {spec} specialists",
        impact="high",
    )]


def _patient_retention(bundle: AggregateBundle) -> list[Recommendation]:
    frequency = bundle.patients.appointment_frequency
    engaged = sum(frequency.values())
    if engaged == 0 or frequency.get("low", 0) / engaged <= LOW_ENGAGEMENT_SHARE:
        return []
    return [Recommendation(
        category="Patient Engagement",
        priority=Priority.MEDIUM,
        title="Improve Patient Retention",
        description=(
            "Over 60% of patients have low appointment frequency. Implement retention strategies."
        ),
        action="Launch follow-up campaigns, wellness programs, and loyalty rewards",
        impact="medium",
    )]


def _bottlenecks(bundle: AggregateBundle) -> list[Recommendation]:
    return [
        Recommendation(
            category="System Performance",
            priority=bottleneck.severity,
            title=bottleneck.issue,
            description=f"Issue in {bottleneck.area}",
            action=bottleneck.recommendation,
            impact=bottleneck.severity.value,
        )
        for bottleneck in bundle.scalability.bottlenecks
    ]


def _business_health(bundle: AggregateBundle) -> list[Recommendation]:
    score = bundle.business.metrics.health_score
    if score >= HEALTH_SCORE_FLOOR:
        return []
    return [Recommendation(
        category="Business Health",
        priority=Priority.HIGH,
        title="Business Health Needs Attention",
        description=(
            f"Current health score: {score}/100. Revenue and engagement need improvement."
        ),
        action="Review pricing strategy, marketing campaigns, and user acquisition channels",
        impact="critical",
    )]


def _growth_strategy(bundle: AggregateBundle) -> list[Recommendation]:
    return [Recommendation(
        category="Growth Strategy",
        priority=Priority.MEDIUM,
        title="Expand Service Offerings",
        description=(
            "Based on user behavior, consider adding telemedicine, wellness packages, "
            "and preventive care programs."
        ),
        action="Conduct market research and pilot new service categories",
        impact="medium",
    )]


RECOMMENDATION_RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule("REC-001", "Top product inventory", _top_product),
    RecommendationRule("REC-002", "Product growth", _product_growth),
    RecommendationRule("REC-003", "Specialist demand", _specialist_demand),
    RecommendationRule("REC-004", "Patient retention", _patient_retention),
    RecommendationRule("REC-005", "Scalability bottlenecks", _bottlenecks),
    RecommendationRule("REC-006", "Business health", _business_health),
    RecommendationRule("REC-007", "Growth strategy", _growth_strategy),
)


def synthesize(
    bundle: AggregateBundle,
    rules: Sequence[RecommendationRule] = RECOMMENDATION_RULES,
) -> list[Recommendation]:
    """Evaluate every rule in order and return recommendations sorted by priority."""
    recommendations: list[Recommendation] = []
    for rule in rules:
        emitted = rule.evaluate(bundle)
        if emitted:
            log.debug("Rule %s emitted %d recommendation(s)", rule.rule_id, len(emitted))
        recommendations.extend(emitted)

    return sorted(recommendations, key=lambda r: r.priority.rank)
