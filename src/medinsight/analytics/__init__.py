"""Operational analytics over platform records.

Five independent aggregators (products, doctors, patients, business,
scalability) feed one recommendation synthesizer.  ``AnalyticsEngine``
runs them together for a single request.
"""

from __future__ import annotations

from medinsight.analytics.business import analyze_business_feasibility
from medinsight.analytics.doctors import analyze_doctor_specializations
from medinsight.analytics.engine import AnalyticsEngine
from medinsight.analytics.models import (
    AggregateBundle,
    AnalyticsDataset,
    Bottleneck,
    BusinessAnalytics,
    DoctorAnalytics,
    InsightsReport,
    PatientAnalytics,
    Priority,
    ProductAnalytics,
    Recommendation,
    ScalabilityAnalytics,
    ScalabilitySnapshot,
)
from medinsight.analytics.patients import analyze_patient_behavior
from medinsight.analytics.products import analyze_product_trends
from medinsight.analytics.recommendations import RECOMMENDATION_RULES, RecommendationRule, synthesize
from medinsight.analytics.scalability import (
    analyze_scalability,
    calculate_appointment_load,
    calculate_user_growth,
)

__all__ = [
    "AnalyticsEngine",
    "AnalyticsDataset",
    "AggregateBundle",
    "InsightsReport",
    "ProductAnalytics",
    "DoctorAnalytics",
    "PatientAnalytics",
    "BusinessAnalytics",
    "ScalabilityAnalytics",
    "ScalabilitySnapshot",
    "Bottleneck",
    "Priority",
    "Recommendation",
    "RecommendationRule",
    "RECOMMENDATION_RULES",
    "analyze_product_trends",
    "analyze_doctor_specializations",
    "analyze_patient_behavior",
    "analyze_business_feasibility",
    "analyze_scalability",
    "calculate_user_growth",
    "calculate_appointment_load",
    "synthesize",
]
