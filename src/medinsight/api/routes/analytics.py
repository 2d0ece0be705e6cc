"""Operational analytics endpoints.

Every POST takes an ``AnalyticsDataset`` body.  Single-aggregator
endpoints only read the slices they need.
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Request
from pydantic import Field

from medinsight.analytics import (
    RECOMMENDATION_RULES,
    AnalyticsDataset,
    AnalyticsEngine,
    BusinessAnalytics,
    DoctorAnalytics,
    InsightsReport,
    PatientAnalytics,
    ProductAnalytics,
    Recommendation,
    ScalabilityAnalytics,
    analyze_business_feasibility,
    analyze_doctor_specializations,
    analyze_patient_behavior,
    analyze_product_trends,
    analyze_scalability,
)
from medinsight.models import CamelModel

log = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])

AGGREGATORS = ("products", "doctors", "patients", "business", "scalability")


class RecommendationsResponse(CamelModel):
    recommendations: list[Recommendation] = Field(default_factory=list)


class AnalyticsStatus(CamelModel):
    status: str = "operational"
    aggregators: list[str] = Field(default_factory=list)
    recommendation_rules: list[str] = Field(default_factory=list)


def _engine(req: Request) -> AnalyticsEngine:
    return req.app.state.engine


@router.post("/insights", response_model=InsightsReport)
async def insights(dataset: AnalyticsDataset, req: Request) -> InsightsReport:
    """All five aggregates plus prioritized recommendations."""
    return await _engine(req).generate_insights(dataset)


@router.post("/products", response_model=ProductAnalytics)
async def products(dataset: AnalyticsDataset) -> ProductAnalytics:
    return await asyncio.to_thread(analyze_product_trends, dataset.orders)


@router.post("/doctors", response_model=DoctorAnalytics)
async def doctors(dataset: AnalyticsDataset) -> DoctorAnalytics:
    return await asyncio.to_thread(analyze_doctor_specializations, dataset.appointments, dataset.doctors)


@router.post("/patients", response_model=PatientAnalytics)
async def patients(dataset: AnalyticsDataset) -> PatientAnalytics:
    return await asyncio.to_thread(
        analyze_patient_behavior, dataset.patients, dataset.appointments, dataset.visits
    )


@router.post("/business", response_model=BusinessAnalytics)
async def business(dataset: AnalyticsDataset) -> BusinessAnalytics:
    return await asyncio.to_thread(
        analyze_business_feasibility, dataset.orders, dataset.appointments, dataset.products
    )


@router.post("/scalability", response_model=ScalabilityAnalytics)
async def scalability(dataset: AnalyticsDataset, req: Request) -> ScalabilityAnalytics:
    """Bottlenecks from the supplied snapshot, or one derived from users and appointments."""
    snapshot = dataset.scalability or _engine(req).build_snapshot(dataset)
    return analyze_scalability(snapshot)


@router.post("/recommendations", response_model=RecommendationsResponse)
async def recommendations(dataset: AnalyticsDataset, req: Request) -> RecommendationsResponse:
    recs = await _engine(req).generate_recommendations(dataset)
    log.info("Recommendations generated", extra={"count": len(recs)})
    return RecommendationsResponse(recommendations=recs)


@router.get("/status", response_model=AnalyticsStatus)
async def status() -> AnalyticsStatus:
    return AnalyticsStatus(
        aggregators=list(AGGREGATORS),
        recommendation_rules=[rule.rule_id for rule in RECOMMENDATION_RULES],
    )
