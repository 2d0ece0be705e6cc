"""Analytics orchestration: run the five aggregators, join, synthesize.

The aggregators share no state, so they run concurrently on worker
threads.  Recommendation synthesis waits for all of them.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, timezone
from typing import Optional

from medinsight.analytics.business import analyze_business_feasibility
from medinsight.analytics.doctors import analyze_doctor_specializations
from medinsight.analytics.models import (
    AggregateBundle,
    AnalyticsDataset,
    InsightsReport,
    Recommendation,
    ScalabilitySnapshot,
)
from medinsight.analytics.patients import analyze_patient_behavior
from medinsight.analytics.products import analyze_product_trends
from medinsight.analytics.recommendations import synthesize
from medinsight.analytics.scalability import (
    analyze_scalability,
    calculate_appointment_load,
    calculate_user_growth,
)
from medinsight.core.config import AnalyticsConfig

log = logging.getLogger(__name__)


class AnalyticsEngine:
    """Builds the aggregate bundle and recommendations for one request."""

    def __init__(self, config: AnalyticsConfig | None = None) -> None:
        self._config = config or AnalyticsConfig()

    def build_snapshot(self, dataset: AnalyticsDataset) -> ScalabilitySnapshot:
        """Scalability inputs from the dataset itself.

        User growth and appointment load come from the records; response
        time and error rate use the configured values.
        """
        return ScalabilitySnapshot(
            user_growth=calculate_user_growth(dataset.users),
            appointment_load=calculate_appointment_load(
                len(dataset.appointments), self._config.appointment_capacity
            ),
            system_capacity=self._config.system_capacity,
            avg_response_time=self._config.default_response_time_ms,
            error_rate=self._config.default_error_rate,
        )

    async def build_bundle(
        self,
        dataset: AnalyticsDataset,
        *,
        now: Optional[datetime] = None,
        today: Optional[date] = None,
    ) -> AggregateBundle:
        snapshot = dataset.scalability or self.build_snapshot(dataset)

        products, doctors, patients, business, scalability = await asyncio.gather(
            asyncio.to_thread(analyze_product_trends, dataset.orders, now),
            asyncio.to_thread(analyze_doctor_specializations, dataset.appointments, dataset.doctors),
            asyncio.to_thread(
                analyze_patient_behavior, dataset.patients, dataset.appointments, dataset.visits, today
            ),
            asyncio.to_thread(
                analyze_business_feasibility, dataset.orders, dataset.appointments, dataset.products
            ),
            asyncio.to_thread(analyze_scalability, snapshot),
        )
        return AggregateBundle(
            products=products,
            doctors=doctors,
            patients=patients,
            business=business,
            scalability=scalability,
        )

    async def generate_insights(
        self,
        dataset: AnalyticsDataset,
        *,
        now: Optional[datetime] = None,
        today: Optional[date] = None,
    ) -> InsightsReport:
        """Run every aggregator and attach the synthesized recommendations."""
        bundle = await self.build_bundle(dataset, now=now, today=today)
        recommendations = synthesize(bundle)
        log.info(
            "Generated insights",
            extra={
                "orders": len(dataset.orders),
                "appointments": len(dataset.appointments),
                "patients": len(dataset.patients),
                "recommendations": len(recommendations),
            },
        )
        return InsightsReport(
            **dict(bundle),
            recommendations=recommendations,
            generated_at=now or datetime.now(timezone.utc),
        )

    async def generate_recommendations(self, dataset: AnalyticsDataset) -> list[Recommendation]:
        bundle = await self.build_bundle(dataset)
        return synthesize(bundle)

    def run_insights(self, dataset: AnalyticsDataset) -> InsightsReport:
        """Synchronous entry point for callers without an event loop."""
        return asyncio.run(self.generate_insights(dataset))
