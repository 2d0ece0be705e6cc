"""Aggregate value objects, the aggregate bundle and recommendations."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Union

from pydantic import Field, field_validator

from medinsight.models import CamelModel
from medinsight.records import safe_num

Number = Union[int, float]


class Priority(str, Enum):
    """Recommendation and bottleneck priority."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.CRITICAL: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


# ── Products ─────────────────────────────────────────────────────────


class ProductTrend(CamelModel):
    name: str
    count: Number = 0
    revenue: Number = 0
    product_id: Optional[str] = None


class ProductAnalytics(CamelModel):
    top_products: list[ProductTrend] = Field(default_factory=list)
    total_orders: int = 0
    growth_rate: float = 0.0
    insights: list[str] = Field(default_factory=list)


# ── Doctors ──────────────────────────────────────────────────────────


class SpecializationDemand(CamelModel):
    specialization: str
    demand: int = 0
    doctor_count: int = 0
    demand_per_doctor: float = 0.0


class DoctorPerformance(CamelModel):
    doctor_id: str
    name: str = ""
    specialization: str = ""
    total_appointments: int = 0
    completed: int = 0
    cancelled: int = 0
    rating: float = 0.0


class DoctorAnalytics(CamelModel):
    top_specializations: list[SpecializationDemand] = Field(default_factory=list)
    top_doctors: list[DoctorPerformance] = Field(default_factory=list)
    insights: list[str] = Field(default_factory=list)


# ── Patients ─────────────────────────────────────────────────────────


class Demographics(CamelModel):
    age_groups: dict[str, int] = Field(default_factory=dict)
    gender_distribution: dict[str, int] = Field(default_factory=dict)
    total_patients: int = 0


class HealthConcern(CamelModel):
    condition: str
    count: int = 0


class PatientAnalytics(CamelModel):
    demographics: Demographics = Field(default_factory=Demographics)
    appointment_frequency: dict[str, int] = Field(default_factory=dict)
    top_health_concerns: list[HealthConcern] = Field(default_factory=list)
    insights: list[str] = Field(default_factory=list)


# ── Scalability ──────────────────────────────────────────────────────


class ScalabilitySnapshot(CamelModel):
    """Operational metrics supplied by the caller.

    Response time and error rate must come from a real monitoring source
    or from test fixtures; nothing here generates them.
    """

    user_growth: list[Number] = Field(default_factory=list)
    appointment_load: Number = 0.0
    system_capacity: Number = 100.0
    avg_response_time: Number = 0.0
    error_rate: Number = 0.0

    @field_validator("appointment_load", "avg_response_time", "error_rate", mode="before")
    @classmethod
    def _zero_when_missing(cls, value: Any) -> Number:
        return safe_num(value)

    @field_validator("system_capacity", mode="before")
    @classmethod
    def _capacity_default(cls, value: Any) -> Number:
        return safe_num(value) or 100

    @field_validator("user_growth", mode="before")
    @classmethod
    def _growth_list(cls, value: Any) -> list[Number]:
        if not isinstance(value, (list, tuple)):
            return []
        return [safe_num(v) for v in value]


class ScalabilityMetrics(CamelModel):
    user_growth: list[Number] = Field(default_factory=list)
    appointment_load: Number = 0.0
    system_capacity: Number = 100.0
    response_time: Number = 0.0
    error_rate: Number = 0.0


class Bottleneck(CamelModel):
    area: str
    severity: Priority
    issue: str
    recommendation: str


class ScalabilityAnalytics(CamelModel):
    metrics: ScalabilityMetrics = Field(default_factory=ScalabilityMetrics)
    growth_trend: float = 0.0
    bottlenecks: list[Bottleneck] = Field(default_factory=list)
    scalability_score: int = 100
    insights: list[str] = Field(default_factory=list)


# ── Business ─────────────────────────────────────────────────────────


class MonthlyRevenue(CamelModel):
    month: str
    products: Number = 0
    appointments: Number = 0
    total: Number = 0


class Revenue(CamelModel):
    total: Number = 0
    from_products: Number = 0
    from_appointments: Number = 0
    monthly: list[MonthlyRevenue] = Field(default_factory=list)


class BusinessMetrics(CamelModel):
    avg_order_value: Number = 0.0
    avg_appointment_fee: Number = 0.0
    total_transactions: int = 0
    health_score: int = 50


class BusinessAnalytics(CamelModel):
    revenue: Revenue = Field(default_factory=Revenue)
    metrics: BusinessMetrics = Field(default_factory=BusinessMetrics)
    insights: list[str] = Field(default_factory=list)


# ── Bundle and recommendations ───────────────────────────────────────


class AggregateBundle(CamelModel):
    """All five aggregate outputs, the synthesizer's only input."""

    products: ProductAnalytics = Field(default_factory=ProductAnalytics)
    doctors: DoctorAnalytics = Field(default_factory=DoctorAnalytics)
    patients: PatientAnalytics = Field(default_factory=PatientAnalytics)
    business: BusinessAnalytics = Field(default_factory=BusinessAnalytics)
    scalability: ScalabilityAnalytics = Field(default_factory=ScalabilityAnalytics)


class Recommendation(CamelModel):
    category: str
    priority: Priority
    title: str
    description: str
    action: str
    impact: str


class InsightsReport(AggregateBundle):
    """Aggregates plus synthesized recommendations for one analytics request."""

    recommendations: list[Recommendation] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class AnalyticsDataset(CamelModel):
    """Record slices fetched by the caller for one analytics request."""

    orders: list[dict[str, Any]] = Field(default_factory=list)
    appointments: list[dict[str, Any]] = Field(default_factory=list)
    patients: list[dict[str, Any]] = Field(default_factory=list)
    doctors: list[dict[str, Any]] = Field(default_factory=list)
    visits: list[dict[str, Any]] = Field(default_factory=list)
    products: list[dict[str, Any]] = Field(default_factory=list)
    users: list[dict[str, Any]] = Field(default_factory=list)
    scalability: Optional[ScalabilitySnapshot] = None
