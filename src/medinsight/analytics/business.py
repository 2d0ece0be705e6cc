"""Revenue totals, monthly trend and a bounded business health score."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from medinsight.analytics.models import BusinessAnalytics, BusinessMetrics, MonthlyRevenue, Revenue
from medinsight.records import first_truthy, format_number, get_field, month_key, round_half_up, safe_num, to_fixed

MONTHS_KEPT = 12


def _order_amount(order: dict[str, Any]) -> float:
    return safe_num(get_field(order, "totalAmount"))


def _appointment_fee(apt: dict[str, Any]) -> float:
    return safe_num(first_truthy(get_field(apt, "consultationFee"), get_field(apt, "fee"), default=0))


def analyze_business_feasibility(
    orders: Sequence[dict[str, Any]],
    appointments: Sequence[dict[str, Any]],
    products: Sequence[dict[str, Any]] = (),
) -> BusinessAnalytics:
    """Sum product and consultation revenue and score overall business health."""
    from_products = sum(_order_amount(o) for o in orders)
    from_appointments = sum(_appointment_fee(a) for a in appointments)
    total = from_products + from_appointments

    monthly = calculate_monthly_revenue(orders, appointments)
    health_score = calculate_business_health(total, len(orders), len(appointments))

    avg_order_value = from_products / len(orders) if orders else 0
    avg_appointment_fee = from_appointments / len(appointments) if appointments else 0

    return BusinessAnalytics(
        revenue=Revenue(
            total=total,
            from_products=from_products,
            from_appointments=from_appointments,
            monthly=monthly,
        ),
        metrics=BusinessMetrics(
            avg_order_value=round_half_up(avg_order_value, 2),
            avg_appointment_fee=round_half_up(avg_appointment_fee, 2),
            total_transactions=len(orders) + len(appointments),
            health_score=health_score,
        ),
        insights=business_insights(total, health_score, monthly),
    )


def calculate_business_health(total_revenue: float, order_count: int, appointment_count: int) -> int:
    """50 baseline, plus 20 for revenue over 10k, 15 each for order and appointment volume; capped at 100."""
    score = 50
    if total_revenue > 10000:
        score += 20
    if order_count > 100:
        score += 15
    if appointment_count > 200:
        score += 15
    return min(100, score)


def calculate_monthly_revenue(
    orders: Sequence[dict[str, Any]],
    appointments: Sequence[dict[str, Any]],
) -> list[MonthlyRevenue]:
    """Revenue per ``YYYY-MM``, oldest first, limited to the latest 12 months.

    Records without a parseable ``createdAt`` count toward totals but not
    toward any month.
    """
    monthly: dict[str, dict[str, float]] = {}

    def _bucket(created: Any) -> dict[str, float] | None:
        key = month_key(created)
        if key is None:
            return None
        return monthly.setdefault(key, {"products": 0, "appointments": 0, "total": 0})

    for order in orders:
        bucket = _bucket(get_field(order, "createdAt"))
        if bucket is not None:
            amount = _order_amount(order)
            bucket["products"] += amount
            bucket["total"] += amount

    for apt in appointments:
        bucket = _bucket(get_field(apt, "createdAt"))
        if bucket is not None:
            fee = _appointment_fee(apt)
            bucket["appointments"] += fee
            bucket["total"] += fee

    return [MonthlyRevenue(month=month, **monthly[month]) for month in sorted(monthly)][-MONTHS_KEPT:]


def business_insights(total: float, health_score: int, monthly: Sequence[MonthlyRevenue]) -> list[str]:
    insights = [
        f"Total platform revenue: ${to_fixed(total, 2)}",
        f"Business health score: {health_score}/100",
    ]
    if len(monthly) >= 2:
        latest = monthly[-1].total
        previous = monthly[-2].total
        if previous:
            growth = round_half_up((latest - previous) / previous * 100, 1)
            direction = "growth" if growth > 0 else "decline"
            insights.append(f"Month-over-month revenue {direction}: {format_number(abs(growth))}%")
    return insights
