"""Tests for revenue aggregation and business health."""

from __future__ import annotations

import pytest

from medinsight.analytics.business import (
    analyze_business_feasibility,
    business_insights,
    calculate_business_health,
    calculate_monthly_revenue,
)
from medinsight.analytics.models import MonthlyRevenue


class TestRevenue:
    def test_totals(self, orders, appointments):
        revenue = analyze_business_feasibility(orders, appointments).revenue
        assert revenue.from_products == 35
        assert revenue.from_appointments == 250
        assert revenue.total == 285

    def test_metrics(self, orders, appointments):
        metrics = analyze_business_feasibility(orders, appointments).metrics
        assert metrics.avg_order_value == 11.67
        assert metrics.avg_appointment_fee == 50.0
        assert metrics.total_transactions == 8
        assert metrics.health_score == 50

    def test_empty(self):
        result = analyze_business_feasibility([], [])
        assert result.revenue.total == 0
        assert result.metrics.avg_order_value == 0
        assert result.insights == ["Total platform revenue: $0.00", "Business health score: 50/100"]

    def test_string_amounts(self):
        result = analyze_business_feasibility([{"totalAmount": "12.5"}], [{"consultationFee": "abc"}])
        assert result.revenue.from_products == 12.5
        assert result.revenue.from_appointments == 0


class TestMonthlyRevenue:
    def test_buckets_sorted(self, orders, appointments):
        monthly = calculate_monthly_revenue(orders, appointments)
        assert [(m.month, m.products, m.appointments, m.total) for m in monthly] == [
            ("2024-05", 10, 100, 110),
            ("2024-06", 25, 150, 175),
        ]

    def test_last_twelve_months(self):
        orders = [{"totalAmount": 1, "createdAt": f"{2023 + (i // 12)}-{i % 12 + 1:02d}-15"} for i in range(14)]
        monthly = calculate_monthly_revenue(orders, [])
        assert len(monthly) == 12
        assert monthly[0].month == "2023-03"
        assert monthly[-1].month == "2024-02"


class TestBusinessHealth:
    @pytest.mark.parametrize(
        "total,orders,appointments,expected",
        [(0, 0, 0, 50), (10001, 0, 0, 70), (0, 101, 201, 80), (20000, 150, 250, 100), (10000, 100, 200, 50)],
    )
    def test_score(self, total, orders, appointments, expected):
        assert calculate_business_health(total, orders, appointments) == expected


class TestBusinessInsights:
    def test_month_over_month_growth(self, orders, appointments):
        insights = analyze_business_feasibility(orders, appointments).insights
        assert insights == [
            "Total platform revenue: $285.00",
            "Business health score: 50/100",
            "Month-over-month revenue growth: 59.1%",
        ]

    def test_decline(self):
        monthly = [MonthlyRevenue(month="2024-01", total=200), MonthlyRevenue(month="2024-02", total=150)]
        assert business_insights(350, 50, monthly)[-1] == "Month-over-month revenue decline: 25%"

    def test_zero_previous_month_skipped(self):
        monthly = [MonthlyRevenue(month="2024-01", total=0), MonthlyRevenue(month="2024-02", total=150)]
        assert len(business_insights(150, 50, monthly)) == 2

    def test_very_large_revenue(self):
        insights = analyze_business_feasibility([{"totalAmount": 2.0**100}], []).insights
        assert insights[0] == f"Total platform revenue: ${2**100}.00"
