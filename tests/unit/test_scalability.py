"""Tests for scalability bottleneck detection and scoring."""

from __future__ import annotations

import pytest

from medinsight.analytics.models import Priority, ScalabilitySnapshot
from medinsight.analytics.scalability import (
    analyze_scalability,
    calculate_appointment_load,
    calculate_growth_trend,
    calculate_user_growth,
)

STRESSED = {"appointmentLoad": 85, "errorRate": 6, "avgResponseTime": 2500, "userGrowth": [100, 120]}


class TestBottlenecks:
    def test_all_thresholds_exceeded(self):
        result = analyze_scalability(STRESSED)
        assert [b.area for b in result.bottlenecks] == [
            "Appointment Management",
            "System Reliability",
            "Performance",
        ]
        assert [b.severity for b in result.bottlenecks] == [Priority.HIGH, Priority.HIGH, Priority.MEDIUM]
        assert result.bottlenecks[1].issue == "High error rate: 6%"

    def test_thresholds_are_strict(self):
        result = analyze_scalability({"appointmentLoad": 80, "errorRate": 5, "avgResponseTime": 2000})
        assert result.bottlenecks == []
        assert result.scalability_score == 100

    def test_score(self):
        assert analyze_scalability(STRESSED).scalability_score == 10

    @pytest.mark.parametrize(
        "snapshot",
        [None, {}, STRESSED, {"appointmentLoad": 1000, "errorRate": 100, "avgResponseTime": 10**6}],
    )
    def test_score_bounded(self, snapshot):
        assert 0 <= analyze_scalability(snapshot).scalability_score <= 100


class TestSnapshotDefaults:
    def test_missing_snapshot(self):
        result = analyze_scalability(None)
        assert result.metrics.system_capacity == 100
        assert result.metrics.user_growth == []
        assert result.growth_trend == 0.0
        assert result.insights == ["System is operating within normal parameters with no critical bottlenecks."]

    def test_accepts_model_and_snake_case(self):
        model = ScalabilitySnapshot(appointment_load=90)
        assert len(analyze_scalability(model).bottlenecks) == 1
        assert len(analyze_scalability({"appointment_load": 90}).bottlenecks) == 1

    def test_garbage_values_default_to_zero(self):
        result = analyze_scalability({"errorRate": "n/a", "userGrowth": "lots", "systemCapacity": 0})
        assert result.metrics.error_rate == 0
        assert result.metrics.user_growth == []
        assert result.metrics.system_capacity == 100


class TestGrowthTrend:
    @pytest.mark.parametrize(
        "points,expected",
        [([], 0.0), ([5], 0.0), ([0, 10], 0.0), ([100, 120], 20.0), ([10, 20, 15], -25.0)],
    )
    def test_trend(self, points, expected):
        assert calculate_growth_trend(points) == pytest.approx(expected)

    def test_insights(self):
        result = analyze_scalability(STRESSED)
        assert result.insights == [
            "3 performance bottleneck(s) detected requiring attention.",
            "User base growing at 20.0% - ensure infrastructure can scale.",
        ]

    def test_very_large_growth(self):
        insights = analyze_scalability({"userGrowth": [1, 2.0**100]}).insights
        assert insights[-1].startswith("User base growing at 12676506002282")
        assert insights[-1].endswith("% - ensure infrastructure can scale.")


class TestSnapshotInputs:
    def test_user_growth_by_month(self):
        users = [
            {"createdAt": "2024-02-01T00:00:00Z"},
            {"createdAt": "2024-01-05T00:00:00Z"},
            {"createdAt": "2024-01-20T00:00:00Z"},
            {"name": "no date"},
        ]
        assert calculate_user_growth(users) == [2, 1]

    def test_appointment_load(self):
        assert calculate_appointment_load(850) == 85.0
        assert calculate_appointment_load(5, capacity=10) == 50.0
        assert calculate_appointment_load(5, capacity=0) == 0.0
