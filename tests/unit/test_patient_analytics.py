"""Tests for patient demographics and engagement."""

from __future__ import annotations

from datetime import date

import pytest

from medinsight.analytics.patients import age_band, analyze_patient_behavior, calculate_age, engagement_tier


class TestAge:
    def test_birthday_not_reached(self):
        assert calculate_age("2000-07-01", date(2024, 6, 30)) == 23

    def test_birthday_today(self):
        assert calculate_age("2000-06-30", date(2024, 6, 30)) == 24

    def test_missing(self):
        assert calculate_age(None) == 0

    @pytest.mark.parametrize(
        "age,band",
        [(0, "0-18"), (18, "0-18"), (19, "19-35"), (35, "19-35"), (50, "36-50"), (65, "51-65"), (66, "65+")],
    )
    def test_bands_inclusive_upper_bound(self, age, band):
        assert age_band(age) == band


class TestEngagementTier:
    @pytest.mark.parametrize("count,tier", [(1, "low"), (2, "low"), (3, "medium"), (5, "medium"), (6, "high")])
    def test_tiers(self, count, tier):
        assert engagement_tier(count) == tier


class TestPatientBehavior:
    def test_demographics(self, patients, appointments, visits, today):
        result = analyze_patient_behavior(patients, appointments, visits, today)
        demo = result.demographics
        assert demo.total_patients == 4
        assert demo.age_groups == {"0-18": 1, "19-35": 1, "36-50": 1, "51-65": 0, "65+": 1}
        assert demo.gender_distribution == {"male": 1, "female": 1, "other": 2}

    def test_appointment_frequency(self, patients, appointments, visits, today):
        result = analyze_patient_behavior(patients, appointments, visits, today)
        assert result.appointment_frequency == {"medium": 1, "low": 2}

    def test_health_concerns(self, patients, appointments, visits, today):
        result = analyze_patient_behavior(patients, appointments, visits, today)
        assert [(h.condition, h.count) for h in result.top_health_concerns] == [
            ("Hypertension", 2),
            ("General Checkup", 1),
        ]

    def test_insights(self, patients, appointments, visits, today):
        result = analyze_patient_behavior(patients, appointments, visits, today)
        assert result.insights == [
            "Primary patient demographic: 0-18 age group (1 patients).",
            'Most common health concern: "Hypertension" (2 cases).',
        ]

    def test_no_patients(self, today):
        result = analyze_patient_behavior([], today=today)
        assert result.demographics.total_patients == 0
        assert result.appointment_frequency == {}
        assert result.insights == ["Primary patient demographic: 0-18 age group (0 patients)."]
