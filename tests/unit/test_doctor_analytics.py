"""Tests for specialization demand and doctor performance."""

from __future__ import annotations

from medinsight.analytics.doctors import analyze_doctor_specializations


class TestSpecializationDemand:
    def test_demand_and_distinct_doctors(self, appointments):
        result = analyze_doctor_specializations(appointments)
        specs = [(s.specialization, s.demand, s.doctor_count, s.demand_per_doctor)
                 for s in result.top_specializations]
        assert specs == [
            ("Cardiology", 3, 2, 1.5),
            ("Dermatology", 1, 0, 0.0),
            ("General", 1, 0, 0.0),
        ]

    def test_empty(self):
        result = analyze_doctor_specializations([])
        assert result.top_specializations == []
        assert result.top_doctors == []
        assert result.insights == []


class TestDoctorPerformance:
    def test_per_doctor_tallies(self, appointments):
        result = analyze_doctor_specializations(appointments)
        ana, raj = result.top_doctors
        assert (ana.doctor_id, ana.name, ana.total_appointments, ana.completed, ana.cancelled) == (
            "d1", "Ana Lee", 2, 1, 1,
        )
        assert raj.doctor_id == "d2"
        assert raj.rating == 0.0

    def test_bare_doctor_ids_are_not_tracked(self):
        result = analyze_doctor_specializations([{"doctor": "d9", "specialization": "ENT"}])
        assert result.top_doctors == []
        assert result.top_specializations[0].specialization == "ENT"


class TestDoctorInsights:
    def test_most_in_demand(self, appointments):
        insights = analyze_doctor_specializations(appointments).insights
        assert insights == ["Cardiology is the most in-demand specialization with 3 appointments."]

    def test_high_workload(self):
        doctor = {"_id": "d1", "specialization": "Cardiology"}
        result = analyze_doctor_specializations([{"doctor": doctor}] * 21)
        assert result.top_specializations[0].demand_per_doctor == 21.0
        assert result.insights[1] == "High workload detected: 21.0 appointments per Cardiology doctor."
