"""Shared fixtures for medinsight tests."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone

import pytest

from medinsight.analytics.models import AnalyticsDataset
from medinsight.classification.classifier import MedicalRecordClassifier
from medinsight.core.config import ClassifierConfig

NOW = datetime(2024, 6, 30, 12, 0, tzinfo=timezone.utc)
TODAY = date(2024, 6, 30)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """App startup reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def classifier() -> MedicalRecordClassifier:
    """Classifier with default tuning, independent of environment overrides."""
    return MedicalRecordClassifier(ClassifierConfig(
        confidence_divisor=50.0,
        high_confidence_threshold=0.6,
        image_override_enabled=True,
        image_override_threshold=0.5,
    ))


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def stored_records() -> list[dict]:
    """Medical records as the persistence layer returns them."""
    return [
        {
            "_id": "rec-1",
            "fileName": "CBC_Report_JohnDoe.pdf",
            "title": "",
            "mimeType": "application/pdf",
            "type": "other",
            "status": "active",
        },
        {
            "_id": "rec-2",
            "fileName": "discharge_summary_final.pdf",
            "title": "Hospital Discharge Summary",
            "mimeType": "application/pdf",
            "type": "other",
        },
        {
            "_id": "rec-3",
            "fileName": "IMG_0042.jpg",
            "mimeType": "image/jpeg",
            "type": "other",
            "status": "active",
            "isAICategorized": True,
            "aiCategory": "Scan Report",
            "aiCategoryConfidence": 0,
        },
        {
            "_id": "rec-4",
            "fileName": "chest_xray.png",
            "type": "xray",
            "status": "deleted",
        },
    ]


@pytest.fixture
def orders() -> list[dict]:
    return [
        {
            "_id": "o1",
            "totalAmount": 20,
            "createdAt": "2024-06-20T09:00:00Z",
            "items": [{"product": {"_id": "p1", "name": "Vitamin D"}, "quantity": 2, "price": 10}],
        },
        {
            "_id": "o2",
            "totalAmount": 5,
            "createdAt": "2024-06-25T09:00:00Z",
            "items": [{"productName": "Bandage", "price": 5}],
        },
        {
            "_id": "o3",
            "totalAmount": 10,
            "createdAt": "2024-05-20T09:00:00Z",
            "items": [{"product": {"_id": "p1", "name": "Vitamin D"}, "quantity": 1, "price": 10}],
        },
    ]


@pytest.fixture
def appointments() -> list[dict]:
    ana = {"_id": "d1", "firstName": "Ana", "lastName": "Lee", "specialization": "Cardiology"}
    raj = {"_id": "d2", "firstName": "Raj", "lastName": "Patel", "specialization": "Cardiology"}
    return [
        {"doctor": ana, "patient": {"_id": "u1"}, "status": "completed",
         "consultationFee": 100, "createdAt": "2024-05-02T10:00:00Z"},
        {"doctor": ana, "patient": {"_id": "u1"}, "status": "cancelled",
         "consultationFee": 100, "createdAt": "2024-06-02T10:00:00Z"},
        {"doctor": raj, "patient": {"_id": "u1"}, "status": "completed",
         "fee": 50, "createdAt": "2024-06-03T10:00:00Z"},
        {"doctor": "d3", "specialization": "Dermatology", "patientId": "u2"},
        {"patient": {"_id": "u4"}, "patientId": "u4"},
    ]


@pytest.fixture
def patients() -> list[dict]:
    return [
        {"_id": "u1", "age": 30, "gender": "Female"},
        {"_id": "u2", "dateOfBirth": "1950-01-01", "gender": "male"},
        {"_id": "u3", "gender": "unknown"},
        {"_id": "u4", "age": 40},
    ]


@pytest.fixture
def visits() -> list[dict]:
    return [{"diagnosis": "Hypertension"}, {"reason": "Hypertension"}, {}]


@pytest.fixture
def dataset(orders, appointments, patients, visits) -> AnalyticsDataset:
    return AnalyticsDataset(
        orders=orders,
        appointments=appointments,
        patients=patients,
        visits=visits,
        users=[
            {"createdAt": "2024-04-10T00:00:00Z"},
            {"createdAt": "2024-05-10T00:00:00Z"},
            {"createdAt": "2024-05-11T00:00:00Z"},
        ],
    )
