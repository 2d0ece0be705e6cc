"""medinsight: rule-based medical record classification and platform analytics.

Classification::

    from medinsight import classify, batch_classify, suggest_categories

Analytics::

    from medinsight import AnalyticsEngine, AnalyticsDataset, synthesize
"""

from __future__ import annotations

from medinsight.analytics import (
    AggregateBundle,
    AnalyticsDataset,
    AnalyticsEngine,
    InsightsReport,
    Recommendation,
    ScalabilitySnapshot,
    analyze_business_feasibility,
    analyze_doctor_specializations,
    analyze_patient_behavior,
    analyze_product_trends,
    analyze_scalability,
    synthesize,
)
from medinsight.classification import (
    ClassificationInput,
    ClassificationResult,
    MedicalRecordClassifier,
    auto_categorize,
    batch_classify,
    categorize_records,
    classify,
    get_all_categories,
    suggest_categories,
)
from medinsight.core.config import AppSettings
from medinsight.exceptions import (
    ConfigurationError,
    InvalidInputError,
    MedInsightError,
    RecordsNotFoundError,
)

__all__ = [
    # Classification
    "ClassificationInput",
    "ClassificationResult",
    "MedicalRecordClassifier",
    "classify",
    "batch_classify",
    "suggest_categories",
    "categorize_records",
    "auto_categorize",
    "get_all_categories",
    # Analytics
    "AnalyticsEngine",
    "AnalyticsDataset",
    "AggregateBundle",
    "InsightsReport",
    "Recommendation",
    "ScalabilitySnapshot",
    "analyze_product_trends",
    "analyze_doctor_specializations",
    "analyze_patient_behavior",
    "analyze_business_feasibility",
    "analyze_scalability",
    "synthesize",
    # Settings and errors
    "AppSettings",
    "MedInsightError",
    "InvalidInputError",
    "RecordsNotFoundError",
    "ConfigurationError",
]
