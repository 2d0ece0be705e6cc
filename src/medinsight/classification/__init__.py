"""Rule-based medical record classification.

Usage::

    from medinsight.classification import classify, suggest_categories

    result = classify({"fileName": "CBC_Report.pdf"})
    result.category          # "Blood Test"
    suggest_categories("chest x-ray")
"""

from __future__ import annotations

from medinsight.classification.batch import (
    abatch_classify,
    apply_classification,
    auto_categorize,
    batch_classify,
    categorize_records,
    suggest_categories,
)
from medinsight.classification.classifier import (
    MedicalRecordClassifier,
    classify,
    get_default_classifier,
)
from medinsight.classification.models import (
    AutoCategorizeReport,
    BatchCategorizeReport,
    BatchClassificationItem,
    CategorizationStats,
    CategoryCount,
    CategorySuggestion,
    ClassificationInput,
    ClassificationResult,
)
from medinsight.classification.stats import categorization_stats, category_counts
from medinsight.classification.taxonomy import (
    FALLBACK_CATEGORY,
    TAXONOMY,
    CategoryDefinition,
    get_all_categories,
    map_category_to_record_type,
)

__all__ = [
    "FALLBACK_CATEGORY",
    "TAXONOMY",
    "CategoryDefinition",
    "ClassificationInput",
    "ClassificationResult",
    "BatchClassificationItem",
    "CategorySuggestion",
    "BatchCategorizeReport",
    "AutoCategorizeReport",
    "CategorizationStats",
    "CategoryCount",
    "MedicalRecordClassifier",
    "classify",
    "get_default_classifier",
    "batch_classify",
    "abatch_classify",
    "suggest_categories",
    "apply_classification",
    "categorize_records",
    "auto_categorize",
    "categorization_stats",
    "category_counts",
    "get_all_categories",
    "map_category_to_record_type",
]
