"""Categorization coverage statistics over stored records."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any

from medinsight.classification.batch import is_active
from medinsight.classification.models import CategorizationStats, CategoryCount
from medinsight.classification.taxonomy import get_all_categories
from medinsight.records import round_half_up, safe_num

HIGH_CONFIDENCE_FLOOR = 0.7


def categorization_stats(records: Iterable[Mapping[str, Any]]) -> CategorizationStats:
    """Summarize how many active records carry an AI category and how confident they are."""
    active = [r for r in records if is_active(r)]
    categorized = [r for r in active if r.get("isAICategorized")]

    high_confidence = sum(
        1 for r in active if safe_num(r.get("aiCategoryConfidence")) >= HIGH_CONFIDENCE_FLOOR
    )
    manual = sum(1 for r in active if r.get("manualCategoryOverride"))

    distribution = Counter(r.get("aiCategory") for r in categorized)
    ordered = sorted(distribution.items(), key=lambda item: item[1], reverse=True)

    avg_confidence = 0.0
    if categorized:
        total = sum(safe_num(r.get("aiCategoryConfidence")) for r in categorized)
        avg_confidence = round_half_up(total / len(categorized), 2)

    rate = round_half_up(len(categorized) / len(active) * 100, 1) if active else 0.0

    return CategorizationStats(
        total_records=len(active),
        categorized_records=len(categorized),
        uncategorized_records=len(active) - len(categorized),
        high_confidence_records=high_confidence,
        manual_overrides=manual,
        categorization_rate=rate,
        avg_confidence=avg_confidence,
        category_distribution=[
            CategoryCount(category=str(category), count=count) for category, count in ordered
        ],
    )


def category_counts(records: Iterable[Mapping[str, Any]]) -> list[CategoryCount]:
    """Active record count for every taxonomy category, zero included."""
    counts = Counter(r.get("aiCategory") for r in records if is_active(r))
    return [CategoryCount(category=name, count=counts.get(name, 0)) for name in get_all_categories()]
