"""Batch classification, category suggestions and record updates.

``batch_classify`` and ``suggest_categories`` are thin wrappers over the
classifier.  ``categorize_records`` and ``auto_categorize`` are the
operations the admin endpoints call: they select stored records, classify
them and return updated copies ready to be persisted by the caller.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Optional

from medinsight.classification.classifier import (
    ClassifiableRecord,
    MedicalRecordClassifier,
    get_default_classifier,
)
from medinsight.classification.models import (
    AutoCategorizeReport,
    BatchCategorizeReport,
    BatchClassificationItem,
    CategorySuggestion,
    ClassificationInput,
    ClassificationResult,
)
from medinsight.classification.taxonomy import map_category_to_record_type
from medinsight.exceptions import InvalidInputError, RecordsNotFoundError
from medinsight.records import record_id, round_half_up

log = logging.getLogger(__name__)

AUTO_CATEGORIZE_LIMIT = 1000
AUTO_CATEGORIZE_PREVIEW = 10


def _id_of(record: ClassifiableRecord) -> Optional[str]:
    if isinstance(record, Mapping):
        return record_id(record.get("_id") or record.get("recordId") or record.get("id"))
    return None


def _tag(record: ClassifiableRecord, result: ClassificationResult) -> BatchClassificationItem:
    return BatchClassificationItem(record_id=_id_of(record), **result.model_dump())


def batch_classify(
    records: Iterable[ClassifiableRecord],
    classifier: MedicalRecordClassifier | None = None,
) -> list[BatchClassificationItem]:
    """Classify every record independently, preserving input order."""
    clf = classifier or get_default_classifier()
    return [_tag(record, clf.classify(record)) for record in records]


async def abatch_classify(
    records: Sequence[ClassifiableRecord],
    classifier: MedicalRecordClassifier | None = None,
    max_concurrent: int | None = None,
) -> list[BatchClassificationItem]:
    """Classify records concurrently on worker threads.

    ``asyncio.gather`` returns results in submission order, so the output
    lines up with ``records`` regardless of completion order.
    """
    clf = classifier or get_default_classifier()
    sem = asyncio.Semaphore(max_concurrent or clf.config.batch_max_concurrent)

    async def _bounded(record: ClassifiableRecord) -> BatchClassificationItem:
        async with sem:
            result = await asyncio.to_thread(clf.classify, record)
            return _tag(record, result)

    return list(await asyncio.gather(*[_bounded(r) for r in records]))


def suggest_categories(
    text: str,
    classifier: MedicalRecordClassifier | None = None,
) -> list[CategorySuggestion]:
    """Top categories for free text, each with its own normalized confidence.

    Raises:
        InvalidInputError: when ``text`` is empty or blank.
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidInputError("Please provide text for categorization")

    clf = classifier or get_default_classifier()
    result = clf.classify(ClassificationInput(file_name=text, title=text))

    ranked = sorted(
        ((category, score) for category, score in result.all_scores.items() if score > 0),
        key=lambda item: item[1],
        reverse=True,
    )
    return [
        CategorySuggestion(category=category, confidence=round_half_up(clf.normalize(score), 2))
        for category, score in ranked[: clf.config.suggestion_limit]
    ]


def apply_classification(record: Mapping[str, Any], result: ClassificationResult) -> dict[str, Any]:
    """Return a copy of ``record`` carrying the classification.

    The legacy ``type`` is only replaced for high-confidence results on
    records without a manual category override.
    """
    updated = dict(record)
    updated["aiCategory"] = result.category
    updated["aiCategoryConfidence"] = result.confidence
    updated["aiDetectedKeywords"] = list(result.detected_keywords)
    updated["isAICategorized"] = True
    if not record.get("manualCategoryOverride") and result.is_high_confidence:
        updated["type"] = map_category_to_record_type(result.category)
    return updated


def is_active(record: Mapping[str, Any]) -> bool:
    """Records without a status are treated as active."""
    status = record.get("status")
    return status is None or status == "active"


def categorize_records(
    records: Iterable[Mapping[str, Any]],
    record_ids: Any,
    classifier: MedicalRecordClassifier | None = None,
) -> BatchCategorizeReport:
    """Classify the active records whose ids are in ``record_ids``.

    Raises:
        InvalidInputError: when ``record_ids`` is not a non-empty list.
        RecordsNotFoundError: when no active record matches.
    """
    if not isinstance(record_ids, (list, tuple)) or len(record_ids) == 0:
        raise InvalidInputError("Please provide an array of record IDs")

    wanted = {rid for rid in (record_id(r) for r in record_ids) if rid}
    selected = [r for r in records if is_active(r) and record_id(r.get("_id") or r.get("id")) in wanted]
    if not selected:
        raise RecordsNotFoundError("No records found", record_ids=sorted(wanted))

    results = batch_classify(selected, classifier)
    updated = [apply_classification(record, result) for record, result in zip(selected, results)]
    log.info("Batch categorized %d of %d requested records", len(selected), len(wanted))

    return BatchCategorizeReport(categorized=len(selected), results=results, records=updated)


def auto_categorize(
    records: Iterable[Mapping[str, Any]],
    *,
    force: bool = False,
    limit: int = AUTO_CATEGORIZE_LIMIT,
    classifier: MedicalRecordClassifier | None = None,
) -> AutoCategorizeReport:
    """Classify active records that were never AI-categorized (all of them with ``force``)."""
    pending = [
        r for r in records
        if is_active(r) and (force or not r.get("isAICategorized"))
    ][:limit]

    if not pending:
        return AutoCategorizeReport(
            processed=0,
            categorized=0,
            message="All records are already categorized",
        )

    results = batch_classify(pending, classifier)
    updated = [apply_classification(record, result) for record, result in zip(pending, results)]
    log.info("Auto-categorized %d records (force=%s)", len(updated), force)

    return AutoCategorizeReport(
        processed=len(pending),
        categorized=len(updated),
        results=results[:AUTO_CATEGORIZE_PREVIEW],
        records=updated,
        message=f"Auto-categorized {len(updated)} records",
    )
