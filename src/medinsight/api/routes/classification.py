"""Medical record classification endpoints.

Records travel in the request body; the caller persists any updated
records returned by ``/classify/records`` and ``/classify/auto``.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request
from pydantic import Field

from medinsight.classification import (
    AutoCategorizeReport,
    BatchCategorizeReport,
    BatchClassificationItem,
    CategorizationStats,
    CategoryCount,
    CategorySuggestion,
    ClassificationInput,
    ClassificationResult,
    MedicalRecordClassifier,
    abatch_classify,
    auto_categorize,
    categorization_stats,
    categorize_records,
    category_counts,
    get_all_categories,
    suggest_categories,
)
from medinsight.classification.batch import AUTO_CATEGORIZE_LIMIT
from medinsight.models import CamelModel

log = logging.getLogger(__name__)

router = APIRouter(tags=["classification"])


class BatchClassifyRequest(CamelModel):
    records: list[dict[str, Any]] = Field(default_factory=list)


class SuggestRequest(CamelModel):
    text: str = ""


class SuggestResponse(CamelModel):
    suggestions: list[CategorySuggestion] = Field(default_factory=list)


class CategorizeRecordsRequest(CamelModel):
    """Stored records plus the ids to categorize among them."""

    records: list[dict[str, Any]] = Field(default_factory=list)
    record_ids: Any = None


class AutoCategorizeRequest(CamelModel):
    records: list[dict[str, Any]] = Field(default_factory=list)
    force: bool = False
    limit: int = Field(default=AUTO_CATEGORIZE_LIMIT, gt=0)


class RecordsRequest(CamelModel):
    records: list[dict[str, Any]] = Field(default_factory=list)


class CategoriesResponse(CamelModel):
    categories: list[str]


class CategoryCountsResponse(CamelModel):
    categories: list[CategoryCount]


def _classifier(req: Request) -> MedicalRecordClassifier:
    return req.app.state.classifier


@router.post("/classify", response_model=ClassificationResult)
async def classify_record(request: ClassificationInput, req: Request) -> ClassificationResult:
    """Classify one document from its file name, title, description and MIME type."""
    return _classifier(req).classify(request)


@router.post("/classify/batch", response_model=list[BatchClassificationItem])
async def classify_batch(request: BatchClassifyRequest, req: Request) -> list[BatchClassificationItem]:
    """Classify many documents; results follow request order."""
    results = await abatch_classify(request.records, _classifier(req))
    log.info("Batch classification", extra={"count": len(results)})
    return results


@router.post("/classify/suggest", response_model=SuggestResponse)
async def suggest(request: SuggestRequest, req: Request) -> SuggestResponse:
    return SuggestResponse(suggestions=suggest_categories(request.text, _classifier(req)))


@router.post("/classify/records", response_model=BatchCategorizeReport)
async def categorize_selected(request: CategorizeRecordsRequest, req: Request) -> BatchCategorizeReport:
    """Categorize the active records whose ids are listed in ``recordIds``."""
    return categorize_records(request.records, request.record_ids, _classifier(req))


@router.post("/classify/auto", response_model=AutoCategorizeReport)
async def categorize_pending(request: AutoCategorizeRequest, req: Request) -> AutoCategorizeReport:
    """Categorize records never AI-categorized, or all active records with ``force``."""
    return auto_categorize(
        request.records,
        force=request.force,
        limit=request.limit,
        classifier=_classifier(req),
    )


@router.post("/classify/stats", response_model=CategorizationStats)
async def stats(request: RecordsRequest) -> CategorizationStats:
    return categorization_stats(request.records)


@router.get("/categories", response_model=CategoriesResponse)
async def categories() -> CategoriesResponse:
    """Every taxonomy category name, in declaration order."""
    return CategoriesResponse(categories=get_all_categories())


@router.post("/categories/counts", response_model=CategoryCountsResponse)
async def counts(request: RecordsRequest) -> CategoryCountsResponse:
    return CategoryCountsResponse(categories=category_counts(request.records))
