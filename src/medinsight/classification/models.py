"""Classification inputs and results."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field, field_validator

from medinsight.models import CamelModel


class ClassificationInput(CamelModel):
    """Document metadata scored by the classifier.

    Only metadata strings are inspected, never file contents.  ``None`` and
    non-string values are coerced so that any record shape classifies.
    """

    file_name: str = ""
    title: str = ""
    description: str = ""
    file_type: str = ""

    @field_validator("file_name", "title", "description", "file_type", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    def text(self) -> str:
        """Lower-cased text the classifier matches against."""
        return f"{self.file_name} {self.title} {self.description}".lower()


class ClassificationResult(CamelModel):
    """Outcome of classifying one document."""

    category: str
    confidence: float = Field(ge=0.0, le=1.0)
    detected_keywords: list[str] = Field(default_factory=list)
    all_scores: dict[str, int] = Field(default_factory=dict)
    is_high_confidence: bool = False


class BatchClassificationItem(ClassificationResult):
    """A classification result tagged with the record it belongs to."""

    record_id: Optional[str] = None


class CategorySuggestion(CamelModel):
    """A candidate category for free text, with its own normalized confidence."""

    category: str
    confidence: float


class BatchCategorizeReport(CamelModel):
    """Result of classifying a selected set of stored records."""

    categorized: int
    results: list[BatchClassificationItem] = Field(default_factory=list)
    records: list[dict[str, Any]] = Field(default_factory=list)


class AutoCategorizeReport(CamelModel):
    """Result of sweeping records that still need classification."""

    processed: int
    categorized: int
    results: list[BatchClassificationItem] = Field(default_factory=list)
    records: list[dict[str, Any]] = Field(default_factory=list)
    message: str = ""


class CategoryCount(CamelModel):
    category: str
    count: int


class CategorizationStats(CamelModel):
    """Coverage and confidence figures over a set of stored records."""

    total_records: int = 0
    categorized_records: int = 0
    uncategorized_records: int = 0
    high_confidence_records: int = 0
    manual_overrides: int = 0
    categorization_rate: float = 0.0
    avg_confidence: float = 0.0
    category_distribution: list[CategoryCount] = Field(default_factory=list)
