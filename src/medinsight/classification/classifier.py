"""Medical record classification: weighted keyword and pattern scoring.

Scoring runs over the lower-cased ``file_name title description`` text.
For every category in taxonomy order, each matching pattern adds
``weight * 2`` and each contained keyword adds ``weight``; both stack.
The strictly highest score wins, so the first category in taxonomy order
keeps a tie.  Confidence is ``min(score / divisor, 1)``.

A separate post-processing step relabels weak results for image uploads
as ``Scan Report``; it never changes the confidence.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from functools import lru_cache
from typing import Any, Union

from medinsight.classification.models import ClassificationInput, ClassificationResult
from medinsight.classification.taxonomy import FALLBACK_CATEGORY, TAXONOMY, CategoryDefinition
from medinsight.core.config import ClassifierConfig
from medinsight.records import round_half_up

log = logging.getLogger(__name__)

IMAGE_OVERRIDE_CATEGORY = "Scan Report"

ClassifiableRecord = Union[ClassificationInput, Mapping[str, Any]]


class MedicalRecordClassifier:
    """Assigns medical documents to a taxonomy category from their metadata."""

    def __init__(
        self,
        config: ClassifierConfig | None = None,
        taxonomy: Sequence[CategoryDefinition] = TAXONOMY,
    ) -> None:
        self._config = config or ClassifierConfig()
        self._taxonomy = tuple(taxonomy)

    @property
    def config(self) -> ClassifierConfig:
        return self._config

    def normalize(self, score: float) -> float:
        """Unrounded confidence for a raw score."""
        if score <= 0:
            return 0.0
        return min(score / self._config.confidence_divisor, 1.0)

    def score(self, text: str) -> tuple[dict[str, int], list[str]]:
        """Score ``text`` against every category.

        Returns per-category scores in taxonomy order and the distinct
        matched substrings in first-seen order.
        """
        scores: dict[str, int] = {}
        detected: dict[str, None] = {}

        for category in self._taxonomy:
            total = 0
            for pattern in category.patterns:
                match = pattern.search(text)
                if match:
                    total += category.weight * 2
                    detected.setdefault(match.group(0), None)
            for keyword in category.keywords:
                if keyword in text:
                    total += category.weight
                    detected.setdefault(keyword, None)
            scores[category.name] = total

        return scores, list(detected)

    @staticmethod
    def pick_winner(scores: Mapping[str, int]) -> tuple[str, int]:
        """Highest score with strict comparison; ``Other`` when nothing scores."""
        best_category = FALLBACK_CATEGORY
        max_score = 0
        for category, value in scores.items():
            if value > max_score:
                max_score = value
                best_category = category
        return best_category, max_score

    def apply_image_override(self, category: str, confidence: float, file_type: str) -> str:
        """Relabel low-confidence image uploads as ``Scan Report``.

        Fires only when the MIME type mentions ``image``, the winner is not
        already an X-Ray or Scan category, and confidence is below the
        override threshold.
        """
        if not self._config.image_override_enabled or not file_type:
            return category
        if "image" not in file_type:
            return category
        if "Ray" in category or "Scan" in category:
            return category
        if confidence < self._config.image_override_threshold:
            log.debug("Image override: %s -> %s (confidence %.2f)", category, IMAGE_OVERRIDE_CATEGORY, confidence)
            return IMAGE_OVERRIDE_CATEGORY
        return category

    def classify(self, record: ClassifiableRecord) -> ClassificationResult:
        """Classify one document. Never raises for missing or empty fields."""
        data = coerce_input(record)
        scores, detected = self.score(data.text())
        category, max_score = self.pick_winner(scores)
        confidence = self.normalize(max_score)
        category = self.apply_image_override(category, confidence, data.file_type)

        return ClassificationResult(
            category=category,
            confidence=round_half_up(confidence, 2),
            detected_keywords=detected[: self._config.max_detected_keywords],
            all_scores=scores,
            is_high_confidence=confidence > self._config.high_confidence_threshold,
        )


def coerce_input(record: ClassifiableRecord) -> ClassificationInput:
    """Build a ``ClassificationInput`` from a model, a request payload or a stored record.

    Stored records carry the MIME type as ``mimeType``; it is used when no
    ``fileType`` is present.
    """
    if isinstance(record, ClassificationInput):
        return record
    if not isinstance(record, Mapping):
        return ClassificationInput()

    def _pick(*keys: str) -> Any:
        for key in keys:
            value = record.get(key)
            if value:
                return value
        return None

    return ClassificationInput(
        file_name=_pick("fileName", "file_name"),
        title=_pick("title"),
        description=_pick("description"),
        file_type=_pick("fileType", "file_type", "mimeType", "mime_type"),
    )


@lru_cache(maxsize=1)
def get_default_classifier() -> MedicalRecordClassifier:
    """Process-wide classifier built from environment settings."""
    return MedicalRecordClassifier(ClassifierConfig())


def classify(record: ClassifiableRecord) -> ClassificationResult:
    """Classify one document with the default classifier."""
    return get_default_classifier().classify(record)
