"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from medinsight.core.logging_config import LOG_FORMATS
from medinsight.exceptions import ConfigurationError

if TYPE_CHECKING:
    from medinsight.core.config import AppSettings

log = logging.getLogger(__name__)


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ConfigurationError on fatal misconfig."""
    _check_classifier(settings)
    _check_auth(settings)
    _check_observability(settings)


def _check_classifier(settings: AppSettings) -> None:
    """Reject thresholds that would make confidence meaningless."""
    cfg = settings.classifier
    if cfg.confidence_divisor <= 0:
        raise ConfigurationError(
            f"MEDINSIGHT_CLASSIFIER_CONFIDENCE_DIVISOR must be positive, got {cfg.confidence_divisor}"
        )
    if cfg.max_detected_keywords < 0 or cfg.suggestion_limit < 0:
        raise ConfigurationError("Keyword and suggestion limits cannot be negative")
    if cfg.confidence_divisor != 50.0:
        log.warning(
            "Classifier confidence divisor overridden to %s; confidences will not match "
            "previously stored values.",
            cfg.confidence_divisor,
        )


def _check_auth(settings: AppSettings) -> None:
    """Reject auth enabled with no credentials, the API would be fully locked."""
    if settings.auth.enabled and not settings.auth.api_keys:
        raise ConfigurationError(
            "MEDINSIGHT_AUTH_ENABLED=true but no API keys configured. "
            "Set MEDINSIGHT_AUTH_API_KEYS or disable auth."
        )


def _check_observability(settings: AppSettings) -> None:
    log_format = settings.observability.log_format
    if log_format not in LOG_FORMATS:
        raise ConfigurationError(
            f"MEDINSIGHT_OBSERVABILITY_LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, got {log_format!r}"
        )
