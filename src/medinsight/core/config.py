"""Nested pydantic-settings configuration for the application.

Each concern reads its own ``MEDINSIGHT_<GROUP>_*`` env vars::

    export MEDINSIGHT_CLASSIFIER_CONFIDENCE_DIVISOR=50
    export MEDINSIGHT_OBSERVABILITY_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ClassifierConfig(BaseSettings):
    """Medical record classifier tuning.

    Env vars use ``MEDINSIGHT_CLASSIFIER_`` prefix.  The defaults reproduce
    the historical behaviour; ``confidence_divisor`` in particular is a
    fixed constant that is not derived from the taxonomy and is a candidate
    for recalibration.
    """

    model_config = {"env_prefix": "MEDINSIGHT_CLASSIFIER_"}

    confidence_divisor: float = 50.0
    high_confidence_threshold: float = 0.6
    image_override_enabled: bool = True
    image_override_threshold: float = 0.5
    max_detected_keywords: int = 10
    suggestion_limit: int = 3
    batch_max_concurrent: int = Field(default=8, ge=1)


class AnalyticsConfig(BaseSettings):
    """Operational analytics configuration.

    Env vars use ``MEDINSIGHT_ANALYTICS_`` prefix.  Response time and error
    rate have no source inside this package; callers supply real monitoring
    values or these fixed defaults are used.
    """

    model_config = {"env_prefix": "MEDINSIGHT_ANALYTICS_"}

    appointment_capacity: int = Field(default=1000, gt=0)
    system_capacity: float = 100.0
    default_response_time_ms: float = 800.0
    default_error_rate: float = 2.0


class ObservabilityConfig(BaseSettings):
    """Observability configuration.

    Env vars use ``MEDINSIGHT_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "MEDINSIGHT_OBSERVABILITY_"}

    service_name: str = "medinsight"
    log_level: str = "INFO"
    log_format: str = "auto"


class AuthConfig(BaseSettings):
    """API key authentication.

    Env vars use ``MEDINSIGHT_AUTH_`` prefix.
    """

    model_config = {"env_prefix": "MEDINSIGHT_AUTH_"}

    enabled: bool = False
    api_keys: list[str] = Field(default_factory=list)


class APIConfig(BaseSettings):
    """HTTP surface metadata.

    Env vars use ``MEDINSIGHT_API_`` prefix.
    """

    model_config = {"env_prefix": "MEDINSIGHT_API_"}

    title: str = "medinsight"
    description: str = "Rule-based record classification and operational analytics"
    host: str = "0.0.0.0"
    port: int = 8080


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    classifier: ClassifierConfig = ClassifierConfig()
    analytics: AnalyticsConfig = AnalyticsConfig()
    observability: ObservabilityConfig = ObservabilityConfig()
    auth: AuthConfig = AuthConfig()
    api: APIConfig = APIConfig()
