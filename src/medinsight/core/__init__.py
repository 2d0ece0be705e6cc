"""Settings, startup checks and logging setup."""

from __future__ import annotations

from medinsight.core.config import (
    AnalyticsConfig,
    APIConfig,
    AppSettings,
    AuthConfig,
    ClassifierConfig,
    ObservabilityConfig,
)
from medinsight.core.logging_config import setup_logging
from medinsight.core.startup_checks import validate_settings

__all__ = [
    "AppSettings",
    "ClassifierConfig",
    "AnalyticsConfig",
    "ObservabilityConfig",
    "AuthConfig",
    "APIConfig",
    "setup_logging",
    "validate_settings",
]
