"""FastAPI application with lifespan management."""

from __future__ import annotations

import importlib.metadata
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI

from medinsight.analytics import AnalyticsEngine
from medinsight.api.auth import require_auth
from medinsight.api.middleware.error_handler import register_error_handlers
from medinsight.api.routes import analytics, classification, health
from medinsight.classification import MedicalRecordClassifier
from medinsight.core.config import APIConfig, AppSettings
from medinsight.core.logging_config import setup_logging
from medinsight.core.startup_checks import validate_settings


def _get_version() -> str:
    """Read package version from installed metadata, with dev fallback."""
    try:
        return importlib.metadata.version("medinsight")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Build the application; ``settings`` defaults to the environment."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application startup/shutdown lifecycle."""
        resolved = settings or AppSettings()
        validate_settings(resolved)
        setup_logging(resolved.observability)

        app.state.settings = resolved
        app.state.classifier = MedicalRecordClassifier(resolved.classifier)
        app.state.engine = AnalyticsEngine(resolved.analytics)
        yield

    api_config = settings.api if settings else APIConfig()
    application = FastAPI(
        title=api_config.title,
        description=api_config.description,
        version=_get_version(),
        lifespan=lifespan,
    )
    register_error_handlers(application)

    application.include_router(health.router)
    application.include_router(classification.router, prefix="/api", dependencies=[Depends(require_auth)])
    application.include_router(analytics.router, prefix="/api", dependencies=[Depends(require_auth)])
    return application


app = create_app()
