"""Global exception handlers mapping domain exceptions to HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from medinsight.exceptions import InvalidInputError, MedInsightError, RecordsNotFoundError

log = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(InvalidInputError)
    async def handle_invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc), "type": "invalid_input"})

    @app.exception_handler(RecordsNotFoundError)
    async def handle_not_found(request: Request, exc: RecordsNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"error": str(exc), "type": "not_found", "recordIds": exc.record_ids},
        )

    @app.exception_handler(MedInsightError)
    async def handle_generic_error(request: Request, exc: MedInsightError) -> JSONResponse:
        log.error("Unhandled domain error on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": str(exc), "type": "medinsight_error"})
