"""API authentication: static API keys via the ``X-API-Key`` header."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import HTTPException, Request, Security
from fastapi.security import APIKeyHeader

if TYPE_CHECKING:
    from medinsight.core.config import AuthConfig

log = logging.getLogger(__name__)

_api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def require_auth(
    request: Request,
    api_key: str | None = Security(_api_key_header),
) -> None:
    """Reject the request unless auth is disabled or a configured key is presented."""
    config: AuthConfig = request.app.state.settings.auth

    if not config.enabled:
        return None

    if api_key and api_key in config.api_keys:
        return None

    log.warning("Rejected unauthenticated request to %s", request.url.path)
    raise HTTPException(
        status_code=401,
        detail="Authentication required. Provide X-API-Key header.",
    )
