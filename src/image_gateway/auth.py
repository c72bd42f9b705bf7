"""Shared-secret header check guarding the upload route."""

import logging
from typing import Optional

from fastapi import Header, Request

from image_gateway.config.settings import Settings
from image_gateway.errors import Unauthorized

logger = logging.getLogger(__name__)

API_TOKEN_HEADER = "X-API-Token"
INVALID_API_TOKEN = "Invalid API Token"


def require_api_token(
    request: Request,
    x_api_token: Optional[str] = Header(default=None, alias=API_TOKEN_HEADER),
) -> None:
    """
    Reject the request unless the X-API-Token header matches the configured token.

    A missing or empty header is always rejected, even before comparing.
    The comparison is on raw bytes: Starlette decodes header values as latin-1,
    so encoding back yields exactly what the client sent, and the configured
    token is compared as its UTF-8 encoding.
    """
    settings: Settings = request.app.state.settings
    if not x_api_token or x_api_token.encode("latin-1") != settings.api_token.encode("utf-8"):
        logger.warning(f"Rejected {request.method} {request.url.path}: invalid API token")
        raise Unauthorized(INVALID_API_TOKEN)
