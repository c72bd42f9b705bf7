"""Failure kinds of the gateway and their translation to HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Base class for request failures with a fixed status and message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(GatewayError):
    status_code = status.HTTP_401_UNAUTHORIZED


class BadRequest(GatewayError):
    status_code = status.HTTP_400_BAD_REQUEST


class InternalError(GatewayError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_gateway_errors(request: Request, exc: GatewayError) -> PlainTextResponse:
    """Map a gateway failure onto its status code and plain-text message."""
    return PlainTextResponse(content=exc.message, status_code=exc.status_code)


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that goes unhandled by a more specific exception handler."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error during {request.method} {request.url.path}")
        return PlainTextResponse(
            content="Internal Server Error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
