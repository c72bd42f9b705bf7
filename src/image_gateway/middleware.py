"""Middleware for HTTP request logging."""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request.

    - 4xx responses: logged at WARN level
    - 5xx responses: logged at ERROR level
    - everything else: logged at INFO level
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        client_host = request.client.host if request.client else "-"
        message = (
            f"{client_host} {request.method} {request.url.path} "
            f"{response.status_code} {duration_ms:.1f}ms"
        )

        if response.status_code >= 500:
            logger.error(message)
        elif response.status_code >= 400:
            logger.warning(message)
        else:
            logger.info(message)

        return response


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging for the gateway process."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
