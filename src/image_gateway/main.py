import logging

from fastapi import FastAPI
from pydantic import ValidationError

from image_gateway.aws_clients import S3ClientProvider
from image_gateway.config.settings import Settings, get_settings
from image_gateway.errors import (
    GatewayError,
    handle_broad_exceptions,
    handle_gateway_errors,
)
from image_gateway.middleware import RequestLoggingMiddleware, configure_logging
from image_gateway.routers.upload import router as upload_router

# Set up logging
logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create a FastAPI application."""
    settings = settings or get_settings()

    # POST /upload is the only route exposed
    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)

    app.state.settings = settings
    app.state.s3_client_provider = S3ClientProvider(settings)
    logger.info(f"Uploads go to bucket {settings.s3_bucket!r}")

    app.include_router(upload_router)

    app.add_exception_handler(
        exc_class_or_status_code=GatewayError,
        handler=handle_gateway_errors,
    )
    app.middleware("http")(handle_broad_exceptions)
    app.add_middleware(RequestLoggingMiddleware)

    return app


def run(settings: Settings | None = None) -> None:
    """Serve the gateway with uvicorn until the process is stopped."""
    import uvicorn

    if settings is None:
        try:
            settings = get_settings()
        except ValidationError as e:
            configure_logging()
            logger.error(f"Invalid configuration, refusing to start: {e}")
            raise SystemExit(1) from e

    configure_logging(settings.log_level)
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
