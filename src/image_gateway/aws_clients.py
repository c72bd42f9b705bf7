"""S3 client construction and per-app client caching."""

import logging
import threading
from typing import TYPE_CHECKING, Optional

import boto3
from botocore.exceptions import BotoCoreError
from fastapi import Request

from image_gateway.config.settings import Settings
from image_gateway.errors import InternalError

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)

AWS_CONFIG_ERROR = "Error loading AWS configuration"


def create_s3_client(settings: Settings) -> "S3Client":
    """
    Build an S3 client from the region in settings and boto3's default credential chain.

    :param settings: Gateway settings; ``aws_region`` and ``aws_endpoint_url`` are optional.
    :raises BotoCoreError: If boto3 cannot resolve a usable configuration (e.g. no region).
    """
    session = boto3.session.Session(region_name=settings.aws_region)

    client_kwargs = {}
    if settings.aws_endpoint_url:
        client_kwargs["endpoint_url"] = settings.aws_endpoint_url

    client = session.client("s3", **client_kwargs)
    logger.info(f"Created s3 client (region={client.meta.region_name}, endpoint={client.meta.endpoint_url})")
    return client


class S3ClientProvider:
    """Lazily creates one S3 client per app and hands out the same instance afterwards.

    A failed construction is not cached; the next call tries again.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._client: Optional["S3Client"] = None
        self._lock = threading.Lock()

    def get_client(self) -> "S3Client":
        if self._client is None:
            with self._lock:
                if self._client is None:
                    try:
                        self._client = create_s3_client(self._settings)
                    except (BotoCoreError, ValueError) as e:
                        logger.error(f"Error creating s3 client: {str(e)}")
                        raise InternalError(AWS_CONFIG_ERROR) from e
        return self._client


def get_s3_client_provider(request: Request) -> S3ClientProvider:
    """Dependency returning the app's shared S3 client provider."""
    return request.app.state.s3_client_provider
