"""Relay of one uploaded file to S3."""

import logging
from contextlib import closing
from pathlib import PurePosixPath
from typing import BinaryIO, Callable, Optional, Protocol, TYPE_CHECKING

from starlette.datastructures import UploadFile

from image_gateway.errors import BadRequest, InternalError
from image_gateway.s3.write_objects import upload_s3_object

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)

FILE_FIELD_NAME = "image"

RETRIEVE_ERROR = "Error retrieving the file"
OPEN_ERROR = "Error opening the file"
UPLOAD_ERROR = "Error uploading to S3"
UPLOAD_SUCCESS = "File uploaded successfully"


class FileField(Protocol):
    """A file part of a multipart request."""

    filename: str
    content_type: Optional[str]

    def open(self) -> BinaryIO:
        ...


class MultipartFileField:
    """Adapts a Starlette ``UploadFile`` to ``FileField``."""

    def __init__(self, upload: UploadFile):
        self._upload = upload
        self.filename = upload.filename or ""
        self.content_type = upload.content_type

    def open(self) -> BinaryIO:
        stream = self._upload.file
        stream.seek(0)
        return stream


def derive_upload_key(filename: str) -> str:
    """
    Object key for an uploaded file: the base name of its path.

    >>> derive_upload_key("a/b/../../etc/photo.png")
    'photo.png'
    """
    key = PurePosixPath(filename).name
    if key in ("", ".", ".."):
        raise BadRequest(RETRIEVE_ERROR)
    return key


def upload_file_field(
    field: FileField,
    bucket_name: str,
    get_s3_client: Callable[[], "S3Client"],
) -> str:
    """
    Stream ``field`` into ``bucket_name`` under its base name and return the key.

    The opened stream is closed exactly once whichever way this returns.

    :raises InternalError: If the stream cannot be opened, the S3 client cannot be
        configured, or the upload fails.
    :raises BadRequest: If the filename has no usable base name.
    """
    try:
        stream = field.open()
    except (OSError, ValueError) as e:
        logger.error(f"Error opening uploaded file {field.filename!r}: {str(e)}")
        raise InternalError(OPEN_ERROR) from e

    with closing(stream):
        s3_client = get_s3_client()
        object_key = derive_upload_key(field.filename)

        try:
            upload_s3_object(
                bucket_name=bucket_name,
                object_key=object_key,
                file_content=stream,
                s3_client=s3_client,
                content_type=field.content_type,
            )
        except Exception as e:
            logger.error(f"Error uploading {object_key!r} to bucket {bucket_name!r}: {str(e)}")
            raise InternalError(UPLOAD_ERROR) from e

    logger.info(f"Uploaded {object_key!r} to bucket {bucket_name!r}")
    return object_key
