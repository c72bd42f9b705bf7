"""Functions for writing objects to an S3 bucket."""

from typing import TYPE_CHECKING, BinaryIO, Optional

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client


def upload_s3_object(
    bucket_name: str,
    object_key: str,
    file_content: BinaryIO,
    s3_client: "S3Client",
    content_type: Optional[str] = None,
) -> None:
    """
    Upload a file to an S3 bucket with a single PutObject call.

    The body is streamed from ``file_content``; it is not read into memory first.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param file_content: A readable binary stream with the file content.
    :param s3_client: The boto3 S3 client to upload with.
    :param content_type: The MIME type of the file, e.g. "image/png".
    """
    content_type = content_type or "application/octet-stream"
    s3_client.put_object(
        Bucket=bucket_name,
        Key=object_key,
        Body=file_content,
        ContentType=content_type,
    )
