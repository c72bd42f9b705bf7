from fastapi import (
    APIRouter,
    Depends,
    Request,
    status
)
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData, UploadFile

from image_gateway.auth import require_api_token
from image_gateway.aws_clients import S3ClientProvider, get_s3_client_provider
from image_gateway.config.settings import Settings
from image_gateway.errors import BadRequest
from image_gateway.uploads import (
    FILE_FIELD_NAME,
    RETRIEVE_ERROR,
    UPLOAD_SUCCESS,
    MultipartFileField,
    upload_file_field,
)

router = APIRouter()


async def close_other_parts(form: FormData, keep: object = None) -> None:
    """Close every file part of ``form`` except ``keep``."""
    for _, value in form.multi_items():
        if isinstance(value, UploadFile) and value is not keep:
            await value.close()


@router.post(
    "/upload",
    response_class=PlainTextResponse,
    dependencies=[Depends(require_api_token)],
)
async def upload_image(
    request: Request,
    s3_client_provider: S3ClientProvider = Depends(get_s3_client_provider),
) -> PlainTextResponse:
    """
    Store the multipart `image` field in the configured bucket under its base file name.

    An existing object with the same name is overwritten.
    """
    settings: Settings = request.app.state.settings

    try:
        form = await request.form()
    except Exception as e:
        # any parse failure means there is no usable file
        raise BadRequest(RETRIEVE_ERROR) from e

    upload = form.get(FILE_FIELD_NAME)
    try:
        if not isinstance(upload, UploadFile):
            raise BadRequest(RETRIEVE_ERROR)

        # put_object blocks, keep it off the event loop
        await run_in_threadpool(
            upload_file_field,
            MultipartFileField(upload),
            settings.s3_bucket,
            s3_client_provider.get_client,
        )
    finally:
        # the image stream itself is closed by upload_file_field
        await close_other_parts(form, keep=upload)

    return PlainTextResponse(UPLOAD_SUCCESS, status_code=status.HTTP_200_OK)
