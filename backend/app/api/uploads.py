"""
Upload endpoint.

POST /upload accepts a multipart body with a required ``file`` part and
optional ``folder`` and ``filename`` fields, writes the file to the bucket
and returns its public URL.

Status mapping:
- 200: file stored, body carries url and key
- 400: no file part in the request
- 500: storage write failed or an unexpected error occurred
"""
import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile as StarletteUploadFile

from app.schemas.upload import UploadResponse, UploadErrorResponse, UploadBackendErrorResponse
from app.services.upload_relay import (
    UploadRelay,
    UploadRequest,
    UploadResult,
    UploadSuccess,
    UploadClientError,
    UPLOAD_FAILED_MESSAGE,
)
from app.storage.s3_client import S3Client, get_s3_client
from app.utils.logging import log_upload_received, log_upload_failed

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def get_upload_relay(storage: S3Client = Depends(get_s3_client)) -> UploadRelay:
    """Build the relay around the shared storage client."""
    return UploadRelay(storage)


def to_response(result: UploadResult) -> JSONResponse:
    """Map a relay result to its HTTP status and JSON body."""
    if isinstance(result, UploadSuccess):
        body = UploadResponse(url=result.url, key=result.key)
        return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump())

    if isinstance(result, UploadClientError):
        body = UploadErrorResponse(message=result.message)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())

    body = UploadBackendErrorResponse(
        message=result.message,
        error=result.error,
        code=result.code
    )
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump())


@router.post(
    "",
    response_model=UploadResponse,
    responses={
        400: {"model": UploadErrorResponse, "description": "No file part in the request"},
        500: {"model": UploadBackendErrorResponse, "description": "Storage write failed"},
    }
)
async def upload_file(
    file: Union[UploadFile, str, None] = File(None),
    folder: Optional[str] = Form(None),
    filename: Optional[str] = Form(None),
    relay: UploadRelay = Depends(get_upload_relay)
):
    """
    Upload a file to object storage.

    Flow:
    1. Buffer the whole file in memory
    2. Resolve key: ``folder/filename`` or ``filename``; without an explicit
       filename a uuid plus the original extension is used
    3. Write the object with a public-read ACL
    4. Return the public URL and key

    Storage errors are not retried; the client may resubmit.
    """
    try:
        upload_request = None
        # A text field named "file" is not a file part
        if isinstance(file, StarletteUploadFile):
            contents = await file.read()
            log_upload_received(
                logger,
                filename=file.filename,
                content_type=file.content_type,
                size_bytes=len(contents),
                folder=folder,
                explicit_filename=filename,
            )
            upload_request = UploadRequest(
                file_bytes=contents,
                file_name=file.filename or "",
                mime_type=file.content_type or DEFAULT_CONTENT_TYPE,
                folder=folder or None,
                explicit_filename=filename or None,
            )
        else:
            log_upload_received(
                logger,
                filename=None,
                content_type=None,
                size_bytes=None,
                folder=folder,
                explicit_filename=filename,
            )

        result = await relay.handle(upload_request)
        return to_response(result)

    except Exception as e:
        code = getattr(e, "code", None)
        code = str(code) if code is not None else None
        log_upload_failed(logger, error=str(e), code=code)
        body = UploadBackendErrorResponse(
            message=UPLOAD_FAILED_MESSAGE,
            error=str(e),
            code=code
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump()
        )
