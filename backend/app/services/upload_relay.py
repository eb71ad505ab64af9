"""
Upload relay: resolves the storage key for an uploaded file and writes it
to the bucket.

Flow:
1. Route buffers the multipart file and builds an UploadRequest
2. Relay resolves filename (explicit or uuid + original extension)
3. Relay resolves key (folder/filename or filename)
4. One put-object call with a public-read ACL
5. Public URL is built from bucket + key, never read from the response

The relay never raises for storage failures; it returns a tagged result
that the API layer maps to an HTTP status and JSON body.
"""
import asyncio
import logging
import os
import time
import uuid
from dataclasses import dataclass
from typing import Optional, Union

from app.storage.s3_client import S3Client, StorageError
from app.utils.logging import log_upload_started, log_upload_completed, log_upload_failed
from app.utils.metrics import uploads_total, upload_size_bytes, storage_write_duration_seconds

logger = logging.getLogger(__name__)

MISSING_FILE_MESSAGE = "File not found"
UPLOAD_FAILED_MESSAGE = "Error uploading file"


@dataclass(frozen=True)
class UploadRequest:
    """A single buffered file plus the optional form fields sent with it."""
    file_bytes: bytes
    file_name: str
    mime_type: str
    folder: Optional[str] = None
    explicit_filename: Optional[str] = None


@dataclass(frozen=True)
class UploadSuccess:
    key: str
    url: str


@dataclass(frozen=True)
class UploadClientError:
    message: str


@dataclass(frozen=True)
class UploadBackendError:
    message: str
    error: str
    code: Optional[str] = None


UploadResult = Union[UploadSuccess, UploadClientError, UploadBackendError]


def resolve_filename(file_name: Optional[str], explicit_filename: Optional[str] = None) -> str:
    """
    Pick the object file name.

    An explicit filename is used verbatim. Otherwise a fresh UUID4 is
    generated and the original extension (with its dot, case preserved)
    is appended, e.g. ``photo.JPG`` -> ``<uuid>.JPG``.
    """
    if explicit_filename:
        return explicit_filename
    _, extension = os.path.splitext(file_name or "")
    return f"{uuid.uuid4()}{extension}"


def resolve_storage_key(folder: Optional[str], filename: str) -> str:
    """Join folder and filename with ``/``; no folder means the bare filename."""
    if folder:
        return f"{folder}/{filename}"
    return filename


class UploadRelay:
    """
    Relays one buffered upload to object storage.

    Holds a reference to the process-wide S3 client; keeps no per-request
    state, so one instance can serve concurrent requests.
    """

    def __init__(self, storage: S3Client):
        self.storage = storage

    async def handle(self, request: Optional[UploadRequest]) -> UploadResult:
        """
        Resolve the key, write the file and report the outcome.

        Args:
            request: The upload, or None when the request had no file part

        Returns:
            UploadSuccess, UploadClientError (no file) or UploadBackendError
            (storage write failed)
        """
        if request is None:
            uploads_total.labels(status="client_error").inc()
            return UploadClientError(message=MISSING_FILE_MESSAGE)

        filename = resolve_filename(request.file_name, request.explicit_filename)
        key = resolve_storage_key(request.folder, filename)
        size = len(request.file_bytes)

        log_upload_started(
            logger,
            key=key,
            bucket=self.storage.bucket,
            content_type=request.mime_type,
            size_bytes=size,
        )

        start_time = time.time()
        try:
            # boto3 blocks; keep the event loop free while it runs
            response = await asyncio.to_thread(
                self.storage.put_object,
                key,
                request.file_bytes,
                request.mime_type,
            )
        except StorageError as e:
            duration_ms = (time.time() - start_time) * 1000
            log_upload_failed(
                logger,
                error=e.message,
                key=key,
                code=e.code,
                duration_ms=duration_ms,
                include_traceback=False,
            )
            uploads_total.labels(status="backend_error").inc()
            return UploadBackendError(message=UPLOAD_FAILED_MESSAGE, error=e.message, code=e.code)

        duration = time.time() - start_time
        storage_write_duration_seconds.observe(duration)
        upload_size_bytes.observe(size)
        uploads_total.labels(status="success").inc()

        url = self.storage.public_url(key)
        log_upload_completed(
            logger,
            key=key,
            url=url,
            duration_ms=duration * 1000,
            etag=(response or {}).get("ETag"),
        )
        return UploadSuccess(key=key, url=url)
