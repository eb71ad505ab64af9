"""
Business logic services.
"""
from app.services.upload_relay import (
    UploadRelay,
    UploadRequest,
    UploadResult,
    UploadSuccess,
    UploadClientError,
    UploadBackendError,
    resolve_filename,
    resolve_storage_key,
)

__all__ = [
    "UploadRelay",
    "UploadRequest",
    "UploadResult",
    "UploadSuccess",
    "UploadClientError",
    "UploadBackendError",
    "resolve_filename",
    "resolve_storage_key",
]
