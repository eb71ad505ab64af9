"""
Pydantic schemas for API request/response validation.
"""
from app.schemas.upload import (
    UploadResponse,
    UploadErrorResponse,
    UploadBackendErrorResponse,
)

__all__ = [
    "UploadResponse",
    "UploadErrorResponse",
    "UploadBackendErrorResponse",
]
