"""
Storage module for S3-compatible object storage (Timeweb Cloud).

The backend receives file bytes from the browser and writes them to the
bucket itself with a public-read ACL.
"""
from app.storage.s3_client import (
    get_s3_client,
    S3Client,
    StorageError,
    StorageNotConfiguredError,
    StorageWriteError,
)

__all__ = [
    "get_s3_client",
    "S3Client",
    "StorageError",
    "StorageNotConfiguredError",
    "StorageWriteError",
]
