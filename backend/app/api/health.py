"""
Health check endpoint.
Reports whether object storage is configured.
"""
from fastapi import APIRouter, Depends, HTTPException

from app.storage.s3_client import S3Client, get_s3_client

router = APIRouter()


@router.get("")
async def health_check(storage: S3Client = Depends(get_s3_client)):
    """
    Health check endpoint.
    Returns storage configuration status; no call is made to the bucket.
    """
    health_status = {
        "status": "healthy",
        "storage": "configured" if storage.is_configured else "not_configured",
        "bucket": storage.bucket,
    }

    if not storage.is_configured:
        health_status["status"] = "unhealthy"
        raise HTTPException(status_code=503, detail=health_status)

    return health_status
