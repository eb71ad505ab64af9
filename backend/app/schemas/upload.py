"""
Pydantic schemas for the upload endpoint.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class UploadResponse(BaseModel):
    """Response schema for a successful upload."""
    success: bool = Field(True, description="Always true on success")
    url: str = Field(..., description="Public URL of the stored object")
    key: str = Field(..., description="Storage key the object was written under")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "success": True,
            "url": "https://my-bucket.s3.timeweb.cloud/avatars/a.png",
            "key": "avatars/a.png"
        }
    })


class UploadErrorResponse(BaseModel):
    """Response schema for a failed upload."""
    success: bool = Field(False, description="Always false on failure")
    message: str = Field(..., description="Human-readable failure message")


class UploadBackendErrorResponse(UploadErrorResponse):
    """Failure body for storage errors; error and code are diagnostic only."""
    error: str = Field(..., description="Backend error message")
    code: Optional[str] = Field(None, description="Backend error code, when available")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "success": False,
            "message": "Error uploading file",
            "error": "Access Denied",
            "code": "AccessDenied"
        }
    })
