"""
Timeweb Cloud / S3-compatible storage client.

Uses boto3 with the S3 API to write uploaded files into a single bucket.
Region, addressing style and signature version are fixed for Timeweb Cloud;
endpoint, credentials and bucket come from settings.

Only PutObject is used. Objects are written with a public-read ACL and
their URL is synthesized from the bucket name and key.
"""
import logging
from typing import Any, Optional
import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from app.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

S3_REGION = "ru-1"
S3_SIGNATURE_VERSION = "s3v4"
S3_ADDRESSING_STYLE = "path"
PUBLIC_READ_ACL = "public-read"
PUBLIC_URL_TEMPLATE = "https://{bucket}.s3.timeweb.cloud/{key}"


class StorageError(Exception):
    """Base error for storage operations, carrying the backend error code."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code
        super().__init__(message)


class StorageNotConfiguredError(StorageError):
    """Raised when credentials or bucket name are missing."""

    def __init__(self, message: str = "Storage service not configured"):
        super().__init__(message, code="StorageNotConfigured")


class StorageWriteError(StorageError):
    """Raised when the backend fails or rejects a put-object call."""


class S3Client:
    """
    S3-compatible client for Timeweb Cloud object storage.

    Safe to share between concurrent requests: nothing is mutated after
    construction.
    """

    def __init__(self, config: Optional[Settings] = None, client: Any = None):
        """
        Initialize the S3 client with boto3.

        Args:
            config: Settings to read endpoint, credentials and bucket from
                (defaults to the global settings)
            client: Pre-built boto3 S3 client; skips boto3 construction

        Fails gracefully if not configured (no client is created).
        """
        self._settings = config or default_settings
        self._client = client
        self._configured = client is not None and bool(self._settings.s3_bucket_name)

        if client is not None:
            return

        if not all([
            self._settings.s3_endpoint,
            self._settings.s3_access_key,
            self._settings.s3_secret_key,
            self._settings.s3_bucket_name,
        ]):
            logger.warning(
                "S3 storage not configured. "
                "Set S3_ACCESS_KEY, S3_SECRET_KEY and S3_BUCKET_NAME."
            )
            return

        try:
            self._client = boto3.client(
                's3',
                endpoint_url=self._settings.s3_endpoint,
                aws_access_key_id=self._settings.s3_access_key,
                aws_secret_access_key=self._settings.s3_secret_key,
                region_name=S3_REGION,
                config=Config(
                    signature_version=S3_SIGNATURE_VERSION,
                    s3={'addressing_style': S3_ADDRESSING_STYLE}
                )
            )
            self._configured = True
            logger.info(f"S3 client initialized for bucket: {self.bucket}")

        except NoCredentialsError:
            logger.error("S3 credentials not found or invalid")
        except Exception as e:
            logger.error(f"Failed to initialize S3 client: {e}")

    @property
    def is_configured(self) -> bool:
        """Check if the S3 client is properly configured."""
        return self._configured and self._client is not None

    @property
    def bucket(self) -> Optional[str]:
        """Get configured bucket name."""
        return self._settings.s3_bucket_name

    @property
    def endpoint(self) -> str:
        return self._settings.s3_endpoint

    def public_url(self, object_key: str) -> str:
        """Build the public URL of an object from bucket name and key."""
        return PUBLIC_URL_TEMPLATE.format(bucket=self.bucket, key=object_key)

    def put_object(self, object_key: str, body: bytes, content_type: str) -> dict:
        """
        Write an object to the bucket with a public-read ACL.

        Args:
            object_key: The S3 object key (path in bucket)
            body: Raw file bytes
            content_type: MIME type of the file

        Returns:
            The raw PutObject response

        Raises:
            StorageNotConfiguredError: credentials or bucket are missing
            StorageWriteError: the backend call failed
        """
        if not self.is_configured:
            raise StorageNotConfiguredError()

        try:
            return self._client.put_object(
                Bucket=self.bucket,
                Key=object_key,
                Body=body,
                ContentType=content_type,
                ACL=PUBLIC_READ_ACL,
            )
        except ClientError as e:
            error = e.response.get('Error', {})
            metadata = e.response.get('ResponseMetadata', {})
            logger.error(
                f"S3 rejected put_object for {object_key}: {e}",
                extra={
                    "error_code": error.get('Code'),
                    "status_code": metadata.get('HTTPStatusCode'),
                    "request_id": metadata.get('RequestId'),
                }
            )
            raise StorageWriteError(error.get('Message') or str(e), code=error.get('Code')) from e
        except BotoCoreError as e:
            logger.error(f"S3 transport error during put_object for {object_key}: {e}")
            raise StorageWriteError(str(e), code=type(e).__name__) from e


# Singleton instance
_s3_client: Optional[S3Client] = None


def get_s3_client() -> S3Client:
    """
    Get the singleton S3 client instance.

    Returns:
        S3Client instance (may or may not be configured)
    """
    global _s3_client
    if _s3_client is None:
        _s3_client = S3Client()
    return _s3_client
