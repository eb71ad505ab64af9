"""
Production logging utility for structured JSON logging.

Provides event-specific logging functions with mandatory fields:
- timestamp (ISO8601)
- level
- service
- event

Optional fields (included when applicable):
- key
- bucket
- content_type
- size_bytes
- duration_ms

Usage:
    from app.utils.logging import configure_logging, log_upload_completed

    configure_logging('upload-relay', 'INFO')
    log_upload_completed(logger, key='avatars/a.png', url='https://...', duration_ms=45.2)
"""
import logging
import sys
from typing import Optional, Dict, Any
from pythonjsonlogger import jsonlogger


class StructuredLogger:
    """Structured JSON logger with mandatory fields."""

    _service_name = None
    _configured = False

    @classmethod
    def configure(cls, service_name: str, log_level: str = "INFO"):
        """
        Configure structured JSON logging for the application.

        Args:
            service_name: Service identifier
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        if cls._configured:
            return  # Already configured

        cls._service_name = service_name

        # Remove default handlers
        root_logger = logging.getLogger()
        root_logger.handlers = []

        formatter = jsonlogger.JsonFormatter(
            '%(timestamp)s %(level)s %(name)s %(message)s',
            timestamp=True,
            json_ensure_ascii=False
        )

        # Console handler (for container logs)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        # Add service name to all log records via filter
        class ServiceFilter(logging.Filter):
            def filter(self, record):
                record.service = cls._service_name
                return True

        handler.addFilter(ServiceFilter())
        cls._configured = True


def mask_secret(value: Optional[str], visible: int = 5) -> Optional[str]:
    """Keep the first characters of a credential for logs, hide the rest."""
    if not value:
        return value
    return value[:visible] + "..."


def _build_log_extra(
    event: str,
    key: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Build extra fields for structured logging.

    Args:
        event: Event name (mandatory)
        key: Optional storage key
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields

    Returns:
        Dictionary of extra fields
    """
    extra = {
        "event": event,
        **kwargs
    }

    if key:
        extra["key"] = key
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)

    return extra


# Upload event functions

def log_upload_received(
    logger: logging.Logger,
    filename: Optional[str],
    content_type: Optional[str],
    size_bytes: Optional[int],
    folder: Optional[str] = None,
    explicit_filename: Optional[str] = None,
    **kwargs
):
    """
    Log an inbound upload request before any processing.

    Args:
        logger: Logger instance
        filename: Original client-supplied file name (None if no file part)
        content_type: Declared MIME type
        size_bytes: Buffered size of the file
        folder: Optional folder form field
        explicit_filename: Optional filename form field
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="upload_received",
        original_filename=filename,
        content_type=content_type,
        size_bytes=size_bytes,
        folder=folder,
        explicit_filename=explicit_filename,
        **kwargs
    )
    logger.info(f"Upload request received: {filename}", extra=extra)


def log_upload_started(
    logger: logging.Logger,
    key: str,
    bucket: Optional[str],
    content_type: str,
    size_bytes: int,
    **kwargs
):
    """Log the start of a storage write."""
    extra = _build_log_extra(
        event="upload_started",
        key=key,
        bucket=bucket,
        content_type=content_type,
        size_bytes=size_bytes,
        **kwargs
    )
    logger.info(f"Uploading to S3: {key}", extra=extra)


def log_upload_completed(
    logger: logging.Logger,
    key: str,
    url: str,
    duration_ms: Optional[float] = None,
    etag: Optional[str] = None,
    **kwargs
):
    """
    Log a successful storage write.

    Args:
        logger: Logger instance
        key: Storage key (required)
        url: Public URL built for the object (required)
        duration_ms: Optional duration in milliseconds
        etag: Optional ETag returned by storage
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="upload_completed",
        key=key,
        duration_ms=duration_ms,
        url=url,
        **kwargs
    )
    if etag:
        extra["etag"] = etag

    logger.info(f"Upload completed: {url}", extra=extra)


def log_upload_failed(
    logger: logging.Logger,
    error: str,
    key: Optional[str] = None,
    code: Optional[str] = None,
    duration_ms: Optional[float] = None,
    include_traceback: bool = True,
    **kwargs
):
    """
    Log an upload failure event.

    Args:
        logger: Logger instance
        error: Error message (required)
        key: Storage key, if it was resolved before the failure
        code: Backend error code, when available
        duration_ms: Optional duration in milliseconds
        include_traceback: Whether to include stack trace (default: True for errors)
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="upload_failed",
        key=key,
        duration_ms=duration_ms,
        error=str(error),
        **kwargs
    )
    if code:
        extra["code"] = code

    message = f"Upload failed: {error}"

    if include_traceback:
        exc_info = sys.exc_info()
        if exc_info[0] is not None:
            logger.error(message, extra=extra, exc_info=exc_info)
        else:
            logger.error(message, extra=extra)
    else:
        logger.error(message, extra=extra)


def log_http_request(
    logger: logging.Logger,
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    **kwargs
):
    """Log a completed HTTP request (access log)."""
    extra = _build_log_extra(
        event="http_request",
        duration_ms=duration_ms,
        method=method,
        path=path,
        status_code=status_code,
        **kwargs
    )
    logger.info(f"{method} {path} {status_code}", extra=extra)


# Convenience alias
def configure_logging(service_name: str, log_level: str = "INFO"):
    """Configure logging (alias for StructuredLogger.configure)."""
    StructuredLogger.configure(service_name, log_level)
