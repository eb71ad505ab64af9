"""
FastAPI application entry point.
Sets up the API with lifespan events for logging and storage initialization.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from app.config import settings
from app.api.router import api_router
from app.middleware.metrics_middleware import MetricsMiddleware
from app.storage.s3_client import get_s3_client
from app.utils.logging import configure_logging, mask_secret

logger = logging.getLogger(__name__)

SERVICE_NAME = "upload-relay"
VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    - Startup: configure logging and create the shared S3 client
    - Shutdown: nothing to release
    """
    configure_logging(SERVICE_NAME, settings.log_level)

    storage = get_s3_client()
    logger.info(
        "Storage configuration",
        extra={
            "event": "storage_configured",
            "access_key": mask_secret(settings.s3_access_key),
            "bucket": storage.bucket,
            "endpoint": storage.endpoint,
            "configured": storage.is_configured,
        }
    )
    logger.info(
        f"Server started on port {settings.port}",
        extra={"event": "server_started", "port": settings.port, "bucket": storage.bucket}
    )

    yield


# Create FastAPI app
app = FastAPI(
    title="Upload Relay",
    description="Relays browser file uploads to S3-compatible object storage",
    version=VERSION,
    lifespan=lifespan
)

# CORS middleware (for the browser client)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# Metrics middleware (must be after CORS to track all requests)
app.add_middleware(MetricsMiddleware)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Upload Relay",
        "version": VERSION,
        "environment": settings.environment
    }


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def run():
    """Serve the app with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
