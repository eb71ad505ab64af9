"""
Test configuration and fixtures.
Storage is replaced by an S3Client wrapping a MagicMock boto3 client,
so no network calls are made.
"""
import os

# Set test environment before any imports
os.environ["ENVIRONMENT"] = "test"
os.environ["S3_ENDPOINT"] = "https://s3.timeweb.cloud"
os.environ["S3_ACCESS_KEY"] = "test-access-key"
os.environ["S3_SECRET_KEY"] = "test-secret-key"
os.environ["S3_BUCKET_NAME"] = "test-bucket"

import pytest
from typing import AsyncGenerator
from unittest.mock import MagicMock

from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from app.config import Settings
from app.storage.s3_client import S3Client


TEST_BUCKET = "test-bucket"


@pytest.fixture(scope="function")
def test_settings() -> Settings:
    """Settings with storage fully configured."""
    return Settings(
        s3_endpoint="https://s3.timeweb.cloud",
        s3_access_key="test-access-key",
        s3_secret_key="test-secret-key",
        s3_bucket_name=TEST_BUCKET,
    )


@pytest.fixture(scope="function")
def mock_boto_client() -> MagicMock:
    """boto3 S3 client double; put_object succeeds by default."""
    boto_client = MagicMock()
    boto_client.put_object.return_value = {
        "ETag": '"5d41402abc4b2a76b9719d911017c592"',
        "ResponseMetadata": {"HTTPStatusCode": 200},
    }
    return boto_client


@pytest.fixture(scope="function")
def storage(test_settings: Settings, mock_boto_client: MagicMock) -> S3Client:
    """S3Client backed by the mocked boto3 client."""
    return S3Client(config=test_settings, client=mock_boto_client)


def get_test_app(storage: S3Client) -> FastAPI:
    """Create a test FastAPI app with the storage dependency overridden."""
    from app.main import app
    from app.storage.s3_client import get_s3_client

    app.dependency_overrides[get_s3_client] = lambda: storage

    return app


@pytest.fixture(scope="function")
async def client(storage: S3Client) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    app = get_test_app(storage)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Clean up overrides
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def client_no_storage() -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client whose storage has no credentials."""
    unconfigured = S3Client(config=Settings(
        s3_access_key=None,
        s3_secret_key=None,
        s3_bucket_name=None,
    ))
    app = get_test_app(unconfigured)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
