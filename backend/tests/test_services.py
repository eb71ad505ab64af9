"""
Tests for service layer business logic.
"""
import uuid

import pytest
from unittest.mock import MagicMock

from app.services.upload_relay import (
    UploadRelay,
    UploadRequest,
    UploadSuccess,
    UploadClientError,
    UploadBackendError,
    resolve_filename,
    resolve_storage_key,
)
from app.storage.s3_client import S3Client, StorageWriteError


class TestKeyResolution:
    """Tests for filename and storage key resolution."""

    def test_explicit_filename_used_verbatim(self):
        assert resolve_filename("photo.JPG", "custom name.png") == "custom name.png"

    def test_generated_filename_keeps_extension_case(self):
        filename = resolve_filename("photo.JPG")
        stem, extension = filename[:-4], filename[-4:]

        assert extension == ".JPG"
        assert str(uuid.UUID(stem)) == stem

    def test_generated_filename_uses_last_extension(self):
        assert resolve_filename("archive.tar.gz").endswith(".gz")

    def test_generated_filename_without_extension(self):
        filename = resolve_filename("Makefile")
        assert str(uuid.UUID(filename)) == filename

    def test_generated_filename_missing_original_name(self):
        filename = resolve_filename(None)
        assert str(uuid.UUID(filename)) == filename

    def test_generated_filenames_are_unique(self):
        names = {resolve_filename("a.txt") for _ in range(50)}
        assert len(names) == 50

    def test_empty_explicit_filename_generates(self):
        assert resolve_filename("a.txt", "") != ""
        assert resolve_filename("a.txt", "").endswith(".txt")

    def test_key_with_folder(self):
        assert resolve_storage_key("avatars", "a.png") == "avatars/a.png"

    def test_key_with_nested_folder(self):
        assert resolve_storage_key("users/42/avatars", "a.png") == "users/42/avatars/a.png"

    def test_key_without_folder(self):
        assert resolve_storage_key(None, "a.png") == "a.png"
        assert resolve_storage_key("", "a.png") == "a.png"


class TestUploadRelay:
    """Tests for UploadRelay.handle."""

    @pytest.mark.asyncio
    async def test_missing_file(self, storage: S3Client, mock_boto_client: MagicMock):
        """Test no file yields a client error and no storage call."""
        result = await UploadRelay(storage).handle(None)

        assert isinstance(result, UploadClientError)
        assert result.message == "File not found"
        mock_boto_client.put_object.assert_not_called()

    @pytest.mark.asyncio
    async def test_success(self, storage: S3Client, mock_boto_client: MagicMock):
        """Test successful write returns key and synthesized URL."""
        request = UploadRequest(
            file_bytes=b"hello",
            file_name="hello.txt",
            mime_type="text/plain",
            folder="docs",
            explicit_filename="greeting.txt",
        )

        result = await UploadRelay(storage).handle(request)

        assert result == UploadSuccess(
            key="docs/greeting.txt",
            url="https://test-bucket.s3.timeweb.cloud/docs/greeting.txt"
        )
        mock_boto_client.put_object.assert_called_once_with(
            Bucket="test-bucket",
            Key="docs/greeting.txt",
            Body=b"hello",
            ContentType="text/plain",
            ACL="public-read",
        )

    @pytest.mark.asyncio
    async def test_url_ignores_backend_response(
        self,
        storage: S3Client,
        mock_boto_client: MagicMock
    ):
        """Test the URL does not depend on what storage returns."""
        mock_boto_client.put_object.return_value = {"Location": "https://elsewhere/x"}
        request = UploadRequest(b"x", "x.bin", "application/octet-stream", explicit_filename="x.bin")

        result = await UploadRelay(storage).handle(request)

        assert result.url == "https://test-bucket.s3.timeweb.cloud/x.bin"

    @pytest.mark.asyncio
    async def test_storage_failure(self):
        """Test storage errors become a backend error result."""
        failing = MagicMock(spec=S3Client)
        failing.bucket = "test-bucket"
        failing.put_object.side_effect = StorageWriteError("Quota exceeded", code="QuotaExceeded")
        request = UploadRequest(b"x", "x.bin", "application/octet-stream")

        result = await UploadRelay(failing).handle(request)

        assert result == UploadBackendError(
            message="Error uploading file",
            error="Quota exceeded",
            code="QuotaExceeded"
        )
        failing.put_object.assert_called_once()
