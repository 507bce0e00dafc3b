"""Tests for the storage backends.

Covers:
    - LocalStorageBackend: write, exists, delete, root confinement
    - S3StorageBackend: request shapes and error mapping (botocore Stubber)
"""

import asyncio
from unittest.mock import AsyncMock, patch

import boto3
import pytest
from botocore.stub import Stubber

from blogbliss.storage.backends.base import StorageError
from blogbliss.storage.backends.local import LocalStorageBackend
from blogbliss.storage.backends.s3 import S3StorageBackend

BUCKET = "blog-assets"
BASE_URL = f"https://{BUCKET}.s3.us-east-1.amazonaws.com"


@pytest.fixture
def local(tmp_path):
    return LocalStorageBackend(str(tmp_path / "uploads"))


class TestLocalStorageBackend:

    @pytest.mark.asyncio
    async def test_write_creates_parents(self, local, tmp_path):
        await local.write_file("avatars/a.png", b"data", "image/png")
        assert (tmp_path / "uploads" / "avatars" / "a.png").read_bytes() == b"data"

    @pytest.mark.asyncio
    async def test_exists(self, local):
        assert not await local.exists("avatars/a.png")
        await local.write_file("avatars/a.png", b"data", "image/png")
        assert await local.exists("avatars/a.png")

    @pytest.mark.asyncio
    async def test_delete(self, local):
        await local.write_file("avatars/a.png", b"data", "image/png")
        await local.delete_file("avatars/a.png")
        assert not await local.exists("avatars/a.png")

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self, local):
        await local.delete_file("avatars/never-written.png")

    @pytest.mark.asyncio
    async def test_key_outside_root_rejected(self, local):
        with pytest.raises(StorageError):
            await local.write_file("../escape.png", b"data", "image/png")

    @pytest.mark.asyncio
    async def test_io_runs_in_worker_thread(self, local):
        offload = AsyncMock(wraps=asyncio.to_thread)
        with patch("blogbliss.storage.backends.local.asyncio.to_thread", offload):
            await local.write_file("avatars/a.png", b"data", "image/png")
            assert await local.exists("avatars/a.png")
            await local.delete_file("avatars/a.png")

        assert offload.await_count == 3
        assert not await local.exists("avatars/a.png")

    @pytest.mark.asyncio
    async def test_write_failure_raises_storage_error(self, local, tmp_path):
        (tmp_path / "uploads").mkdir()
        (tmp_path / "uploads" / "avatars").write_bytes(b"not a directory")
        with pytest.raises(StorageError):
            await local.write_file("avatars/a.png", b"data", "image/png")

    def test_public_url(self, local):
        assert local.public_url("avatars/a.png") == "/uploads/avatars/a.png"

    def test_public_url_custom_base(self, tmp_path):
        backend = LocalStorageBackend(str(tmp_path), public_base_url="https://cdn.example.com/")
        assert backend.public_url("a.png") == "https://cdn.example.com/a.png"


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def s3(s3_client):
    return S3StorageBackend(bucket=BUCKET, public_base_url=BASE_URL, client=s3_client)


class TestS3StorageBackend:

    def test_stores_urls(self, s3):
        assert s3.stores_urls is True
        assert s3.public_url("avatars/a.png") == f"{BASE_URL}/avatars/a.png"

    @pytest.mark.asyncio
    async def test_write_puts_object(self, s3, s3_client):
        with Stubber(s3_client) as stubber:
            stubber.add_response(
                "put_object",
                {},
                {"Bucket": BUCKET, "Key": "avatars/a.png", "Body": b"data", "ContentType": "image/png"},
            )
            await s3.write_file("avatars/a.png", b"data", "image/png")
            stubber.assert_no_pending_responses()

    @pytest.mark.asyncio
    async def test_write_failure_raises_storage_error(self, s3, s3_client):
        with Stubber(s3_client) as stubber:
            stubber.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)
            with pytest.raises(StorageError):
                await s3.write_file("avatars/a.png", b"data", "image/png")

    @pytest.mark.asyncio
    async def test_exists_true(self, s3, s3_client):
        with Stubber(s3_client) as stubber:
            stubber.add_response("head_object", {}, {"Bucket": BUCKET, "Key": "avatars/a.png"})
            assert await s3.exists("avatars/a.png") is True

    @pytest.mark.asyncio
    async def test_exists_false_on_404(self, s3, s3_client):
        with Stubber(s3_client) as stubber:
            stubber.add_client_error("head_object", service_error_code="404", http_status_code=404)
            assert await s3.exists("avatars/a.png") is False

    @pytest.mark.asyncio
    async def test_exists_other_error_raises(self, s3, s3_client):
        with Stubber(s3_client) as stubber:
            stubber.add_client_error("head_object", service_error_code="AccessDenied", http_status_code=403)
            with pytest.raises(StorageError):
                await s3.exists("avatars/a.png")

    @pytest.mark.asyncio
    async def test_delete(self, s3, s3_client):
        with Stubber(s3_client) as stubber:
            stubber.add_response("delete_object", {}, {"Bucket": BUCKET, "Key": "avatars/a.png"})
            await s3.delete_file("avatars/a.png")
            stubber.assert_no_pending_responses()

    @pytest.mark.asyncio
    async def test_delete_failure_raises_storage_error(self, s3, s3_client):
        with Stubber(s3_client) as stubber:
            stubber.add_client_error("delete_object", service_error_code="InternalError", http_status_code=500)
            with pytest.raises(StorageError):
                await s3.delete_file("avatars/a.png")
