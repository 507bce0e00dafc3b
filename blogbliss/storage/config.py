"""Storage configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from blogbliss.config import Settings, StorageBackendType


class StorageConfig(BaseModel):
    """Configuration for blob storage.

    Attributes:
        backend: Which backend holds the blobs.
        root: Root directory for the local backend.
        public_base_url: Prefix that turns a bare key into a link.
        bucket: S3 bucket name.
        region: S3 region.
        endpoint_url: Custom S3-compatible endpoint.
    """

    backend: StorageBackendType = Field(default=StorageBackendType.LOCAL)
    root: str = Field(default="./uploads", description="Local storage root directory")
    public_base_url: str = Field(default="/uploads", description="Public URL prefix")
    bucket: str | None = None
    region: str = "us-east-1"
    endpoint_url: str | None = None
    access_key_id: str | None = None
    secret_access_key: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorageConfig":
        return cls(
            backend=settings.STORAGE_BACKEND,
            root=settings.STORAGE_ROOT,
            public_base_url=settings.public_base_url,
            bucket=settings.S3_BUCKET,
            region=settings.S3_REGION,
            endpoint_url=settings.S3_ENDPOINT_URL,
            access_key_id=settings.S3_ACCESS_KEY_ID,
            secret_access_key=settings.S3_SECRET_ACCESS_KEY,
        )
