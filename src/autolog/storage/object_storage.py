"""Object storage protocol and backend selection."""

from pathlib import Path
from typing import Any, Protocol

from autolog.config import get_settings


class ObjectStorage(Protocol):
    """Blob store addressed by key."""

    async def upload(
        self, path: Path, key: str, *, content_type: str | None = None
    ) -> str:
        """Store the file at ``path`` under ``key`` and return its URL."""
        ...

    async def remove(self, key: str) -> dict[str, Any]:
        """Remove the object stored under ``key`` and return the backend's result."""
        ...


def get_object_storage() -> ObjectStorage:
    """Dependency returning the configured storage backend.

    S3 is used when bucket and credentials are configured; otherwise
    files are kept on the local filesystem.
    """
    settings = get_settings()
    if settings.s3_enabled:
        from autolog.storage.s3_storage import S3ObjectStorage

        return S3ObjectStorage(
            bucket=settings.s3_bucket,
            region=settings.s3_region,
            endpoint_url=settings.s3_endpoint_url,
            access_key_id=settings.s3_access_key_id,
            secret_access_key=settings.s3_secret_access_key,
            acl=settings.s3_acl,
        )

    from autolog.storage.local_storage import LocalObjectStorage

    return LocalObjectStorage(
        root_dir=settings.local_storage_dir,
        base_url=f"{settings.public_base_url.rstrip('/')}/uploads",
    )
