"""Amazon S3 (or S3-compatible) object storage."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import quote

import boto3
from starlette.concurrency import run_in_threadpool


@dataclass(frozen=True)
class S3Config:
    bucket: str
    region: str
    endpoint_url: str
    acl: str


class S3ObjectStorage:
    """Uploads and removes objects in a single bucket."""

    def __init__(
        self,
        *,
        bucket: str,
        region: str,
        endpoint_url: str,
        access_key_id: str,
        secret_access_key: str,
        acl: str = "",
    ) -> None:
        self._cfg = S3Config(
            bucket=bucket,
            region=region,
            endpoint_url=endpoint_url.rstrip("/"),
            acl=acl,
        )
        self._client = boto3.client(
            "s3",
            endpoint_url=endpoint_url or None,
            region_name=region or None,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )

    def object_url(self, key: str) -> str:
        """Public URL of the object stored under ``key``."""
        if self._cfg.endpoint_url:
            return f"{self._cfg.endpoint_url}/{self._cfg.bucket}/{quote(key)}"
        region = self._cfg.region or "us-east-1"
        return f"https://{self._cfg.bucket}.s3.{region}.amazonaws.com/{quote(key)}"

    async def upload(
        self, path: Path, key: str, *, content_type: str | None = None
    ) -> str:
        extra_args: dict[str, str] = {}
        if self._cfg.acl:
            extra_args["ACL"] = self._cfg.acl
        if content_type:
            extra_args["ContentType"] = content_type

        def _upload() -> None:
            # upload_file blocks; run it off the event loop.
            self._client.upload_file(
                str(path), self._cfg.bucket, key, ExtraArgs=extra_args or None
            )

        await run_in_threadpool(_upload)
        return self.object_url(key)

    async def remove(self, key: str) -> dict[str, Any]:
        def _delete() -> dict[str, Any]:
            return self._client.delete_object(Bucket=self._cfg.bucket, Key=key)

        return await run_in_threadpool(_delete)
