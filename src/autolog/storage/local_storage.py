"""Filesystem-backed object storage.

Keys can be longer than a file name is allowed to be, so each object is
written under the SHA-256 digest of its key (keeping a short extension).
The full key still appears in URLs and in removal results.
"""

import hashlib
import logging
import os
import re
import shutil
import tempfile
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import quote

from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

_SUFFIX_RE = re.compile(r"\.[A-Za-z0-9]{1,15}")


def storage_name(key: str) -> str:
    """On-disk file name for ``key``: its digest plus a short, safe extension."""
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
    suffix = PurePosixPath(key).suffix
    if not _SUFFIX_RE.fullmatch(suffix):
        suffix = ""
    return f"{digest}{suffix.lower()}"


class LocalObjectStorage:
    """Stores objects as files under a root directory."""

    def __init__(self, *, root_dir: Path, base_url: str) -> None:
        self._root = Path(root_dir)
        self._base_url = base_url.rstrip("/")

    def resolve_path(self, key: str) -> Path:
        return self._root / storage_name(key)

    async def upload(
        self, path: Path, key: str, *, content_type: str | None = None
    ) -> str:
        target = self.resolve_path(key)

        def _copy() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(dir=target.parent, delete=False) as tmp:
                with open(path, "rb") as source:
                    shutil.copyfileobj(source, tmp)
            try:
                os.replace(tmp.name, target)
            except OSError:
                os.unlink(tmp.name)
                raise

        await run_in_threadpool(_copy)
        logger.debug("stored %s (%s) at %s", key, content_type, target)
        return f"{self._base_url}/{quote(key)}"

    async def remove(self, key: str) -> dict[str, Any]:
        target = self.resolve_path(key)
        if not target.exists():
            return {"key": key, "deleted": False}
        await run_in_threadpool(target.unlink)
        return {"key": key, "deleted": True}
