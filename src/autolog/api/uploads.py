"""Multipart upload staging.

Every file part of a multipart request is written to the temp directory
under a random server-generated name before the handler runs, and
removed again once the request is finished.
"""

import logging
import secrets
import shutil
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import BinaryIO

from fastapi import Request
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from autolog.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "7bit"
DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass
class StagedFile:
    """An uploaded file written to local disk."""

    field_name: str
    path: Path
    filename: str  # server-generated name of the staged file
    original_name: str
    mime_type: str
    encoding: str
    size_bytes: int


def client_file_name(raw: str | None) -> str:
    """Reduce a client-supplied file name to its final path component."""
    name = PurePosixPath((raw or "").replace("\\", "/")).name
    return "" if name in {".", ".."} else name


def _copy_to(source: BinaryIO, destination: Path) -> int:
    source.seek(0)
    with destination.open("wb") as out:
        shutil.copyfileobj(source, out)
    return destination.stat().st_size


async def stage_upload(field_name: str, upload: UploadFile, temp_dir: Path) -> StagedFile:
    """Write one uploaded part to ``temp_dir``."""
    filename = secrets.token_hex(16)
    path = temp_dir / filename
    size = await run_in_threadpool(_copy_to, upload.file, path)
    return StagedFile(
        field_name=field_name,
        path=path,
        filename=filename,
        original_name=client_file_name(upload.filename),
        mime_type=upload.content_type or DEFAULT_MIME_TYPE,
        encoding=upload.headers.get("content-transfer-encoding", DEFAULT_ENCODING),
        size_bytes=size,
    )


async def stage_uploads(request: Request) -> AsyncGenerator[list[StagedFile], None]:
    """Dependency yielding every file in the request body, whatever its field name."""
    settings = get_settings()
    settings.temp_dir.mkdir(parents=True, exist_ok=True)

    staged: list[StagedFile] = []
    try:
        async with request.form() as form:
            for field_name, value in form.multi_items():
                if isinstance(value, UploadFile):
                    staged.append(await stage_upload(field_name, value, settings.temp_dir))
        yield staged
    finally:
        for item in staged:
            try:
                item.path.unlink(missing_ok=True)
            except OSError:
                logger.warning("could not remove staged upload %s", item.path)
