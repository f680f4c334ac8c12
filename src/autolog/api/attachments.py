"""Attachment API endpoints."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.ext.asyncio import AsyncSession

from autolog.api.auth import RequirePrincipal
from autolog.api.uploads import StagedFile, stage_uploads
from autolog.config import get_settings
from autolog.database import get_db
from autolog.schemas.attachment import AttachmentResponse
from autolog.services.attachment_service import (
    AttachmentService,
    InvalidTargetError,
    TargetNotFoundError,
    parse_target,
)
from autolog.storage import ObjectStorage, get_object_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/attachments", tags=["attachments"])

limiter = Limiter(key_func=get_remote_address)


def _get_upload_rate_limit() -> str:
    """Get the upload rate limit from settings."""
    settings = get_settings()
    if not settings.rate_limit_enabled:
        return "1000000/minute"  # Effectively unlimited when disabled
    return settings.rate_limit_uploads


def _require_id(value: str | None, message: str) -> str:
    if not value:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
    return value


@router.post("/{model}", response_model=AttachmentResponse)
@limiter.limit(_get_upload_rate_limit)
async def create_attachment(
    model: str,
    request: Request,
    principal: RequirePrincipal,
    files: Annotated[list[StagedFile], Depends(stage_uploads)],
    target_id: Annotated[str | None, Query(alias="id")] = None,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_object_storage),
):
    """Upload a single file and link it to a profile, garage, vehicle or maintenance log.

    The file is stored under ``{staged name}.{original name}`` before the
    record is created, and the record is created before it is linked.
    """
    if principal.profile is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="attachment POST: account has no profile",
        )

    try:
        target = parse_target(model)
    except InvalidTargetError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    target_id = _require_id(target_id, "attachment POST: missing model ID query")

    if len(files) != 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"attachment POST: expected exactly one file, got {len(files)}",
        )

    [file] = files
    logger.info("attachment POST: valid file ready to upload: %s", file)

    key = f"{file.filename}.{file.original_name}"
    url = await storage.upload(file.path, key, content_type=file.mime_type)
    logger.info("attachment POST: received URL from object store: %s", url)

    service = AttachmentService(db)
    attachment = await service.create(
        original_name=file.original_name,
        encoding=file.encoding,
        mime_type=file.mime_type,
        url=url,
        aws_key=key,
        profile_id=principal.profile.id,
    )
    logger.info("attachment POST: new attachment created: %s", attachment.id)

    try:
        await service.attach(attachment, target, target_id)
    except TargetNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    return AttachmentResponse.model_validate(attachment)


@router.get("", response_model=AttachmentResponse)
async def get_attachment(
    principal: RequirePrincipal,
    attachment_id: Annotated[str | None, Query(alias="id")] = None,
    db: AsyncSession = Depends(get_db),
):
    """Get an attachment record by ID."""
    attachment_id = _require_id(attachment_id, "attachment GET: missing ID query")

    service = AttachmentService(db)
    attachment = await service.get_by_id(attachment_id)
    if not attachment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="attachment GET: no attachment found in database",
        )

    logger.info("attachment GET: found attachment %s", attachment.id)
    return AttachmentResponse.model_validate(attachment)


@router.delete("")
async def delete_attachment(
    principal: RequirePrincipal,
    attachment_id: Annotated[str | None, Query(alias="id")] = None,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_object_storage),
) -> dict[str, Any]:
    """Remove an attachment's stored object and return the store's result.

    The attachment record and its links are left in place.
    """
    if principal.profile is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="attachment DELETE: account has no profile",
        )

    attachment_id = _require_id(attachment_id, "attachment DELETE: missing ID query")

    service = AttachmentService(db)
    attachment = await service.get_by_id(attachment_id)
    if not attachment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="attachment DELETE: attachment not found in database",
        )

    result = await storage.remove(attachment.aws_key)
    logger.info("attachment DELETE: removed object %s", attachment.aws_key)
    return result
