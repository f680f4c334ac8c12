"""Attachment persistence and linking service."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from autolog.models import (
    Attachment,
    AttachmentTarget,
    Base,
    Garage,
    GarageAttachment,
    MaintenanceLog,
    MaintenanceLogAttachment,
    Profile,
    ProfileAttachment,
    Vehicle,
    VehicleAttachment,
)

logger = logging.getLogger(__name__)


class AttachmentError(Exception):
    """Base error for attachment operations."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidTargetError(AttachmentError):
    """Raised when a target kind is not one of the supported entities."""


class TargetNotFoundError(AttachmentError):
    """Raised when the entity an attachment should link to does not exist."""


# kind -> (entity model, association model, association column for the entity id)
TARGETS: dict[AttachmentTarget, tuple[type[Base], type[Base], str]] = {
    AttachmentTarget.PROFILE: (Profile, ProfileAttachment, "profile_id"),
    AttachmentTarget.GARAGE: (Garage, GarageAttachment, "garage_id"),
    AttachmentTarget.VEHICLE: (Vehicle, VehicleAttachment, "vehicle_id"),
    AttachmentTarget.MAINTENANCE_LOG: (
        MaintenanceLog,
        MaintenanceLogAttachment,
        "maintenance_log_id",
    ),
}


def parse_target(value: str) -> AttachmentTarget:
    """Convert a URL model name into an AttachmentTarget."""
    try:
        return AttachmentTarget(value)
    except ValueError:
        raise InvalidTargetError(f"invalid model: {value}") from None


class AttachmentService:
    """Service for attachment records and their links to target entities."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, attachment_id: str) -> Attachment | None:
        """Get an attachment by ID."""
        result = await self.db.execute(
            select(Attachment).where(Attachment.id == attachment_id)
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        *,
        original_name: str,
        encoding: str,
        mime_type: str,
        url: str,
        aws_key: str,
        profile_id: str,
    ) -> Attachment:
        """Persist a new attachment record."""
        attachment = Attachment(
            original_name=original_name,
            encoding=encoding,
            mime_type=mime_type,
            url=url,
            aws_key=aws_key,
            profile_id=profile_id,
        )
        self.db.add(attachment)
        await self.db.flush()
        return attachment

    async def attach(
        self,
        attachment: Attachment,
        target: AttachmentTarget | str,
        target_id: str,
    ) -> Base:
        """Link an attachment to a profile, garage, vehicle or maintenance log.

        Returns the target entity. Raises InvalidTargetError for an unknown
        kind and TargetNotFoundError when no entity has ``target_id``.
        """
        if not isinstance(target, AttachmentTarget):
            target = parse_target(target)
        model, link_model, column = TARGETS[target]

        entity = await self.db.get(model, target_id)
        if entity is None:
            raise TargetNotFoundError(f"{target.value} {target_id} not found")

        self.db.add(link_model(**{column: target_id, "attachment_id": attachment.id}))
        await self.db.flush()
        logger.info("linked attachment %s to %s %s", attachment.id, target.value, target_id)
        return entity

    async def get_attachment_ids_for(
        self, target: AttachmentTarget, target_id: str
    ) -> list[str]:
        """Get the IDs of attachments linked to a target entity."""
        _, link_model, column = TARGETS[target]
        result = await self.db.execute(
            select(link_model.attachment_id).where(
                getattr(link_model, column) == target_id
            )
        )
        return list(result.scalars())
