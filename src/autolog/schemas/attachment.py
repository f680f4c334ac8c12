"""Attachment schemas."""

from datetime import datetime, timezone

from pydantic import field_validator

from autolog.schemas.base import BaseSchema


class AttachmentResponse(BaseSchema):
    """Schema for attachment responses."""

    id: str
    original_name: str
    encoding: str
    mime_type: str
    url: str
    aws_key: str
    profile_id: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite returns naive datetimes
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
