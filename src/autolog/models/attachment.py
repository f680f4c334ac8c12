"""Attachment model for externally stored files."""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from autolog.models.base import Base


class AttachmentTarget(str, enum.Enum):
    """Entity kinds an attachment can be linked to."""

    PROFILE = "profile"
    GARAGE = "garage"
    VEHICLE = "vehicle"
    MAINTENANCE_LOG = "maintenance-log"


class Attachment(Base):
    """Metadata for a file whose bytes live in the object store."""

    __tablename__ = "attachments"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    original_name: Mapped[str] = mapped_column(String(255), nullable=False)
    encoding: Mapped[str] = mapped_column(String(50), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(100), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    aws_key: Mapped[str] = mapped_column(String(512), unique=True, nullable=False)
    profile_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Attachment(original_name={self.original_name!r})>"
