"""Garage model."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from autolog.models.base import Base


class GarageAttachment(Base):
    """Association table linking attachments to a garage."""

    __tablename__ = "garage_attachments"

    garage_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("garages.id", ondelete="CASCADE"),
        primary_key=True,
    )
    attachment_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("attachments.id", ondelete="CASCADE"),
        primary_key=True,
    )


class Garage(Base):
    """A place where a profile keeps its vehicles."""

    __tablename__ = "garages"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    location: Mapped[str | None] = mapped_column(String(200))
    profile_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    vehicles: Mapped[list["Vehicle"]] = relationship(  # noqa: F821
        back_populates="garage",
        cascade="all, delete-orphan",
    )
    attachments: Mapped[list["Attachment"]] = relationship(  # noqa: F821
        secondary="garage_attachments",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<Garage(name={self.name!r})>"
