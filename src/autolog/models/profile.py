"""Profile model - the principal that owns garages and attachments."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from autolog.models.base import Base


class ProfileAttachment(Base):
    """Association table linking attachments to a profile."""

    __tablename__ = "profile_attachments"

    profile_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    attachment_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("attachments.id", ondelete="CASCADE"),
        primary_key=True,
    )


class Profile(Base):
    """User profile belonging to an account."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    account_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    first_name: Mapped[str | None] = mapped_column(String(100))
    last_name: Mapped[str | None] = mapped_column(String(100))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    account: Mapped["Account"] = relationship(back_populates="profile")  # noqa: F821
    attachments: Mapped[list["Attachment"]] = relationship(  # noqa: F821
        secondary="profile_attachments",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<Profile(first_name={self.first_name!r}, last_name={self.last_name!r})>"
