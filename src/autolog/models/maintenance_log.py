"""Maintenance log model."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from autolog.models.base import Base


class MaintenanceLogAttachment(Base):
    """Association table linking attachments to a maintenance log."""

    __tablename__ = "maintenance_log_attachments"

    maintenance_log_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("maintenance_logs.id", ondelete="CASCADE"),
        primary_key=True,
    )
    attachment_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("attachments.id", ondelete="CASCADE"),
        primary_key=True,
    )


class MaintenanceLog(Base):
    """A service entry recorded against a vehicle."""

    __tablename__ = "maintenance_logs"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    date_of_service: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    vehicle_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("vehicles.id", ondelete="CASCADE"),
        nullable=False,
    )
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
    vehicle: Mapped["Vehicle"] = relationship(back_populates="maintenance_logs")  # noqa: F821
    attachments: Mapped[list["Attachment"]] = relationship(  # noqa: F821
        secondary="maintenance_log_attachments",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<MaintenanceLog(vehicle_id={self.vehicle_id!r})>"
