"""Vehicle model."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from autolog.models.base import Base


class VehicleAttachment(Base):
    """Association table linking attachments to a vehicle."""

    __tablename__ = "vehicle_attachments"

    vehicle_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("vehicles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    attachment_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("attachments.id", ondelete="CASCADE"),
        primary_key=True,
    )


class Vehicle(Base):
    """A vehicle kept in a garage."""

    __tablename__ = "vehicles"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    make: Mapped[str | None] = mapped_column(String(100))
    model: Mapped[str | None] = mapped_column(String(100))
    year: Mapped[int | None] = mapped_column(Integer)
    garage_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("garages.id", ondelete="CASCADE"),
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
    garage: Mapped["Garage"] = relationship(back_populates="vehicles")  # noqa: F821
    maintenance_logs: Mapped[list["MaintenanceLog"]] = relationship(  # noqa: F821
        back_populates="vehicle",
        cascade="all, delete-orphan",
    )
    attachments: Mapped[list["Attachment"]] = relationship(  # noqa: F821
        secondary="vehicle_attachments",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<Vehicle(name={self.name!r})>"
