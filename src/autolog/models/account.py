"""Account model for bearer authentication."""

import secrets
import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from autolog.models.base import Base


def generate_token_seed() -> str:
    """Generate a fresh random token seed."""
    return secrets.token_hex(32)


class Account(Base):
    """Login account. Bearer tokens carry its current token seed."""

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    token_seed: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
        default=generate_token_seed,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    profile: Mapped["Profile | None"] = relationship(  # noqa: F821
        back_populates="account",
        cascade="all, delete-orphan",
        uselist=False,
    )

    def rotate_token_seed(self) -> str:
        """Replace the token seed, invalidating previously issued tokens."""
        self.token_seed = generate_token_seed()
        return self.token_seed

    def __repr__(self) -> str:
        return f"<Account(username={self.username!r})>"
