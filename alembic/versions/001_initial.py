"""Initial migration - create all tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _attachment_link_table(name: str, column: str, target_table: str) -> None:
    op.create_table(
        name,
        sa.Column(column, sa.String(36), sa.ForeignKey(f"{target_table}.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("attachment_id", sa.String(36), sa.ForeignKey("attachments.id", ondelete="CASCADE"), primary_key=True),
    )


def upgrade() -> None:
    # Accounts table
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("username", sa.String(100), unique=True, nullable=False),
        sa.Column("token_seed", sa.String(64), unique=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    # Profiles table
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("account_id", sa.String(36), sa.ForeignKey("accounts.id", ondelete="CASCADE"), unique=True, nullable=False),
        sa.Column("first_name", sa.String(100)),
        sa.Column("last_name", sa.String(100)),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    # Garages table
    op.create_table(
        "garages",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("location", sa.String(200)),
        sa.Column("profile_id", sa.String(36), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    # Vehicles table
    op.create_table(
        "vehicles",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("make", sa.String(100)),
        sa.Column("model", sa.String(100)),
        sa.Column("year", sa.Integer),
        sa.Column("garage_id", sa.String(36), sa.ForeignKey("garages.id", ondelete="CASCADE"), nullable=False),
        sa.Column("profile_id", sa.String(36), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    # Maintenance logs table
    op.create_table(
        "maintenance_logs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("date_of_service", sa.DateTime(timezone=True)),
        sa.Column("vehicle_id", sa.String(36), sa.ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("profile_id", sa.String(36), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    # Attachments table
    op.create_table(
        "attachments",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("original_name", sa.String(255), nullable=False),
        sa.Column("encoding", sa.String(50), nullable=False),
        sa.Column("mime_type", sa.String(100), nullable=False),
        sa.Column("url", sa.Text, nullable=False),
        sa.Column("aws_key", sa.String(512), unique=True, nullable=False),
        sa.Column("profile_id", sa.String(36), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    # Attachment link tables, one per target kind
    _attachment_link_table("profile_attachments", "profile_id", "profiles")
    _attachment_link_table("garage_attachments", "garage_id", "garages")
    _attachment_link_table("vehicle_attachments", "vehicle_id", "vehicles")
    _attachment_link_table("maintenance_log_attachments", "maintenance_log_id", "maintenance_logs")

    # Create indexes for common queries
    op.create_index("ix_attachments_profile_id", "attachments", ["profile_id"])
    op.create_index("ix_vehicles_garage_id", "vehicles", ["garage_id"])
    op.create_index("ix_maintenance_logs_vehicle_id", "maintenance_logs", ["vehicle_id"])


def downgrade() -> None:
    op.drop_table("maintenance_log_attachments")
    op.drop_table("vehicle_attachments")
    op.drop_table("garage_attachments")
    op.drop_table("profile_attachments")
    op.drop_table("attachments")
    op.drop_table("maintenance_logs")
    op.drop_table("vehicles")
    op.drop_table("garages")
    op.drop_table("profiles")
    op.drop_table("accounts")
