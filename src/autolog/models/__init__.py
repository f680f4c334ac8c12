"""SQLAlchemy models for AutoLog."""

from autolog.models.base import Base
from autolog.models.account import Account
from autolog.models.profile import Profile, ProfileAttachment
from autolog.models.garage import Garage, GarageAttachment
from autolog.models.vehicle import Vehicle, VehicleAttachment
from autolog.models.maintenance_log import MaintenanceLog, MaintenanceLogAttachment
from autolog.models.attachment import Attachment, AttachmentTarget

__all__ = [
    "Base",
    "Account",
    "Profile",
    "ProfileAttachment",
    "Garage",
    "GarageAttachment",
    "Vehicle",
    "VehicleAttachment",
    "MaintenanceLog",
    "MaintenanceLogAttachment",
    "Attachment",
    "AttachmentTarget",
]
