"""Business logic services for AutoLog."""

from autolog.services.account_service import AccountService
from autolog.services.attachment_service import AttachmentService

__all__ = ["AccountService", "AttachmentService"]
