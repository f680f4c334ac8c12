"""Pydantic schemas for the AutoLog API."""

from autolog.schemas.attachment import AttachmentResponse
from autolog.schemas.errors import ErrorResponse

__all__ = [
    "AttachmentResponse",
    "ErrorResponse",
]
