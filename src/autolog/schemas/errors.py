"""Error response schema."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Generic error body. Internal details are never included."""

    error: str
    message: str
