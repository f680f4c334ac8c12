"""HTTP API for AutoLog."""

from autolog.api.routes import router

__all__ = ["router"]
