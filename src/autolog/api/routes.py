"""API router aggregation."""

from fastapi import APIRouter

from autolog.api.attachments import router as attachments_router

router = APIRouter(prefix="/api")

router.include_router(attachments_router)
