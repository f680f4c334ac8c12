"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from autolog.config import get_settings
from autolog.database import init_db, close_db
from autolog.api import router
from autolog.api.attachments import limiter
from autolog.error_handlers import register_error_handlers
from autolog.storage import ObjectStorage, get_object_storage
from autolog.storage.local_storage import LocalObjectStorage


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    await init_db()

    yield

    # Shutdown
    await close_db()


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Attachment service for profiles, garages, vehicles and maintenance logs",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.limiter = limiter
    register_error_handlers(app)

    if settings.cors_enabled and settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_methods=settings.cors_allow_methods,
            allow_headers=settings.cors_allow_headers,
            allow_credentials=settings.cors_allow_credentials,
        )

    # Include API routes
    app.include_router(router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/uploads/{key:path}", include_in_schema=False)
    async def serve_upload(
        key: str,
        storage: ObjectStorage = Depends(get_object_storage),
    ):
        """Serve a locally stored attachment by its storage key."""
        if not isinstance(storage, LocalObjectStorage):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="uploads are not served when S3 is configured",
            )
        path = storage.resolve_path(key)
        if not path.is_file():
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"no stored object for key {key!r}",
            )
        return FileResponse(path)

    return app


app = create_app()


def run_server():
    """Run the API server."""
    settings = get_settings()
    uvicorn.run(
        "autolog.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run_server()
