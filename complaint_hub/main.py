"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from complaint_hub.config import Settings, get_settings
from complaint_hub.infrastructure.database import (
    create_engine,
    create_session_factory,
    init_models,
)
from complaint_hub.infrastructure.logging.log_config import setup_logging
from complaint_hub.infrastructure.storage.local_file_storage import LocalFileStorage
from complaint_hub.presentation.api.router import router as api_router
from complaint_hub.presentation.errors import register_exception_handlers
from complaint_hub.presentation.uploads_controller import router as uploads_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: set up logging and tables, dispose the engine on shutdown."""
    settings: Settings = app.state.settings
    setup_logging(settings)

    await init_models(app.state.engine)
    logger.info(
        "Complaint store ready (database=%s, uploads=%s)",
        app.state.engine.url.render_as_string(hide_password=True),
        app.state.file_storage.upload_dir,
    )

    yield

    # Shutdown
    await app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application.

    The engine, session factory and attachment storage are created here and
    kept on ``app.state``; request dependencies read them from there.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = create_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.file_storage = LocalFileStorage(upload_dir=settings.upload_dir)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Mount API routes and the attachment file server
    app.include_router(api_router)
    app.include_router(uploads_router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "complaint_hub.main:app",
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
