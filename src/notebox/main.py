# Main application entry point
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import auth_router, health_router, notes_router
from .config import get_settings
from .core.errors import UnhandledErrorMiddleware, register_exception_handlers
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .database import create_tables, dispose_engine

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(
        "Starting Notebox application",
        extra={
            "version": settings.app_version,
            "environment": settings.environment,
            "debug": settings.debug,
        },
    )

    # Tests run against their own in-memory engine
    if os.getenv("NOTEBOX_SKIP_LIFESPAN_DB") == "1":
        logger.info("Skipping DB table creation due to NOTEBOX_SKIP_LIFESPAN_DB=1")
    else:
        try:
            await create_tables()
            logger.info("Database tables created/verified")
        except Exception as e:
            logger.error("Failed to create database tables", exc_info=e)
            raise

    yield

    # Shutdown
    logger.info("Shutting down Notebox application")
    await dispose_engine()


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Personal note-taking API with cookie-based sessions",
        version=settings.app_version,
        lifespan=lifespan,
    )

    # Innermost first: unexpected errors become JSON 500s inside logging and CORS
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(LoggingMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
        max_age=86400,
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth_router, prefix="/api")
    app.include_router(notes_router, prefix="/api")
    app.include_router(health_router, prefix="/api")

    # Root endpoint
    @app.get("/")
    async def root():
        return {"success": True, "message": f"{settings.app_name} is running"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("notebox.main:app", host=settings.host, port=settings.port, reload=settings.reload)
