from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.taskboard.api.middlewares import setup_middlewares
from src.taskboard.api.v1.router import api_router
from src.taskboard.core.config import get_settings
from src.taskboard.core.db import create_schema, dispose_engine, get_session
from src.taskboard.core.exceptions import setup_exception_handlers
from src.taskboard.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting application", app_name=settings.app_name, app_env=settings.app_env)

    if settings.auto_create_schema:
        await create_schema()
        logger.info("Database schema created")

    yield

    logger.info("Closing connections...")
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "projects", "description": "Projects and their members"},
    {"name": "tasks", "description": "Tasks, assignments and status changes"},
    {"name": "comments", "description": "Editing and deleting task comments"},
    {"name": "dashboard", "description": "Tasks currently assigned to the caller"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Project and task tracking API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)
    setup_middlewares(app, settings)
    app.include_router(api_router)

    @app.get("/health", include_in_schema=False)
    async def health() -> JSONResponse:
        """Health check with a database round trip."""
        health_status: dict[str, Any] = {"status": "healthy", "database": "unknown"}
        try:
            async with get_session() as session:
                await session.execute(text("SELECT 1"))
            health_status["database"] = "healthy"
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Health check failed", error=str(e))
            health_status["database"] = "unhealthy"
            health_status["status"] = "unhealthy"

        status_code = 200 if health_status["status"] == "healthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)

    return app


app = create_app()
