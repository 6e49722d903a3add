"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nutriscan_api.api.routes import chat, scans
from nutriscan_api.core.config import get_settings
from nutriscan_api.core.exceptions import APIError
from nutriscan_api.db.mongo import MongoDB
from nutriscan_api.services.gemini.client import get_model_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Connects MongoDB and ensures indexes on startup. Closes MongoDB and
    the provider HTTP client on shutdown.
    """
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} v{settings.api_version}")
    logger.info(f"Connecting to MongoDB at {settings.mongo_uri[:20]}...")

    MongoDB.connect(settings.mongo_uri, settings.db_name)
    await MongoDB.ensure_indexes()
    if not settings.is_llm_configured:
        logger.warning("GEMINI_API_KEY is not set, scans and chat will fail")

    yield

    logger.info("Shutting down...")
    await get_model_client().close()
    MongoDB.close()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        description="Nutrition label analysis and follow-up chat powered by Gemini",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Handle custom API errors."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.message,
                "details": exc.details,
            },
        )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.api_version,
            "mongodb": await MongoDB.ping(),
            "llm": {
                "configured": settings.is_llm_configured,
                "models": settings.gemini_models,
            },
        }

    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": settings.app_name,
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
        }

    app.include_router(scans.router, prefix="/scans", tags=["Scans"])
    app.include_router(chat.router, prefix="/scans", tags=["Chat"])

    return app


# Create app instance
app = create_app()
