"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from nutrilens_api.api.routes import analyze
from nutrilens_api.api.routes.analyze import CORS_HEADERS
from nutrilens_api.core.config import get_settings
from nutrilens_api.core.exceptions import APIError, InternalError
from nutrilens_api.services.nutrition_analysis import shutdown_analysis_gateway

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Closes the shared AI gateway connection pool on shutdown.
    """
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} v{settings.api_version}")
    if not settings.is_ai_configured:
        logger.warning("AI gateway API key is not configured")

    yield

    logger.info("Shutting down...")
    await shutdown_analysis_gateway()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        description="AI-powered nutrition analysis for meal photos, food search, meal building and comparisons",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Top-level error boundary: anything not already classified becomes a 500
    @app.middleware("http")
    async def error_boundary(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception(f"Unhandled error in {request.method} {request.url.path}")
            error = InternalError(str(exc)) if settings.debug else InternalError()
            return JSONResponse(
                status_code=error.status_code,
                content={"error": error.message},
                headers=CORS_HEADERS,
            )

    # Exception handlers
    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Handle custom API errors."""
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__}: {exc.message} details={exc.details}")
        else:
            logger.info(f"{type(exc).__name__}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
            headers=CORS_HEADERS,
        )

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.api_version,
            "ai_gateway": {
                "configured": settings.is_ai_configured,
                "model": settings.ai_model,
            },
        }

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": settings.app_name,
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
            "endpoints": {
                "/analyze-nutrition": "POST - Analyze a meal image, search, build a meal or compare foods",
            },
        }

    # Include routers
    app.include_router(analyze.router, tags=["Analysis"])

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("nutrilens_api.main:app", host="0.0.0.0", port=8000, reload=False)
