"""FastAPI application for BlogBliss.

This module provides the main FastAPI application with health endpoints,
API routes, error handlers and lifecycle management.

Run with:
    uvicorn blogbliss.main:app --reload

Tests:
    - tests/unit/test_main.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from blogbliss import __version__
from blogbliss.api import router as api_router
from blogbliss.config import StorageBackendType, get_settings
from blogbliss.database import check_db_connection, close_db, init_db
from blogbliss.errors import BlogError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    database: bool
    storage: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup, close connections on shutdown."""
    logger.info(f"Starting BlogBliss v{__version__}")

    try:
        await init_db()
        logger.info("Database initialized")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        # Continue anyway - schema may be managed by Alembic

    yield

    logger.info("Shutting down BlogBliss")
    await close_db()


settings = get_settings()

app = FastAPI(
    title="BlogBliss",
    description="Blogging backend with posts, authors and media assets",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)

# Legacy local-storage mode: bare locators are served from here.
if settings.STORAGE_BACKEND == StorageBackendType.LOCAL and settings.public_base_url.startswith("/"):
    app.mount(
        settings.public_base_url,
        StaticFiles(directory=settings.STORAGE_ROOT, check_dir=False),
        name="uploads",
    )


@app.exception_handler(BlogError)
async def blog_error_handler(request: Request, exc: BlogError):
    """Render service errors with their status and message."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "detail": None},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions with consistent response format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "detail": None},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies use the same envelope as service validation errors."""
    return JSONResponse(
        status_code=422,
        content={"error": "Invalid request", "detail": str(exc.errors())},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": str(exc) if settings.DEBUG else None,
        },
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """Report database reachability and the configured storage backend."""
    db_healthy = await check_db_connection()

    return HealthResponse(
        status="healthy" if db_healthy else "degraded",
        version=__version__,
        database=db_healthy,
        storage=settings.STORAGE_BACKEND.value,
    )


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint with basic info."""
    return {
        "name": "BlogBliss",
        "version": __version__,
        "health": "/health",
    }


# Entry point for development
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "blogbliss.main:app",
        host="0.0.0.0",
        port=5000,
        reload=settings.DEBUG,
    )
