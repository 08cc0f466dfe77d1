"""
DevConnector API - developer profiles.

FastAPI application serving developer profiles, their experience and
education entries, and a GitHub repository pass-through.
"""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings, validate_security_settings
from app.database import init_db
from app.errors import register_exception_handlers
from app.logging import bind_context, clear_context, configure_logging, get_logger
from app.routers.profile import router as profile_router

# Import models to register them with Base.metadata
from app.models import Education, Experience, Post, Profile, User  # noqa: F401

logger = get_logger("app.http")


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: ARG001
    """Application lifespan handler for startup/shutdown."""
    configure_logging(settings.log_level)
    validate_security_settings()
    await init_db()
    logger.info("startup_complete", environment=settings.environment)
    yield


app = FastAPI(
    title="DevConnector API",
    description="Developer profiles with experience, education and GitHub repositories",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(profile_router)


# --- Middleware ---


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add a unique request ID to each request and log its outcome."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    bind_context(request_id=request_id)
    start = time.perf_counter()
    try:
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request_complete",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_seconds=round(time.perf_counter() - start, 3),
        )
        return response
    finally:
        clear_context()


# --- Health Check ---


@app.get("/api/health", tags=["System"])
async def health_check() -> dict[str, str]:
    """
    Health check endpoint.

    Returns 200 OK if the API is running.
    """
    return {"status": "healthy"}
