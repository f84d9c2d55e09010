# app/main.py
"""
FastAPI application entry point.
"""

import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import (
    CONFIG_ROOT,
    CORS_ORIGINS,
    IS_PRODUCTION,
    RULES_CACHE_TTL_SECONDS,
    SERVICE_NAME,
    SERVICE_VERSION,
)
from app.core.logging_config import get_logger, setup_logging
from app.core.request_logging import REQUEST_ID_HEADER, RequestLoggingMiddleware
from app.core.rules_provider import ClientRulesProvider, RulesCache
from app.core.sentry_config import init_sentry
from app.core.storage import LocalConfigStore
from app.routes.hours import router as hours_router

# Setup logging FIRST (before any other imports that might log)
setup_logging()
logger = get_logger(__name__)

# Initialize Sentry for error tracking (production only)
sentry_enabled = init_sentry()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Application starting up",
        extra={
            "extra_fields": {
                "production": IS_PRODUCTION,
                "python_version": sys.version,
                "config_root": str(CONFIG_ROOT),
            }
        },
    )

    if not CONFIG_ROOT.is_dir():
        logger.warning(f"Config root {CONFIG_ROOT} does not exist; all clients will use default OT rules")

    app.state.config_store = LocalConfigStore(CONFIG_ROOT)
    app.state.rules_provider = ClientRulesProvider(RulesCache(ttl_seconds=RULES_CACHE_TTL_SECONDS))

    yield

    logger.info("Application shutting down")


app = FastAPI(
    title="Umbrella Hours",
    description="Regular/overtime/doubletime classification for construction daily reports",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

if IS_PRODUCTION:
    # Production: Strict CORS - only allow specified origins
    if not CORS_ORIGINS:
        logger.warning(
            "Production mode but no CORS_ORIGINS set. CORS will block all cross-origin requests. "
            "Set CORS_ORIGINS environment variable if you need to allow specific origins."
        )

    allowed_origins = CORS_ORIGINS
    allowed_methods = ["GET", "POST"]  # Only allow methods we use

    logger.info(f"CORS configured for production with origins: {allowed_origins}")
else:
    # Development: Permissive CORS for easier testing
    allowed_origins = ["*"]
    allowed_methods = ["*"]

    logger.info("CORS configured for development (permissive)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=allowed_methods,
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(hours_router)


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint for monitoring.

    Reports service status and how many clients currently have cached rules.
    """
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "cached_clients": len(app.state.rules_provider.cache),
    }
