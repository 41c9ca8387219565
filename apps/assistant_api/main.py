"""
KIISHA Assistant API Entry Point.

The `api` channel of the assistant tool layer. Initializes:
- Structured logging (at startup)
- Tool registry (platform catalog), dispatcher and confirmation gate
- CORS middleware
- Router mounting
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from apps.assistant_api.deps import get_settings
from apps.assistant_api.routers import confirmations, health, metrics, tools
from kiisha_obs.logging import get_logger, setup_logging
from kiisha_tools.confirmation import ConfirmationGate, ConfirmationStore
from kiisha_tools.dispatch import ToolDispatcher
from kiisha_tools.platform import build_registry

settings = get_settings()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Configures logging and builds the tool catalog once; the catalog is
    read-only while serving.
    """
    setup_logging(settings)
    registry = build_registry(settings)
    app.state.tool_registry = registry
    app.state.confirmation_gate = ConfirmationGate(
        ToolDispatcher(registry),
        ConfirmationStore(
            expiry_minutes=settings.CONFIRMATION_EXPIRY_MINUTES,
            retention_minutes=settings.CONFIRMATION_RETENTION_MINUTES,
        ),
    )

    logger.info(
        "assistant_api_started",
        environment=settings.ENVIRONMENT,
        platform_api=settings.PLATFORM_API_URL,
        tools=registry.names(),
    )

    yield

    logger.info("assistant_api_stopped")


app = FastAPI(
    title="KIISHA Assistant API",
    description="AI tool registry and dispatcher for the api channel",
    version="0.1.0",
    lifespan=lifespan,
)

# ============================================================================
# MIDDLEWARE
# ============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.API_CORS_ORIGINS.split(",") if settings.API_CORS_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Log unhandled exceptions without exposing internals to the caller."""
    logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please contact support.",
        },
    )


# ============================================================================
# ROUTERS
# ============================================================================

app.include_router(tools.router, prefix="/tools", tags=["tools"])
app.include_router(confirmations.router, prefix="/confirmations", tags=["confirmations"])
app.include_router(health.router, prefix="", tags=["health"])
app.include_router(metrics.router, prefix="", tags=["metrics"])


@app.get("/", tags=["root"])
async def root():
    """API information."""
    return {
        "name": "KIISHA Assistant API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/healthz",
    }
