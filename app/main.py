# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Carteira Católica API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    CarteiraException,
    carteira_exception_handler,
    supabase_exception_handler,
)
from app.routers import health, profiles, public, schedules, references, embeds, images
from app.auth import routes as auth_routes
from app.websocket import routes as websocket_routes
from lib.supabase_client import SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs configuration on startup. The Supabase client is created lazily on
    first use, so nothing needs tearing down here.
    """
    logger.info(f"Starting Carteira Católica API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Public base URL: {settings.public_base_url}")

    yield

    logger.info("Shutting down Carteira Católica API")


# Create FastAPI application
app = FastAPI(
    title="Carteira Católica API",
    description="""
## Digital Catholic Profile & Parish Schedules

### Profiles

1. **Sign in** with Supabase Auth and send the access token as `Bearer`
2. **Pick a link** - `/ws/slug-check` reports availability while typing
3. **Save** your profile with `PUT /api/v1/profiles/me`
4. **Share** `/p/<slug>` or download your wallet card

### Schedules

Coordinators create monthly liturgical schedules (escalas) with a roster of
participants and roles. Schedules from past months are read-only.
Anyone can browse `/escalas-publicas` and export a card as PNG or PDF.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Session state and token verification",
        },
        {
            "name": "Profiles",
            "description": "The signed-in user's profile and wallet card",
        },
        {
            "name": "Public",
            "description": "Public profiles and schedules (no authentication)",
        },
        {
            "name": "Schedules",
            "description": "Liturgical schedule management",
        },
        {
            "name": "References",
            "description": "Communities, people and liturgical roles",
        },
        {
            "name": "Embeds",
            "description": "Spotify/YouTube embed resolution",
        },
        {
            "name": "Theme",
            "description": "Gradient presets and custom gradients",
        },
        {
            "name": "Images",
            "description": "Profile image uploads",
        },
        {
            "name": "WebSocket",
            "description": "Live slug availability",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)

# Native share target; deployments may replace it at startup
app.state.sharer = None


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(CarteiraException)
async def handle_carteira_exception(request: Request, exc: CarteiraException):
    """Handle custom Carteira exceptions."""
    return await carteira_exception_handler(request, exc)


@app.exception_handler(SupabaseClientError)
async def handle_supabase_error(request: Request, exc: SupabaseClientError):
    """Handle table-layer failures that no service translated."""
    logger.error(f"Supabase error on {request.url.path}: {exc}")
    return await supabase_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Owner profile endpoints
app.include_router(
    profiles.router,
    prefix="/api/v1/profiles",
    tags=["Profiles"]
)

# Schedule endpoints
app.include_router(
    schedules.router,
    prefix="/api/v1/schedules",
    tags=["Schedules"]
)

# Reference data endpoints
app.include_router(
    references.router,
    prefix="/api/v1",
    tags=["References"]
)

# Embed and theme helpers
app.include_router(
    embeds.router,
    prefix="/api/v1",
)

# Image upload endpoints
app.include_router(
    images.router,
    prefix="/api/v1/images",
    tags=["Images"]
)

# Public pages (no prefix: these are the shareable links)
app.include_router(public.router)

# WebSocket endpoints (live slug check)
app.include_router(
    websocket_routes.router,
    tags=["WebSocket"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Carteira Católica API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
