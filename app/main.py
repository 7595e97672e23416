# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Theoria portfolio API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.auth import get_authorization_policy
from app.auth import routes as auth_routes
from app.config import settings
from app.exceptions import (
    TheoriaException,
    theoria_exception_handler,
    validation_exception_handler,
)
from app.routers import health, projects, team, upload

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

    Startup builds the authorization policy so a bypass flag outside
    development stops the process before it serves anything.
    """
    logger.info(f"Starting Theoria API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    get_authorization_policy()

    yield

    logger.info("Shutting down Theoria API")


# Create FastAPI application
app = FastAPI(
    title="Theoria API",
    description="""
## Studio Portfolio API

Backs the public portfolio site (projects, case studies, team) and the
admin panel that curates it.

### Public

- `GET /api/v1/projects` - projects in display order
- `GET /api/v1/projects/{id}/case-study` - which case study to render
- `GET /api/v1/team` - team members in display order

### Admin (allow-listed Supabase users)

- CRUD on `/api/v1/admin/projects` and `/api/v1/admin/team`
- `PUT .../reorder` with `{"ids": [...]}` to apply a drag-and-drop order
- `POST /api/v1/admin/upload` for project and team images

Every admin mutation refreshes the cached public pages.
""",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Verify Supabase session tokens and admin status",
        },
        {
            "name": "Projects",
            "description": "Public project listing and case studies",
        },
        {
            "name": "Team",
            "description": "Public team listing",
        },
        {
            "name": "Admin: Projects",
            "description": "Create, edit, delete and reorder projects",
        },
        {
            "name": "Admin: Team",
            "description": "Create, edit, delete and reorder team members",
        },
        {
            "name": "Admin: Upload",
            "description": "Image uploads to Supabase Storage",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

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

@app.exception_handler(TheoriaException)
async def handle_theoria_exception(request: Request, exc: TheoriaException):
    """Handle custom Theoria exceptions."""
    return await theoria_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Handle request body/path validation failures."""
    return await validation_exception_handler(request, exc)


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
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Public portfolio endpoints
app.include_router(
    projects.router,
    prefix="/api/v1/projects",
    tags=["Projects"]
)

app.include_router(
    team.router,
    prefix="/api/v1/team",
    tags=["Team"]
)

# Admin endpoints (each router depends on require_admin)
app.include_router(
    projects.admin_router,
    prefix="/api/v1/admin/projects",
    tags=["Admin: Projects"]
)

app.include_router(
    team.admin_router,
    prefix="/api/v1/admin/team",
    tags=["Admin: Team"]
)

app.include_router(
    upload.router,
    prefix="/api/v1/admin/upload",
    tags=["Admin: Upload"]
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
        "name": "Theoria API",
        "version": health.API_VERSION,
        "docs": "/docs",
        "health": "/api/v1/health",
    }
