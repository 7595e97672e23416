# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Liveness/readiness probes for the hosting platform:
#   GET /health        - process up, reports environment and version
#   GET /health/ready  - database and storage reachable
#   GET /health/live   - process alive
# =============================================================================

from datetime import datetime, timezone
from typing import Any, Callable

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from lib.supabase_client import SupabaseClient

router = APIRouter()

API_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Per-dependency result: "healthy" or "unhealthy: <reason>"."""
    database: str
    storage: str


class ReadinessResponse(BaseModel):
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _probe(check: Callable[[], Any]) -> str:
    """Run one dependency check; failures are reported, never raised."""
    try:
        check()
    except Exception as e:
        return f"unhealthy: {str(e)[:50]}"
    return "healthy"


def _check_database() -> None:
    SupabaseClient.get_client().table("projects").select("id").limit(1).execute()


def _check_storage() -> None:
    SupabaseClient.get_client().storage.list_buckets()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health status for load balancers and monitoring."""
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    "ready" when both the projects table and the storage API answer,
    "degraded" otherwise.
    """
    checks = ChecksResponse(
        database=_probe(_check_database),
        storage=_probe(_check_storage),
    )
    all_healthy = checks.database == "healthy" and checks.storage == "healthy"

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    return LivenessResponse(status="alive", timestamp=_now())
