"""
Health and Configuration Endpoints.
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/api/config")
async def get_config(request: Request):
    """Report whether the AI-backed endpoints are usable."""
    return {"openaiConfigured": request.app.state.orchestrator.configured}


@router.get("/health")
async def health_check(request: Request):
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": request.app.version
    }


@router.get("/health/ready")
async def readiness_check(request: Request):
    """
    Readiness check. The app is ready once the inventory is loaded;
    the assistant check is informational since the app runs without it.
    """
    state = request.app.state
    checks = {
        "inventory": hasattr(state, "car_repository") and len(await state.car_repository.get_all()) > 0,
        "assistant": hasattr(state, "orchestrator") and state.orchestrator.configured
    }

    return {
        "status": "ready" if checks["inventory"] else "not_ready",
        "checks": checks,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
