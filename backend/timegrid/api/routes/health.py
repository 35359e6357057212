from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from timegrid.core.config import get_settings

router = APIRouter()

settings = get_settings()


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/health/live")
def health_live() -> dict:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/health/ready")
def health_ready() -> dict:
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "layout": {
            "windowStart": settings.day_window_start,
            "windowEnd": settings.day_window_end,
            "gridStepMinutes": settings.grid_step_minutes,
            "maxSlotsPerRequest": settings.max_slots_per_request,
        },
    }
