from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter

from app.settings import settings


router = APIRouter()


@router.get("/health", include_in_schema=False)
async def service_health() -> Dict[str, Any]:
    return {
        "ok": True,
        "service": "moonphase-backend",
        "time": datetime.now(timezone.utc).isoformat(),
        "extended": settings.MOON_EXTENDED_DETAILS,
        "timezone": settings.MOON_TIMEZONE,
    }
