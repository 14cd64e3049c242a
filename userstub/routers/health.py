"""Роутер для health check"""
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from userstub.models.users import HealthResponse

router = APIRouter(tags=["health"])


def format_uptime(seconds: float) -> str:
    """Форматирует аптайм как '1h 2m 3s'"""
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours}h {minutes}m {secs}s"


@router.get("/health", response_model=HealthResponse)
async def health(request: Request):
    """Health check endpoint"""
    uptime = time.monotonic() - request.app.state.started_at
    return {
        "status": "ok",
        "uptime": format_uptime(uptime),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
