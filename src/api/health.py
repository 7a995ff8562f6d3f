"""
Health check endpoints
"""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from config.settings import Settings
from src.api.webhooks import get_event_consumer, get_settings
from src.services.event_consumer import EventConsumer, HttpEventConsumer

router = APIRouter()
logger = structlog.get_logger()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("")
async def health_check(settings: Settings = Depends(get_settings)) -> JSONResponse:
    """
    Health check endpoint for monitoring
    """
    return JSONResponse(
        content={
            "status": "healthy",
            "timestamp": _now(),
            "version": "1.0.0",
            "service": "github-webhook-relay",
            "port": settings.PORT,
            "webhook_path": settings.webhook_path,
        },
        status_code=200,
    )


@router.get("/ready")
async def readiness_check(
    settings: Settings = Depends(get_settings),
    consumer: EventConsumer = Depends(get_event_consumer),
) -> JSONResponse:
    """
    Readiness check endpoint for deployment
    """
    checks = {
        "webhook_secret": bool(settings.GITHUB_WEBHOOK_SECRET),
        "event_consumer": consumer is not None,
    }
    all_ready = all(checks.values())

    if not all_ready:
        logger.warning("Readiness check failed", checks=checks)

    return JSONResponse(
        content={
            "ready": all_ready,
            "checks": checks,
            "downstream": "http" if isinstance(consumer, HttpEventConsumer) else "log",
            "timestamp": _now(),
        },
        status_code=200 if all_ready else 503,
    )
