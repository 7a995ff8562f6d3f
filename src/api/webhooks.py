"""
GitHub webhook endpoint: verify, normalize, acknowledge, then dispatch
"""

import structlog
from fastapi import APIRouter, Request, HTTPException, Depends, BackgroundTasks
from fastapi.responses import JSONResponse

from config.settings import Settings
from src.services.delivery_context import build_delivery_envelope
from src.services.dispatcher import dispatch_envelope
from src.services.event_consumer import EventConsumer
from src.services.event_normalizer import is_supported_event, normalize_event
from src.utils.webhook_validator import (
    extract_github_delivery_id,
    extract_github_event_type,
    validate_github_webhook,
)

router = APIRouter()
logger = structlog.get_logger()


def get_settings(request: Request) -> Settings:
    """Settings the application was created with"""
    return request.app.state.settings


def get_event_consumer(request: Request) -> EventConsumer:
    """Downstream consumer the application was created with"""
    return request.app.state.event_consumer


async def verify_webhook_signature(
    request: Request, settings: Settings = Depends(get_settings)
) -> None:
    """Verify GitHub webhook signature against the raw body"""
    signature = request.headers.get("X-Hub-Signature-256")
    if not signature:
        raise HTTPException(status_code=401, detail="Missing webhook signature")

    body = await request.body()
    if not validate_github_webhook(body, signature, settings.GITHUB_WEBHOOK_SECRET):
        raise HTTPException(status_code=401, detail="Invalid webhook signature")


@router.post("")
async def github_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    _: None = Depends(verify_webhook_signature),
    settings: Settings = Depends(get_settings),
    consumer: EventConsumer = Depends(get_event_consumer),
) -> JSONResponse:
    """
    Receive a GitHub webhook delivery

    The response is sent before the envelope reaches the event consumer so a
    slow consumer never makes GitHub time out and redeliver.
    """
    event_type = extract_github_event_type(request.headers)
    delivery_id = extract_github_delivery_id(request.headers)

    if not is_supported_event(event_type):
        logger.info(
            "Ignoring unsupported GitHub webhook",
            event_type=event_type,
            delivery_id=delivery_id,
        )
        return JSONResponse(
            content={"status": "ignored", "event_type": event_type},
            status_code=200,
        )

    try:
        payload = await request.json()
    except ValueError as e:
        logger.error("Failed to parse webhook payload", error=str(e), delivery_id=delivery_id)
        return JSONResponse(content={"error": "Invalid JSON payload"}, status_code=400)

    try:
        record = normalize_event(event_type, payload)
        envelope = build_delivery_envelope(
            event_type,
            record,
            delivery_id,
            payload if isinstance(payload, dict) else None,
            plugin_id=settings.PLUGIN_ID,
        )
    except Exception as e:
        logger.error(
            "Error processing GitHub webhook",
            event_type=event_type,
            delivery_id=delivery_id,
            error=str(e),
        )
        return JSONResponse(content={"error": "Internal server error"}, status_code=500)

    logger.info(
        "Received GitHub webhook",
        event_type=event_type,
        delivery_id=delivery_id,
        envelope_id=envelope.id,
        repository=getattr(record, "repository", None),
    )

    background_tasks.add_task(
        dispatch_envelope, consumer, envelope, settings.DISPATCH_TIMEOUT
    )

    return JSONResponse(content={"status": "ok", "id": envelope.id}, status_code=200)
