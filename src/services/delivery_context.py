"""
Builds delivery envelopes for the downstream event consumer
"""

import time
from typing import Any, Dict, Optional

import structlog

from src.models.envelope import DeliveryEnvelope, ResponseHandler
from src.models.events import NormalizedEvent

logger = structlog.get_logger()

DEFAULT_PLUGIN_ID = "plugin-github"
HELPFUL_INSTRUCTION = "This is a webhook event from Github"


def make_envelope_id(
    event_kind: str, delivery_id: Optional[str], timestamp: int
) -> str:
    """
    Identifier for an envelope

    The delivery id is unique per GitHub delivery, so redeliveries map to the
    same identifier. Without one the timestamp is used, which can collide for
    deliveries of the same kind within the same millisecond.
    """
    if delivery_id:
        return f"github-{event_kind}-{delivery_id}"

    logger.warning(
        "Delivery id missing, falling back to timestamp identifier",
        event_type=event_kind,
        timestamp=timestamp,
    )
    return f"github-{event_kind}-{timestamp}"


def make_response_handler(delivery_id: Optional[str]) -> ResponseHandler:
    """Create a callback that records consumer acknowledgements"""

    def handle_response(response: Any) -> None:
        try:
            logger.info(
                "Response from Github webhook",
                delivery_id=delivery_id,
                response=response,
            )
        except Exception as e:
            # Acknowledgements are informational only
            logger.error(
                "Failed to record webhook response",
                delivery_id=delivery_id,
                error=str(e),
            )

    return handle_response


def build_delivery_envelope(
    event_kind: str,
    record: NormalizedEvent,
    delivery_id: Optional[str],
    payload: Optional[Dict[str, Any]] = None,
    *,
    plugin_id: str = DEFAULT_PLUGIN_ID,
    now: Optional[int] = None,
) -> DeliveryEnvelope:
    """
    Wrap a normalized record into the envelope expected by the event consumer

    Args:
        event_kind: X-GitHub-Event header value
        record: Normalized event record
        delivery_id: X-GitHub-Delivery header value, if any
        payload: Original decoded payload, carried in the metadata
        plugin_id: Origin tag of the envelope
        now: Timestamp in milliseconds, defaults to the current time

    Returns:
        DeliveryEnvelope: envelope whose content is the JSON-serialized record
    """
    timestamp = now if now is not None else int(time.time() * 1000)
    content = record.model_dump_json()

    return DeliveryEnvelope(
        id=make_envelope_id(event_kind, delivery_id, timestamp),
        plugin_id=plugin_id,
        timestamp=timestamp,
        content=content,
        raw_message=content,
        helpful_instruction=HELPFUL_INSTRUCTION,
        response_handler=make_response_handler(delivery_id),
        metadata={
            "event": event_kind,
            "delivery": delivery_id,
            "payload": payload,
        },
    )
