"""
Single-attempt hand-off of delivery envelopes to the event consumer
"""

import asyncio

import structlog

from src.models.envelope import DeliveryEnvelope
from src.services.event_consumer import EventConsumer

logger = structlog.get_logger()


async def dispatch_envelope(
    consumer: EventConsumer, envelope: DeliveryEnvelope, timeout: float
) -> bool:
    """
    Hand an envelope to the consumer once

    Runs after the HTTP response has been sent, so failures are only logged.
    There is no retry.

    Returns:
        bool: True if the consumer accepted the envelope
    """
    try:
        await asyncio.wait_for(consumer.create_event(envelope), timeout=timeout)
    except asyncio.TimeoutError:
        logger.error(
            "Timed out processing GitHub webhook",
            envelope_id=envelope.id,
            timeout=timeout,
        )
        return False
    except Exception as e:
        logger.error(
            "Error processing GitHub webhook",
            envelope_id=envelope.id,
            error=str(e),
        )
        return False

    logger.info("GitHub webhook dispatched", envelope_id=envelope.id)
    return True
