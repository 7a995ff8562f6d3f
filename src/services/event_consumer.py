"""
Downstream event consumers that receive delivery envelopes
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
import structlog

from src.models.envelope import DeliveryEnvelope

logger = structlog.get_logger()


class EventConsumerError(Exception):
    """Raised when a consumer rejects an envelope"""

    def __init__(self, message: str, status_code: int = None, response_data: Any = None):
        self.message = message
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(message)


class EventConsumer(ABC):
    """Abstract base class for downstream event consumers"""

    @abstractmethod
    async def create_event(self, envelope: DeliveryEnvelope) -> None:
        """Accept an envelope for processing"""
        pass

    async def aclose(self) -> None:
        """Release any resources held by the consumer"""
        return None


class LoggingEventConsumer(EventConsumer):
    """Consumer that only logs envelopes, used when no downstream is configured"""

    async def create_event(self, envelope: DeliveryEnvelope) -> None:
        logger.info(
            "Webhook event received",
            envelope_id=envelope.id,
            plugin_id=envelope.plugin_id,
            event_type=envelope.metadata.get("event"),
            content=envelope.content,
        )
        envelope.response_handler({"status": "logged", "id": envelope.id})


class HttpEventConsumer(EventConsumer):
    """Consumer that forwards envelopes as JSON to an HTTP endpoint"""

    def __init__(self, url: str, timeout: float = 30.0, client: Optional[httpx.AsyncClient] = None):
        if not url:
            raise ValueError("Downstream URL is required")

        self.url = url
        self.client = client or httpx.AsyncClient(
            headers={"User-Agent": "GitHub-Webhook-Relay/1.0"},
            timeout=httpx.Timeout(timeout),
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def create_event(self, envelope: DeliveryEnvelope) -> None:
        response = await self.client.post(self.url, json=envelope.to_dict())

        response_data: Any = None
        try:
            response_data = response.json()
        except ValueError:
            response_data = response.text

        if response.status_code >= 400:
            raise EventConsumerError(
                f"Event consumer error: {response.status_code}",
                status_code=response.status_code,
                response_data=response_data,
            )

        envelope.response_handler(response_data)


def create_event_consumer(downstream_url: Optional[str], timeout: float = 30.0) -> EventConsumer:
    """Pick the consumer matching the configuration"""
    if downstream_url:
        logger.info("Forwarding webhook events", downstream_url=downstream_url)
        return HttpEventConsumer(downstream_url, timeout=timeout)

    logger.info("No downstream URL configured, webhook events will be logged only")
    return LoggingEventConsumer()
