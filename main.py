#!/usr/bin/env python3
"""
GitHub Webhook Relay
Main application entry point
"""

import asyncio
import logging
from typing import Optional

from fastapi import FastAPI
import structlog

from src.api.webhooks import router as webhook_router
from src.api.health import router as health_router
from src.services.event_consumer import EventConsumer, create_event_consumer
from src.services.executors import GitHubExecutors, TextGenerator
from src.services.github_client import GitHubClient
from src.services.webhook_listener import WebhookListener
from config.settings import Settings, settings


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structured logging"""
    logging.basicConfig(format="%(message)s", level=log_level.upper())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging(settings.LOG_LEVEL)
logger = structlog.get_logger()


def create_app(
    app_settings: Optional[Settings] = None,
    event_consumer: Optional[EventConsumer] = None,
    text_generator: Optional[TextGenerator] = None,
) -> FastAPI:
    """
    Create the webhook application bound to its settings and event consumer

    The executors are kept on app.state for the host that embeds the relay;
    text_generator is the host's text-generation capability.
    """
    if app_settings is None:
        app_settings = settings
    if event_consumer is None:
        event_consumer = create_event_consumer(
            app_settings.DOWNSTREAM_URL, timeout=app_settings.DISPATCH_TIMEOUT
        )

    app = FastAPI(
        title="GitHub Webhook Relay",
        description="Verifies, normalizes and forwards GitHub webhook deliveries",
        version="1.0.0",
        docs_url="/docs" if app_settings.DEBUG else None,
        redoc_url=None,
    )
    app.state.settings = app_settings
    app.state.event_consumer = event_consumer
    app.state.github_client = GitHubClient(
        token=app_settings.GITHUB_TOKEN, api_url=app_settings.GITHUB_API_URL
    )
    app.state.executors = GitHubExecutors(
        github_client=app.state.github_client,
        generate_text=text_generator,
        event_prompt=app_settings.EVENT_PROMPT,
    )

    app.include_router(health_router, prefix="/health", tags=["health"])
    app.include_router(webhook_router, prefix=app_settings.webhook_path, tags=["webhooks"])

    @app.get("/", tags=["root"])
    async def root():
        """Service information"""
        return {
            "message": "GitHub Webhook Relay",
            "version": "1.0.0",
            "status": "running",
            "webhook": app_settings.webhook_path,
            "health": "/health",
        }

    @app.on_event("startup")
    async def startup_event():
        """Log the listener configuration"""
        logger.info(
            "Starting GitHub Webhook Relay",
            host=app_settings.HOST,
            port=app_settings.PORT,
            webhook_path=app_settings.webhook_path,
        )

    @app.on_event("shutdown")
    async def shutdown_event():
        """Release the event consumer and the GitHub client"""
        logger.info("Shutting down GitHub Webhook Relay")
        await app.state.event_consumer.aclose()
        await app.state.github_client.aclose()

    return app


app = create_app()


if __name__ == "__main__":
    listener = WebhookListener(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
    asyncio.run(listener.serve())
