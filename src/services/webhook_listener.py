"""
Owned HTTP server resource for the webhook endpoint
"""

import asyncio
import socket
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI

logger = structlog.get_logger()


class WebhookListener:
    """
    Binds the webhook application to a socket for the lifetime of the trigger

    The server is created on start() and torn down on stop(); it is never
    rebound while running.
    """

    def __init__(
        self,
        app: FastAPI,
        host: str = "0.0.0.0",
        port: int = 3000,
        log_level: str = "info",
    ):
        self.app = app
        self.host = host
        self.port = port
        self.log_level = log_level
        self._server: Optional[uvicorn.Server] = None
        self._task: Optional[asyncio.Task] = None
        self._socket: Optional[socket.socket] = None

    @property
    def is_running(self) -> bool:
        return self._server is not None and self._task is not None and not self._task.done()

    @property
    def bound_port(self) -> Optional[int]:
        """Port the socket is bound to, None when not started"""
        if self._socket is None:
            return None
        return self._socket.getsockname()[1]

    def _create_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            self.app,
            host=self.host,
            port=self.port,
            log_level=self.log_level,
        )
        return uvicorn.Server(config)

    def _bind_socket(self) -> socket.socket:
        """Bind the listening socket here so a busy port surfaces as an error, not an exit"""
        try:
            return socket.create_server((self.host, self.port))
        except OSError as e:
            logger.error(
                "Failed to bind Github webhook listener",
                host=self.host,
                port=self.port,
                error=str(e),
            )
            raise RuntimeError(
                f"Webhook listener failed to bind {self.host}:{self.port}: {e}"
            ) from e

    def _release(self) -> None:
        if self._socket is not None:
            self._socket.close()
        self._server = None
        self._task = None
        self._socket = None

    async def start(self) -> None:
        """Start serving in the background and wait until the socket is bound"""
        if self.is_running:
            raise RuntimeError("Webhook listener is already running")

        logger.info("Starting Github webhook event listener...", host=self.host, port=self.port)
        self._socket = self._bind_socket()
        self._server = self._create_server()
        self._task = asyncio.create_task(self._server.serve(sockets=[self._socket]))

        while not self._server.started:
            if self._task.done():
                self._release()
                raise RuntimeError("Webhook listener exited during startup")
            await asyncio.sleep(0.05)

        logger.info("Github Webhook Server started", port=self.bound_port)

    async def stop(self) -> None:
        """Signal the server to exit and wait for it to finish"""
        if self._server is None or self._task is None:
            return

        self._server.should_exit = True
        try:
            await self._task
        finally:
            self._release()
            logger.info("Github Webhook Server stopped", port=self.port)

    async def serve(self) -> None:
        """Run in the foreground until the process is asked to exit"""
        await self.start()
        try:
            await self._task
        finally:
            await self.stop()
