"""Async HTTP server for the LINE webhook.

Uses aiohttp's AppRunner/TCPSite for non-blocking start/stop.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import UTC, datetime
from typing import Any

from aiohttp import web

from src.config import settings
from src.dispatch.controller import handle_event
from src.line.signature import verify_signature

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

SERVICE_FEATURES = [
    "Chairman statement recording",
    "Delegate task detection",
    "Relay detection",
    "Silent recording",
]


async def _handle_webhook(request: web.Request) -> web.Response:
    """POST /webhook: verify, then dispatch every event in the batch concurrently."""
    body = await request.read()
    signature = request.headers.get("X-Line-Signature", "")
    if not verify_signature(body, signature, settings.line_channel_secret):
        logger.warning("Webhook rejected: invalid signature")
        return web.json_response({"error": "unauthorized"}, status=401)

    try:
        payload: dict[str, Any] = json.loads(body)
        events = payload["events"]
    except (ValueError, KeyError, TypeError):
        logger.warning("Webhook bad request: invalid JSON body")
        return web.json_response({"error": "invalid JSON"}, status=400)

    if not isinstance(events, list):
        logger.warning("Webhook bad request: 'events' is not a list")
        return web.json_response({"error": "invalid JSON"}, status=400)

    try:
        outcomes = await asyncio.gather(*(handle_event(event) for event in events))
    except Exception:
        logger.exception("Webhook batch processing failed")
        return web.Response(status=500)

    logger.debug("Webhook batch processed: %s", outcomes)
    return web.json_response(list(outcomes))


async def _status(request: web.Request) -> web.Response:
    """GET / — static service metadata."""
    return web.json_response({
        "status": "Directive recorder running",
        "features": SERVICE_FEATURES,
        "timestamp": datetime.now(UTC).isoformat(),
        "version": VERSION,
    })


async def _health(request: web.Request) -> web.Response:
    """GET /health — basic liveness check."""
    return web.json_response({"status": "ok"})


def _create_web_app() -> web.Application:
    """Build the aiohttp Application with routes."""
    app = web.Application()
    app.router.add_get("/", _status)
    app.router.add_get("/health", _health)
    app.router.add_post("/webhook", _handle_webhook)
    return app


class WebhookServer:
    """Manages the aiohttp server lifecycle."""

    def __init__(self, host: str | None = None, port: int | None = None) -> None:
        self.host = host or settings.webhook_host
        self.port = port if port is not None else settings.webhook_port
        self._runner: web.AppRunner | None = None

    async def start(self) -> None:
        """Start listening for webhook deliveries."""
        if not settings.line_channel_secret:
            logger.warning("LINE_CHANNEL_SECRET empty; every webhook will be rejected")

        app = _create_web_app()
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()
        logger.info("Webhook server listening on %s:%d", self.host, self.port)

    async def stop(self) -> None:
        """Shut down the server gracefully."""
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
            logger.info("Webhook server stopped")
