"""Directive recorder entry point."""

import asyncio
import logging
import signal

from src.config import settings
from src.line.client import close_session
from src.webhooks.server import WebhookServer

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, settings.log_level),
)
logger = logging.getLogger(__name__)


async def _serve(stop: asyncio.Event | None = None) -> None:
    """Run the webhook server until SIGINT, SIGTERM, or *stop* is set."""
    stop = stop or asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    server = WebhookServer()
    await server.start()
    try:
        await stop.wait()
        logger.info("Shutdown signal received")
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)
        await server.stop()
        await close_session()


def main() -> None:
    """Start the webhook server."""
    if not settings.line_channel_access_token:
        logger.warning("LINE_CHANNEL_ACCESS_TOKEN is empty; profile lookups and replies will fail")
    if not settings.anthropic_api_key:
        logger.warning("ANTHROPIC_API_KEY is empty; every message will be recorded as a statement")

    logger.info("Starting directive recorder with classifier %s...", settings.classifier_model)
    asyncio.run(_serve())


if __name__ == "__main__":
    main()
