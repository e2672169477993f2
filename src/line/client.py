"""LINE Messaging API client using aiohttp."""

from __future__ import annotations

import logging

import aiohttp

from src.config import settings

logger = logging.getLogger(__name__)

# LINE rejects text messages longer than this.
MAX_TEXT_LENGTH = 5000

_session: aiohttp.ClientSession | None = None


class LineAPIError(Exception):
    """Raised when a LINE API call returns a non-success status."""

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"LINE API error {status}: {body[:200]}")
        self.status = status


def _get_session() -> aiohttp.ClientSession:
    """Return (and lazily create) the shared aiohttp session."""
    global _session  # noqa: PLW0603
    if _session is None or _session.closed:
        _session = aiohttp.ClientSession(
            base_url=settings.line_api_base_url,
            headers={"Authorization": f"Bearer {settings.line_channel_access_token}"},
            timeout=aiohttp.ClientTimeout(total=settings.line_api_timeout),
        )
    return _session


async def close_session() -> None:
    """Close the shared session, if one was opened."""
    global _session  # noqa: PLW0603
    if _session is not None and not _session.closed:
        await _session.close()
    _session = None


async def get_display_name(user_id: str, group_id: str) -> str:
    """Return a group member's display name.

    Raises:
        LineAPIError: The profile lookup returned a non-200 status.
        aiohttp.ClientError: Network failure.
    """
    session = _get_session()
    async with session.get(f"/v2/bot/group/{group_id}/member/{user_id}") as resp:
        if resp.status != 200:
            raise LineAPIError(resp.status, await resp.text())
        profile = await resp.json()
    return profile.get("displayName") or ""


async def reply_text(reply_token: str, text: str) -> bool:
    """Reply to a message with a single text bubble. Returns True on success."""
    if len(text) > MAX_TEXT_LENGTH:
        text = text[: MAX_TEXT_LENGTH - 3] + "..."

    payload = {
        "replyToken": reply_token,
        "messages": [{"type": "text", "text": text}],
    }

    session = _get_session()
    try:
        async with session.post("/v2/bot/message/reply", json=payload) as resp:
            if resp.status == 200:
                logger.info("Reply sent (%d chars)", len(text))
                return True
            body = await resp.text()
            logger.error("Reply failed: status=%d body=%s", resp.status, body[:200])
            return False
    except aiohttp.ClientError:
        logger.exception("Reply failed (network error)")
        return False
