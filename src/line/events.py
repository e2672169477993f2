"""Convert raw LINE webhook events into InboundMessage objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class InboundMessage:
    """A message event, flattened from the LINE webhook payload.

    Attributes:
        event_type: Top-level event type (``"message"``, ``"follow"``, ...).
        message_type: ``"text"``, ``"image"``, ... or ``""`` for non-message events.
        source_type: ``"group"``, ``"room"`` or ``"user"``.
        user_id: Speaker identifier (may be empty for some sources).
        group_id: Group identifier; empty unless ``source_type`` is ``"group"``.
        text: Message text, stripped of surrounding whitespace.
        reply_token: Token for replying to this event.
    """

    event_type: str
    message_type: str
    source_type: str
    user_id: str = ""
    group_id: str = ""
    text: str = ""
    reply_token: str = ""

    @property
    def is_text(self) -> bool:
        return self.event_type == "message" and self.message_type == "text"

    @property
    def is_group(self) -> bool:
        return self.source_type == "group" and bool(self.group_id)


def parse_event(event: dict[str, Any]) -> InboundMessage:
    """Flatten a webhook event dict. Missing fields become empty strings."""
    message = event.get("message") or {}
    source = event.get("source") or {}
    return InboundMessage(
        event_type=event.get("type", ""),
        message_type=message.get("type", ""),
        source_type=source.get("type", ""),
        user_id=source.get("userId", ""),
        group_id=source.get("groupId", ""),
        text=(message.get("text") or "").strip(),
        reply_token=event.get("replyToken", ""),
    )
