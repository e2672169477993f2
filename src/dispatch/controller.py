"""Per-event dispatch: query commands, speaker routing, and recording.

Each inbound event ends in exactly one terminal outcome:

- ``IGNORED``  not a group text message, or an unrelated speaker with no
  relay keyword
- ``REPLIED``  a query command was answered with a report
- ``RECORDED`` a principal, delegate or relay message was classified and stored
- ``FAILED``   an external call failed; logged, nothing said in the chat

The conversation never sees an error message.
"""

from __future__ import annotations

import logging
from typing import Any

from src.classify.extractor import extract_task
from src.classify.relay import contains_relay_trigger
from src.classify.speakers import classify_speaker
from src.dispatch.commands import QueryCommand, match_command
from src.line.client import get_display_name, reply_text
from src.line.events import InboundMessage, parse_event
from src.outcome import Err, attempt, capture
from src.records.models import RELAY, Record
from src.records.report import format_records
from src.records.store import RecordStore

logger = logging.getLogger(__name__)

IGNORED = "ignored"
REPLIED = "replied"
RECORDED = "recorded"
FAILED = "failed"


async def _answer_query(msg: InboundMessage, command: QueryCommand) -> str:
    """Run a report query and reply with the formatted result."""
    outcome = await capture(
        RecordStore.get().query(msg.group_id, command.kind_filter, command.speaker_filter)
    )
    if isinstance(outcome, Err):
        logger.error("Query %s failed for %s: %s", command.name, msg.group_id, outcome.describe())
        return FAILED

    report = attempt(format_records, outcome.value)
    if isinstance(report, Err):
        logger.error(
            "Formatting %s failed for %s: %s", command.name, msg.group_id, report.describe()
        )
        return FAILED

    sent = await capture(reply_text(msg.reply_token, report.value))
    if isinstance(sent, Err) or not sent.value:
        logger.warning("Could not deliver %s report to %s", command.name, msg.group_id)
        return FAILED

    logger.info(
        "Answered %s for %s (%d records)", command.name, msg.group_id, len(outcome.value)
    )
    return REPLIED


async def _record(msg: InboundMessage, speaker_name: str, category: str) -> str:
    """Classify and persist one message under *category*."""
    classification = await extract_task(msg.text, category)
    record = Record.from_classification(
        group_id=msg.group_id,
        speaker_name=speaker_name,
        speaker_category=category,
        message_content=msg.text,
        classification=classification,
    )
    stored = await capture(RecordStore.get().append(record))
    if isinstance(stored, Err):
        logger.error(
            "Failed to store %s message from %s: %s",
            category,
            speaker_name,
            stored.describe(),
            exc_info=stored.error,
        )
        return FAILED
    return RECORDED


async def handle_event(event: dict[str, Any]) -> str:
    """Process one webhook event and return its terminal outcome."""
    msg = parse_event(event)

    if not msg.is_text:
        logger.debug("Ignored non-text event: %s/%s", msg.event_type, msg.message_type)
        return IGNORED

    if not msg.is_group:
        logger.debug("Ignored message outside a group (source=%s)", msg.source_type)
        return IGNORED

    command = match_command(msg.text)
    if command is not None:
        return await _answer_query(msg, command)

    profile = await capture(get_display_name(msg.user_id, msg.group_id))
    if isinstance(profile, Err):
        logger.warning("Profile lookup failed for %s: %s", msg.user_id, profile.describe())
        return FAILED
    speaker_name = profile.value

    speaker = classify_speaker(speaker_name)
    if speaker.is_relevant:
        logger.info("%s message: %s - %s", speaker.role_label, speaker_name, msg.text[:30])
        return await _record(msg, speaker_name, speaker.category)

    if contains_relay_trigger(msg.text):
        logger.info("Relay keyword from %s - %s", speaker_name, msg.text[:30])
        return await _record(msg, speaker_name, RELAY)

    logger.debug("Ignored message from unrelated speaker %s", speaker_name)
    return IGNORED
