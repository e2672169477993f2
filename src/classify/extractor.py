"""Task extraction: ask the external classifier whether a message is a task.

The classifier answers in free text, either the statement sentinel or a
``task|description|priority`` triple. Anything it returns that does not fit
that shape, and any failure to get an answer at all, counts as an ordinary
statement. Nothing here raises.
"""

from __future__ import annotations

import logging

from src.config import settings
from src.llm.client import complete_text
from src.llm.prompt import (
    DELIMITER,
    STATEMENT_TOKEN,
    TASK_MARKER,
    build_system_prompt,
    build_user_content,
)
from src.outcome import Err, capture
from src.records.models import HIGH, LOW, NORMAL, Classification

logger = logging.getLogger(__name__)

# Chinese sentinels and priority hints are accepted as well.
_STATEMENT_TOKENS = frozenset({STATEMENT_TOKEN, "發言"})
_TASK_MARKERS = frozenset({TASK_MARKER, "任務"})
_HIGH_TOKENS = ("high", "高")
_LOW_TOKENS = ("low", "低")

_TASK_FIELD_COUNT = 3


def _map_priority(hint: str) -> str:
    lowered = hint.casefold()
    if any(token in lowered for token in _HIGH_TOKENS):
        return HIGH
    if any(token in lowered for token in _LOW_TOKENS):
        return LOW
    return NORMAL


def parse_classifier_response(raw: str, message_text: str) -> Classification:
    """Parse the classifier's reply into a Classification.

    A task reply needs the task marker and at least three fields; only the
    second and third are read. Two fields (no priority) are treated as
    malformed and yield a statement. An empty description falls back to
    *message_text*.
    """
    result = raw.strip()
    if result.casefold() in _STATEMENT_TOKENS:
        return Classification.statement()

    parts = [part.strip() for part in result.split(DELIMITER)]
    if len(parts) < _TASK_FIELD_COUNT or parts[0].casefold() not in _TASK_MARKERS:
        logger.warning("Unrecognised classifier response, treating as statement: %r", raw[:100])
        return Classification.statement()

    description, priority_hint = parts[1], parts[2]
    return Classification.task(
        description=description or message_text,
        priority=_map_priority(priority_hint),
    )


async def extract_task(text: str, speaker_category: str) -> Classification:
    """Classify *text* spoken by a speaker of *speaker_category*.

    ``"principal"`` uses the direct-instruction prompt; ``"delegate"`` and
    ``"relay"`` use the relay-aware prompt.
    """
    outcome = await capture(
        complete_text(
            [{"role": "user", "content": build_user_content(text, speaker_category)}],
            system=build_system_prompt(speaker_category),
            max_tokens=settings.classifier_max_tokens,
            temperature=settings.classifier_temperature,
        )
    )
    if isinstance(outcome, Err):
        logger.warning("Classifier call failed, treating as statement: %s", outcome.describe())
        return Classification.statement()

    raw = outcome.value
    if not isinstance(raw, str):
        logger.warning("Classifier returned non-text content, treating as statement")
        return Classification.statement()
    return parse_classifier_response(raw, text)
