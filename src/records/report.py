"""Render record lists into chat-friendly report text."""

from __future__ import annotations

import zoneinfo
from datetime import datetime
from typing import TYPE_CHECKING

from src.config import settings
from src.records.models import DELEGATE, HIGH, LOW, NORMAL, PRINCIPAL, RELAY, STATEMENT, TASK

if TYPE_CHECKING:
    from collections.abc import Sequence

    from src.records.models import Record

NO_RECORDS_MESSAGE = "📋 No matching records yet"

KIND_ICONS: dict[str, str] = {TASK: "📌", STATEMENT: "💬"}
SPEAKER_ICONS: dict[str, str] = {PRINCIPAL: "👑", DELEGATE: "👤", RELAY: "📢"}
PRIORITY_ICONS: dict[str, str] = {HIGH: "🔴", NORMAL: "🟡", LOW: "🟢"}
PRIORITY_LABELS: dict[str, str] = {HIGH: "High", NORMAL: "Normal", LOW: "Low"}


def _format_timestamp(created_at: str, tz: zoneinfo.ZoneInfo) -> str:
    """Render an ISO timestamp as ``MM/DD HH:MM`` in *tz*."""
    try:
        dt = datetime.fromisoformat(created_at)
    except ValueError:
        return created_at
    if dt.tzinfo is None:
        # SQLite CURRENT_TIMESTAMP style values are UTC without an offset.
        dt = dt.replace(tzinfo=zoneinfo.ZoneInfo("UTC"))
    return dt.astimezone(tz).strftime("%m/%d %H:%M")


def _format_entry(index: int, record: Record, tz: zoneinfo.ZoneInfo) -> str:
    lines = [
        f"{index}. {KIND_ICONS[record.record_kind]} "
        f"{SPEAKER_ICONS[record.speaker_category]} "
        f"{_format_timestamp(record.created_at, tz)}",
        f"   👤 {record.speaker_role}: {record.speaker_name}",
    ]
    if record.is_task:
        lines.append(f"   🎯 Task: {record.task_description}")
        lines.append(
            f"   {PRIORITY_ICONS[record.priority]} Priority: {PRIORITY_LABELS[record.priority]}"
        )
        lines.append(f"   💭 Original: {record.message_content}")
    else:
        lines.append(f"   💭 Said: {record.message_content}")
    return "\n".join(lines)


def _format_summary(records: Sequence[Record]) -> str:
    statements = sum(1 for r in records if r.record_kind == STATEMENT)
    tasks = sum(1 for r in records if r.record_kind == TASK)
    principals = sum(1 for r in records if r.speaker_category == PRINCIPAL)
    delegates = sum(1 for r in records if r.speaker_category == DELEGATE)
    relays = sum(1 for r in records if r.speaker_category == RELAY)

    speakers = f"👑 Chairman {principals}, 👤 Delegate {delegates}"
    if relays > 0:
        speakers += f", 📢 Relay {relays}"

    return "\n".join([
        "📊 Summary:",
        f"💬 Statements {statements}, 📌 Tasks {tasks}",
        speakers,
    ])


def format_records(records: Sequence[Record], tz: zoneinfo.ZoneInfo | None = None) -> str:
    """Format *records* as a numbered report with a summary block.

    Entries keep the order they are given in. Timestamps are shown in *tz*,
    defaulting to ``settings.display_timezone``.
    """
    if not records:
        return NO_RECORDS_MESSAGE

    tz = tz or zoneinfo.ZoneInfo(settings.display_timezone)
    entries = [_format_entry(i, record, tz) for i, record in enumerate(records, start=1)]

    return (
        f"📋 Records ({len(records)} total):\n\n"
        + "\n\n".join(entries)
        + "\n\n"
        + _format_summary(records)
    )
