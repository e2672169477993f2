"""RecordStore — append-only aiosqlite table of captured messages."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import aiosqlite

from src.config import settings
from src.records.models import RECORD_KINDS, SPEAKER_CATEGORIES, Record

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

ALL = "all"


def _to_utc_iso(created_at: str) -> str:
    """Normalise an ISO timestamp to UTC; empty means now. Naive values are UTC."""
    if not created_at:
        return datetime.now(UTC).isoformat()
    stamp = datetime.fromisoformat(created_at)
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=UTC)
    return stamp.astimezone(UTC).isoformat()


_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS directive_records (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    group_id TEXT NOT NULL,
    speaker_name TEXT NOT NULL,
    speaker_category TEXT NOT NULL,
    speaker_role TEXT NOT NULL,
    message_content TEXT NOT NULL,
    record_kind TEXT NOT NULL,
    task_description TEXT,
    priority TEXT,
    created_at TEXT NOT NULL
)
"""

_CREATE_INDEXES = (
    "CREATE INDEX IF NOT EXISTS idx_records_group_id ON directive_records(group_id)",
    "CREATE INDEX IF NOT EXISTS idx_records_speaker_category"
    " ON directive_records(speaker_category)",
    "CREATE INDEX IF NOT EXISTS idx_records_record_kind ON directive_records(record_kind)",
    "CREATE INDEX IF NOT EXISTS idx_records_created_at ON directive_records(created_at)",
)


class RecordStore:
    """Persists classified records in SQLite.

    Singleton accessed via ``RecordStore.get()``.  Pass an explicit *db_path*
    for test isolation (e.g. ``tmp_path / "test.db"``).

    Records are never updated or deleted; the only writes are appends.
    """

    _instance: RecordStore | None = None

    def __init__(self, db_path: Path | None = None) -> None:
        self._db_path = db_path or settings.database_path
        self._initialised = False

    @classmethod
    def get(cls) -> RecordStore:
        """Return the shared RecordStore instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def _reset(cls) -> None:
        """Reset the singleton (for testing)."""
        cls._instance = None

    # -- Internal helpers ------------------------------------------------------

    async def _connect(self) -> aiosqlite.Connection:
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        db = await aiosqlite.connect(str(self._db_path))
        if not self._initialised:
            try:
                await db.execute(_CREATE_TABLE)
                for statement in _CREATE_INDEXES:
                    await db.execute(statement)
                await db.commit()
            except Exception:
                await db.close()
                raise
            self._initialised = True
        return db

    # -- Operations ------------------------------------------------------------

    async def append(self, record: Record) -> int:
        """Insert *record* and return its new id.

        ``created_at`` is stamped here (UTC now) unless the caller already set
        it, in which case it is converted to UTC so rows sort chronologically.
        The id and timestamp are written back onto *record*. Storage errors
        propagate to the caller.
        """
        record.created_at = _to_utc_iso(record.created_at)
        db = await self._connect()
        try:
            cursor = await db.execute(
                """
                INSERT INTO directive_records
                    (group_id, speaker_name, speaker_category, speaker_role,
                     message_content, record_kind, task_description, priority,
                     created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                record.to_row(),
            )
            await db.commit()
            record.id = cursor.lastrowid
        finally:
            await db.close()

        logger.info(
            "Recorded %s %s from %s (%s): %s",
            record.speaker_role,
            record.record_kind,
            record.speaker_name,
            record.id,
            record.message_content[:50],
        )
        return record.id

    async def query(
        self,
        group_id: str,
        kind_filter: str = ALL,
        speaker_filter: str = ALL,
    ) -> list[Record]:
        """Return the group's records, most recent first.

        Args:
            group_id: Conversation scope; results never cross groups.
            kind_filter: ``"all"``, ``"statement"`` or ``"task"``.
            speaker_filter: ``"all"``, ``"principal"``, ``"delegate"`` or ``"relay"``.
        """
        if kind_filter != ALL and kind_filter not in RECORD_KINDS:
            raise ValueError(f"Unknown kind filter: {kind_filter!r}")
        if speaker_filter != ALL and speaker_filter not in SPEAKER_CATEGORIES:
            raise ValueError(f"Unknown speaker filter: {speaker_filter!r}")

        sql = "SELECT * FROM directive_records WHERE group_id = ?"
        params: list[str] = [group_id]
        if kind_filter != ALL:
            sql += " AND record_kind = ?"
            params.append(kind_filter)
        if speaker_filter != ALL:
            sql += " AND speaker_category = ?"
            params.append(speaker_filter)
        sql += " ORDER BY created_at DESC, id DESC"

        db = await self._connect()
        try:
            cursor = await db.execute(sql, tuple(params))
            rows = await cursor.fetchall()
            return [Record.from_row(row) for row in rows]
        finally:
            await db.close()
