"""Tests for RecordStore — aiosqlite append/query."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import aiosqlite
import pytest

from src.records.models import Record
from src.records.store import RecordStore


@pytest.fixture
async def store(tmp_path: Path) -> RecordStore:
    """Create a RecordStore backed by a temp database."""
    return RecordStore(db_path=tmp_path / "test.db")


def _make_record(
    group_id: str = "G1",
    category: str = "principal",
    kind: str = "statement",
    created_at: str = "2025-01-01T00:00:00+00:00",
    **kwargs,
) -> Record:
    if kind == "task":
        kwargs.setdefault("task_description", "Prepare Q3 report")
        kwargs.setdefault("priority", "high")
    defaults = {
        "speaker_name": "Chairman Ge",
        "message_content": "hello",
    }
    defaults.update(kwargs)
    return Record(
        group_id=group_id,
        speaker_category=category,
        record_kind=kind,
        created_at=created_at,
        **defaults,
    )


# -- append ----------------------------------------------------------------------


async def test_append_assigns_increasing_ids(store: RecordStore) -> None:
    first = await store.append(_make_record())
    second = await store.append(_make_record())
    assert second > first


async def test_append_writes_id_back(store: RecordStore) -> None:
    record = _make_record()
    new_id = await store.append(record)
    assert record.id == new_id


async def test_append_stamps_created_at(store: RecordStore) -> None:
    record = _make_record(created_at="")
    await store.append(record)
    assert record.created_at
    assert "T" in record.created_at


async def test_append_roundtrip(store: RecordStore) -> None:
    await store.append(
        _make_record(kind="task", message_content="Chairman said prepare the Q3 report")
    )

    (fetched,) = await store.query("G1")
    assert fetched.record_kind == "task"
    assert fetched.task_description == "Prepare Q3 report"
    assert fetched.priority == "high"
    assert fetched.speaker_role == "Chairman"
    assert fetched.message_content == "Chairman said prepare the Q3 report"


async def test_statement_roundtrip_keeps_task_fields_empty(store: RecordStore) -> None:
    await store.append(_make_record())
    (fetched,) = await store.query("G1")
    assert fetched.task_description is None
    assert fetched.priority is None


# -- query -----------------------------------------------------------------------


async def test_query_empty(store: RecordStore) -> None:
    assert await store.query("G1") == []


async def test_query_scoped_to_group(store: RecordStore) -> None:
    await store.append(_make_record(group_id="G1"))
    await store.append(_make_record(group_id="G2"))

    records = await store.query("G1")
    assert [r.group_id for r in records] == ["G1"]


async def test_query_most_recent_first(store: RecordStore) -> None:
    await store.append(_make_record(created_at="2025-01-01T00:00:00+00:00", message_content="a"))
    await store.append(_make_record(created_at="2025-03-01T00:00:00+00:00", message_content="c"))
    await store.append(_make_record(created_at="2025-02-01T00:00:00+00:00", message_content="b"))

    records = await store.query("G1")
    assert [r.message_content for r in records] == ["c", "b", "a"]


async def test_query_orders_mixed_offsets_chronologically(store: RecordStore) -> None:
    await store.append(
        _make_record(created_at="2025-01-01T08:00:00+08:00", message_content="earlier")
    )
    await store.append(
        _make_record(created_at="2025-01-01T01:00:00+00:00", message_content="later")
    )

    records = await store.query("G1")
    assert [r.message_content for r in records] == ["later", "earlier"]
    assert records[1].created_at == "2025-01-01T00:00:00+00:00"


async def test_append_treats_naive_timestamp_as_utc(store: RecordStore) -> None:
    record = _make_record(created_at="2025-01-01T09:30:00")
    await store.append(record)
    assert record.created_at == "2025-01-01T09:30:00+00:00"


async def test_query_is_stable_across_calls(store: RecordStore) -> None:
    for i in range(4):
        await store.append(_make_record(message_content=f"m{i}"))

    first = await store.query("G1")
    second = await store.query("G1")
    assert [r.id for r in first] == [r.id for r in second]


async def test_kind_filter(store: RecordStore) -> None:
    await store.append(_make_record(kind="statement"))
    await store.append(_make_record(kind="task"))

    tasks = await store.query("G1", kind_filter="task")
    statements = await store.query("G1", kind_filter="statement")
    assert [r.record_kind for r in tasks] == ["task"]
    assert [r.record_kind for r in statements] == ["statement"]


@pytest.mark.parametrize("kind_filter", ["all", "statement", "task"])
async def test_speaker_filter_principal_only(store: RecordStore, kind_filter: str) -> None:
    for category in ("principal", "delegate", "relay"):
        await store.append(_make_record(category=category, kind="statement"))
        await store.append(_make_record(category=category, kind="task"))

    records = await store.query("G1", kind_filter=kind_filter, speaker_filter="principal")
    assert records
    assert all(r.speaker_category == "principal" for r in records)


async def test_relay_filter(store: RecordStore) -> None:
    await store.append(_make_record(category="delegate"))
    await store.append(_make_record(category="relay", speaker_name="Wang"))

    records = await store.query("G1", speaker_filter="relay")
    assert [r.speaker_name for r in records] == ["Wang"]
    assert records[0].speaker_role == "Relay"


async def test_invalid_filters_rejected(store: RecordStore) -> None:
    with pytest.raises(ValueError):
        await store.query("G1", kind_filter="note")
    with pytest.raises(ValueError):
        await store.query("G1", speaker_filter="other")


async def test_store_has_no_mutation_methods() -> None:
    for name in ("update", "delete", "remove"):
        assert not hasattr(RecordStore, name)


# -- Connection ------------------------------------------------------------------


async def test_connect_closes_connection_when_schema_setup_fails(store: RecordStore) -> None:
    mock_db = MagicMock()
    mock_db.execute = AsyncMock(side_effect=aiosqlite.OperationalError("disk I/O error"))
    mock_db.close = AsyncMock()

    with patch("src.records.store.aiosqlite.connect", new_callable=AsyncMock, return_value=mock_db):
        with pytest.raises(aiosqlite.OperationalError):
            await store.append(_make_record())

    mock_db.close.assert_awaited_once()
    assert store._initialised is False


# -- Singleton -------------------------------------------------------------------


def test_singleton_get() -> None:
    RecordStore._reset()
    try:
        a = RecordStore.get()
        b = RecordStore.get()
        assert a is b
    finally:
        RecordStore._reset()


def test_singleton_reset() -> None:
    RecordStore._reset()
    try:
        a = RecordStore.get()
        RecordStore._reset()
        b = RecordStore.get()
        assert a is not b
    finally:
        RecordStore._reset()
