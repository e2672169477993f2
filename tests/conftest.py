"""Shared test fixtures."""

from pathlib import Path

import pytest

from src.records.store import RecordStore


@pytest.fixture(autouse=True)
def _reset_cached_tables():
    """Rebuild the alias roster and relay keywords from settings per test."""
    import src.classify.relay as relay
    import src.classify.speakers as speakers

    speakers._roster = None
    relay._keywords = None
    yield
    speakers._roster = None
    relay._keywords = None


@pytest.fixture
def record_store(tmp_path: Path):
    """Install a RecordStore backed by a temp database as the shared instance."""
    RecordStore._reset()
    store = RecordStore(db_path=tmp_path / "records.db")
    RecordStore._instance = store
    yield store
    RecordStore._reset()
