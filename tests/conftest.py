"""Shared fixtures: in-memory persistence and a controllable clock."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from pinboard.kvstore import MemoryKeyValueStore
from pinboard.models import Note
from pinboard.persistence import NotePersistence
from pinboard.store import NotesStore

BASE_TIME = datetime(2024, 10, 15, 9, 30, tzinfo=UTC)


class FakeClock:
    """Returns a later time on every call, one minute apart."""

    def __init__(self, start: datetime = BASE_TIME + timedelta(days=1)) -> None:
        self.current = start
        self.calls: list[datetime] = []

    def __call__(self) -> datetime:
        self.current += timedelta(minutes=1)
        self.calls.append(self.current)
        return self.current


def make_note(
    title: str,
    content: str = "body",
    *,
    pinned: bool = False,
    minutes: int = 0,
    updated_minutes: int | None = None,
) -> Note:
    """Build a note whose timestamps are ``minutes`` after BASE_TIME."""
    created = BASE_TIME + timedelta(minutes=minutes)
    updated = BASE_TIME + timedelta(
        minutes=minutes if updated_minutes is None else updated_minutes
    )
    return Note(
        title=title,
        content=content,
        is_pinned=pinned,
        created_at=created,
        updated_at=updated,
    )


@pytest.fixture()
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def persistence(kv: MemoryKeyValueStore) -> NotePersistence:
    return NotePersistence(kv)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(persistence: NotePersistence, clock: FakeClock) -> NotesStore:
    """Return an empty NotesStore backed by memory."""
    return NotesStore(persistence, clock=clock)
