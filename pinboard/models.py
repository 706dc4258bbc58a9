"""Pydantic models for notes and their persisted snapshot."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

SCHEMA_VERSION = 1


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class Note(BaseModel):
    """A single note with pin flag and timestamps.

    No content validation happens here; empty titles are rejected by
    :class:`NoteDraft` before a note is built.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()), frozen=True)
    title: str = Field(..., description="Note title")
    content: str = Field(..., description="Note content")
    is_pinned: bool = Field(default=False, description="Shown above unpinned notes")
    created_at: datetime = Field(frozen=True, description="Set once on creation")
    updated_at: datetime = Field(description="Refreshed on every mutation")

    @model_validator(mode="before")
    @classmethod
    def _fill_timestamps(cls, data: Any) -> Any:
        """Give fresh notes a single clock reading for both timestamps."""
        if not isinstance(data, dict):
            return data
        created = data.get("created_at", data.get("createdAt"))
        updated = data.get("updated_at", data.get("updatedAt"))
        if created is None and updated is None:
            now = utcnow()
            return {**data, "created_at": now, "updated_at": now}
        if created is None:
            return {**data, "created_at": updated}
        if updated is None:
            return {**data, "updated_at": created}
        return data

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        """Treat naive timestamps from older snapshots as UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class NoteDraft(BaseModel):
    """Form input for creating or editing a note."""

    title: str = Field(..., min_length=1, description="Note title")
    content: str = Field(..., min_length=1, description="Note content")
    is_pinned: bool = False

    @field_validator("title", "content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        """Reject whitespace-only input but keep what the user typed."""
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def to_note(self) -> Note:
        """Build a fresh note from this draft."""
        return Note(title=self.title, content=self.content, is_pinned=self.is_pinned)

    def apply_to(self, note: Note) -> Note:
        """Return a copy of ``note`` carrying this draft's fields."""
        return note.model_copy(
            update={
                "title": self.title,
                "content": self.content,
                "is_pinned": self.is_pinned,
            }
        )


class NoteSnapshot(BaseModel):
    """Container for all notes, used for JSON serialization."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    schema_version: int = SCHEMA_VERSION
    notes: list[Note] = Field(default_factory=list)


class SortOption(str, Enum):
    """Orderings offered by the sort picker."""

    BY_TITLE = "by_title"
    BY_CREATED_AT = "by_created_at"
    BY_UPDATED_AT = "by_updated_at"

    @property
    def label(self) -> str:
        return _SORT_LABELS[self]


_SORT_LABELS: dict[SortOption, str] = {
    SortOption.BY_TITLE: "Title",
    SortOption.BY_CREATED_AT: "Date created",
    SortOption.BY_UPDATED_AT: "Date updated",
}

DEFAULT_SORT = SortOption.BY_UPDATED_AT
