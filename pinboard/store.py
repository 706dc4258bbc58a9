"""In-memory note collection with persistence on every mutation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Optional, Union

from pinboard.metrics import NOTE_OPERATIONS, NOTES_TOTAL
from pinboard.models import DEFAULT_SORT, Note, SortOption, utcnow
from pinboard.persistence import NotePersistence, SaveResult

logger = logging.getLogger(__name__)


def _sort_key(option: SortOption) -> tuple[Callable[[Note], object], bool]:
    """Return ``(key, reverse)`` for the primary ordering of ``option``."""
    if option is SortOption.BY_TITLE:
        return (lambda n: n.title), False
    if option is SortOption.BY_CREATED_AT:
        return (lambda n: n.created_at), True
    return (lambda n: n.updated_at), True


def sort_notes(notes: Iterable[Note], option: SortOption) -> list[Note]:
    """Order ``notes`` for display: pinned first, then by ``option``.

    Both passes are stable, so ties keep their collection order. Titles
    compare by code point, which puts uppercase before lowercase.
    """
    key, reverse = _sort_key(option)
    # sorted() keeps equal elements in input order even with reverse=True.
    ordered = sorted(notes, key=key, reverse=reverse)
    pinned = [n for n in ordered if n.is_pinned]
    unpinned = [n for n in ordered if not n.is_pinned]
    return pinned + unpinned


class NotesStore:
    """Owns the note collection and the current sort selection.

    Every mutating call writes the full collection through ``persistence``
    before returning. Updates and pin toggles addressed to an unknown id are
    silent no-ops that return ``None``.
    """

    def __init__(
        self,
        persistence: NotePersistence,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._persistence = persistence
        self._clock = clock
        self._notes: list[Note] = persistence.load()
        self._sort_option = DEFAULT_SORT
        self.last_save: Optional[SaveResult] = None
        NOTES_TOTAL.set(len(self._notes))

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def notes(self) -> list[Note]:
        """The collection in storage order (not meaningful for display)."""
        return list(self._notes)

    @property
    def sort_option(self) -> SortOption:
        return self._sort_option

    def __len__(self) -> int:
        return len(self._notes)

    def get(self, note_id: str) -> Optional[Note]:
        index = self.index_of(note_id)
        return None if index is None else self._notes[index]

    def index_of(self, note_id: str) -> Optional[int]:
        """Position of ``note_id`` in the unsorted collection."""
        for index, note in enumerate(self._notes):
            if note.id == note_id:
                return index
        return None

    def derived_view(self) -> list[Note]:
        """Notes in display order for the current sort option."""
        return sort_notes(self._notes, self._sort_option)

    def sections(self) -> tuple[list[Note], list[Note]]:
        """Split the derived view into ``(pinned, unpinned)``."""
        view = self.derived_view()
        return (
            [n for n in view if n.is_pinned],
            [n for n in view if not n.is_pinned],
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_sort_option(self, option: Union[SortOption, str]) -> None:
        """Change the display ordering. Not persisted."""
        self._sort_option = SortOption(option)
        logger.debug("Sort option set to %s", self._sort_option.value)

    def add(self, note: Note) -> Note:
        self._notes.append(note)
        logger.info("Added note %s — '%s'", note.id, note.title)
        self._commit("add")
        return note

    def update(self, note: Note) -> Optional[Note]:
        """Replace the editable fields of the note with the same id."""
        index = self.index_of(note.id)
        if index is None:
            logger.debug("Update ignored, no note %s", note.id)
            return None

        updated = self._notes[index].model_copy(
            update={
                "title": note.title,
                "content": note.content,
                "is_pinned": note.is_pinned,
                "updated_at": self._now_for(self._notes[index]),
            }
        )
        self._notes[index] = updated
        logger.info("Updated note %s", updated.id)
        self._commit("update")
        return updated

    def toggle_pin(self, note: Union[Note, str]) -> Optional[Note]:
        note_id = note if isinstance(note, str) else note.id
        index = self.index_of(note_id)
        if index is None:
            logger.debug("Pin toggle ignored, no note %s", note_id)
            return None

        current = self._notes[index]
        toggled = current.model_copy(
            update={
                "is_pinned": not current.is_pinned,
                "updated_at": self._now_for(current),
            }
        )
        self._notes[index] = toggled
        logger.info("Note %s pinned=%s", note_id, toggled.is_pinned)
        self._commit("toggle_pin")
        return toggled

    def delete(self, indices: Iterable[int]) -> list[Note]:
        """Remove the notes at ``indices`` of the unsorted collection.

        Indices outside the collection are ignored. Prefer
        :meth:`delete_by_id` when working from the derived view.
        """
        targets = {i for i in indices if 0 <= i < len(self._notes)}
        removed = [n for i, n in enumerate(self._notes) if i in targets]
        self._notes = [n for i, n in enumerate(self._notes) if i not in targets]
        logger.info("Deleted %d notes", len(removed))
        self._commit("delete")
        return removed

    def delete_by_id(self, note_id: str) -> bool:
        index = self.index_of(note_id)
        if index is None:
            return False
        self.delete([index])
        return True

    def _now_for(self, note: Note) -> datetime:
        # updated_at never precedes created_at, even if the clock steps back.
        return max(self._clock(), note.created_at)

    def _commit(self, operation: str) -> None:
        NOTE_OPERATIONS.labels(operation=operation).inc()
        NOTES_TOTAL.set(len(self._notes))
        self.last_save = self._persistence.save(self._notes)
