"""Snapshot persistence for the note collection.

The whole collection is written as one JSON blob under a fixed key on every
save. Neither :meth:`NotePersistence.save` nor :meth:`NotePersistence.load`
raises: failures are logged, counted, reported through ``on_failure`` and, for
saves, returned as a :class:`SaveResult`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Optional

from pinboard.kvstore import KeyValueStore
from pinboard.metrics import PERSISTENCE_FAILURES
from pinboard.models import SCHEMA_VERSION, Note, NoteSnapshot

logger = logging.getLogger(__name__)

DEFAULT_KEY = "notes"


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a snapshot write."""

    ok: bool
    count: int = 0
    error: Optional[Exception] = None


class NotePersistence:
    """Reads and writes the full note collection through a key-value store.

    ``on_failure`` is called as ``on_failure(operation, exc)`` with
    ``operation`` set to ``"save"`` or ``"load"``.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        key: str = DEFAULT_KEY,
        on_failure: Optional[Callable[[str, Exception], None]] = None,
    ) -> None:
        self._kv = kv
        self._key = key
        self._on_failure = on_failure

    @property
    def key(self) -> str:
        return self._key

    def save(self, notes: Iterable[Note]) -> SaveResult:
        """Overwrite the stored snapshot with ``notes``."""
        try:
            snapshot = NoteSnapshot(notes=list(notes))
            blob = snapshot.model_dump_json(by_alias=True)
            self._kv.set(self._key, blob)
        except Exception as exc:
            # Any backend or serialization failure stops here.
            logger.error("Failed to save notes under %r: %s", self._key, exc)
            self._fail("save", exc)
            return SaveResult(ok=False, error=exc)

        logger.debug("Saved %d notes under %r", len(snapshot.notes), self._key)
        return SaveResult(ok=True, count=len(snapshot.notes))

    def load(self) -> list[Note]:
        """Return the stored notes, or an empty list if none can be read."""
        try:
            blob = self._kv.get(self._key)
        except Exception as exc:
            logger.error(
                "Failed to read notes under %r: %s — starting fresh", self._key, exc
            )
            self._fail("load", exc)
            return []

        if blob is None:
            logger.info("No stored notes under %r — starting fresh", self._key)
            return []

        try:
            snapshot = self._parse(blob)
        except Exception as exc:
            logger.error("Failed to load notes: %s — starting fresh", exc)
            self._fail("load", exc)
            return []

        logger.info("Loaded %d notes from %r", len(snapshot.notes), self._key)
        return list(snapshot.notes)

    @staticmethod
    def _parse(blob: str) -> NoteSnapshot:
        raw = json.loads(blob)
        # Early builds stored a bare array of note records with no version.
        if isinstance(raw, list):
            return NoteSnapshot(schema_version=SCHEMA_VERSION, notes=raw)
        if not isinstance(raw, dict):
            raise ValueError(f"unexpected snapshot type {type(raw).__name__}")

        version = raw.get("schemaVersion", raw.get("schema_version"))
        if not isinstance(version, int) or version > SCHEMA_VERSION:
            raise ValueError(f"unsupported snapshot schema version {version!r}")
        return NoteSnapshot.model_validate(raw)

    def _fail(self, operation: str, exc: Exception) -> None:
        PERSISTENCE_FAILURES.labels(operation=operation).inc()
        if self._on_failure is None:
            return
        try:
            self._on_failure(operation, exc)
        except Exception:
            logger.exception("Persistence failure callback raised")
