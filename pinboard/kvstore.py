"""Local key-value stores that hold the serialized note collection.

Each backend stores opaque string blobs under string keys. Backends raise
:class:`~pinboard.errors.StorageError` on I/O failure and leave the decision
of how to report it to the caller.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

import redis

from pinboard.errors import StorageError

logger = logging.getLogger(__name__)

REDIS_PREFIX = "pinboard:"


class KeyValueStore(Protocol):
    """Minimal blob store used by the persistence adapter."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryKeyValueStore:
    """Dict-backed store; nothing survives the process."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileKeyValueStore:
    """Keeps every key in one JSON object on disk.

    Writes go through a temp file in the same directory and ``os.replace``,
    so a reader never sees a half-written file.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (
            OSError,
            RecursionError,
            UnicodeDecodeError,
            json.JSONDecodeError,
        ) as exc:
            raise StorageError(f"cannot read {self._path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise StorageError(f"{self._path} does not hold a JSON object")
        return raw

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"value for {key!r} in {self._path} is not a string")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StorageError as exc:
            if isinstance(exc.__cause__, OSError):
                raise
            # A corrupt file is replaced rather than blocking every write.
            logger.warning("Overwriting corrupt store %s: %s", self._path, exc)
            data = {}
        data[key] = value

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"cannot write {self._path}: {exc}") from exc
        logger.debug("Wrote key %r to %s", key, self._path)


class RedisKeyValueStore:
    """Redis-backed store using plain GET/SET on namespaced keys."""

    def __init__(self, redis_url: str, client: Optional[redis.Redis] = None) -> None:
        self._redis_url = redis_url
        self._client = client or redis.Redis.from_url(
            redis_url, decode_responses=True
        )

    @staticmethod
    def _make_key(key: str) -> str:
        return f"{REDIS_PREFIX}{key}"

    def get(self, key: str) -> Optional[str]:
        try:
            return self._client.get(self._make_key(key))
        except redis.RedisError as exc:
            raise StorageError(f"Redis get failed: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            self._client.set(self._make_key(key), value)
        except redis.RedisError as exc:
            raise StorageError(f"Redis set failed: {exc}") from exc

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
