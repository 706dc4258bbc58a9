"""Application configuration loaded from environment variables."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from pinboard.auth import FixedCredentialVerifier, LoginGate
from pinboard.kvstore import (
    JsonFileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    RedisKeyValueStore,
)
from pinboard.persistence import NotePersistence
from pinboard.store import NotesStore

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="PINBOARD_"
    )

    # Storage
    storage_backend: Literal["file", "redis", "memory"] = "file"
    storage_path: Path = Path.home() / ".pinboard" / "notes.json"
    storage_key: str = "notes"

    # Redis
    redis_url: str = "redis://localhost:6379"

    # Login gate
    login_username: str = "User"
    login_password: str = "user"

    log_level: str = "INFO"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)


def build_kv_store(settings: Settings) -> KeyValueStore:
    """Return the key-value backend selected by ``storage_backend``."""
    if settings.storage_backend == "redis":
        return RedisKeyValueStore(settings.redis_url)
    if settings.storage_backend == "memory":
        return MemoryKeyValueStore()
    return JsonFileKeyValueStore(settings.storage_path)


def build_store(
    settings: Settings,
    on_failure: Optional[Callable[[str, Exception], None]] = None,
) -> NotesStore:
    persistence = NotePersistence(
        build_kv_store(settings), key=settings.storage_key, on_failure=on_failure
    )
    return NotesStore(persistence)


def build_login_gate(settings: Settings) -> LoginGate:
    return LoginGate(
        FixedCredentialVerifier(settings.login_username, settings.login_password)
    )
