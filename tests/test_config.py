"""Unit tests for pinboard.config — settings and stack assembly."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from pinboard.config import Settings, build_kv_store, build_login_gate, build_store
from pinboard.kvstore import (
    JsonFileKeyValueStore,
    MemoryKeyValueStore,
    RedisKeyValueStore,
)
from pinboard.models import Note, SortOption


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep a developer's .env and PINBOARD_* variables out of the tests."""
    monkeypatch.chdir(tmp_path)
    for name in [
        "PINBOARD_STORAGE_BACKEND",
        "PINBOARD_STORAGE_PATH",
        "PINBOARD_STORAGE_KEY",
        "PINBOARD_REDIS_URL",
        "PINBOARD_LOGIN_USERNAME",
        "PINBOARD_LOGIN_PASSWORD",
        "PINBOARD_LOG_LEVEL",
    ]:
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.storage_backend == "file"
        assert settings.storage_key == "notes"
        assert settings.storage_path.name == "notes.json"
        assert settings.login_username == "User"
        assert settings.login_password == "user"

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PINBOARD_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("PINBOARD_STORAGE_KEY", "my-notes")
        settings = Settings()
        assert settings.storage_backend == "memory"
        assert settings.storage_key == "my-notes"

    def test_env_file(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("PINBOARD_LOG_LEVEL=DEBUG\n", encoding="utf-8")
        assert Settings().log_level == "DEBUG"

    def test_unknown_backend_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PINBOARD_STORAGE_BACKEND", "sqlite")
        with pytest.raises(ValueError):
            Settings()


class TestBuildKvStore:
    def test_file_backend(self, tmp_path: Path) -> None:
        kv = build_kv_store(Settings(storage_path=tmp_path / "n.json"))
        assert isinstance(kv, JsonFileKeyValueStore)
        assert kv.path == tmp_path / "n.json"

    def test_memory_backend(self) -> None:
        kv = build_kv_store(Settings(storage_backend="memory"))
        assert isinstance(kv, MemoryKeyValueStore)

    def test_redis_backend(self) -> None:
        with patch("pinboard.kvstore.redis.Redis.from_url", return_value=MagicMock()):
            kv = build_kv_store(
                Settings(storage_backend="redis", redis_url="redis://cache:6379")
            )
        assert isinstance(kv, RedisKeyValueStore)


class TestBuildStore:
    def test_store_round_trips_through_file(self, tmp_path: Path) -> None:
        settings = Settings(storage_path=tmp_path / "notes.json")
        store = build_store(settings)
        assert len(store) == 0
        assert store.sort_option is SortOption.BY_UPDATED_AT

        store.add(Note(title="T", content="C"))
        assert len(build_store(settings)) == 1

    def test_failure_callback_wired(self, tmp_path: Path) -> None:
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("", encoding="utf-8")
        callback = MagicMock()
        store = build_store(
            Settings(storage_path=blocker / "notes.json"), on_failure=callback
        )

        assert len(store) == 0
        store.add(Note(title="T", content="C"))
        operations = [call.args[0] for call in callback.call_args_list]
        assert operations == ["load", "save"]
        assert store.last_save is not None and store.last_save.ok is False


class TestBuildLoginGate:
    def test_uses_configured_pair(self) -> None:
        gate = build_login_gate(
            Settings(login_username="alice", login_password="pw")
        )
        assert gate.login("User", "user").ok is False
        assert gate.login("alice", "pw").ok is True
