from __future__ import annotations

from datetime import datetime, timezone

import pytest
from loguru import logger

from savepoints.exceptions import DirectoryListingError, ListingError, StatError
from savepoints.settings import get_settings
from savepoints.storage import FileStat, ObjectEntry


def ts(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


class FakeObjectStore:
    """In-memory stand-in for the S3 listing client."""

    def __init__(self, entries=(), error: ListingError | None = None) -> None:
        self.entries = [ObjectEntry(key=key, last_modified=ts(t)) for key, t in entries]
        self.error = error
        self.calls: list[tuple[str, str | None]] = []

    def list_entries(self, bucket, prefix=None):
        self.calls.append((bucket, prefix))
        if self.error is not None:
            raise self.error
        return list(self.entries)


class FakeFilesystem:
    """In-memory directory tree keyed by full path."""

    def __init__(self, dirs=None, mtimes=None, broken=()) -> None:
        self.dirs: dict[str, list[str]] = dirs or {}
        self.mtimes: dict[str, float] = mtimes or {}
        self.broken = set(broken)
        self.stat_calls: list[str] = []

    def list_dir(self, path):
        if path not in self.dirs:
            raise DirectoryListingError(f"open {path}: no such file or directory", {"path": path})
        return list(self.dirs[path])

    def stat(self, path):
        self.stat_calls.append(path)
        if path in self.broken or path not in self.mtimes:
            raise StatError(f"stat {path}: permission denied", {"path": path})
        return FileStat(path=path, modified=self.mtimes[path])


@pytest.fixture(autouse=True)
def _reset_state():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    logger.remove()


@pytest.fixture()
def fake_store():
    return FakeObjectStore


@pytest.fixture()
def fake_fs():
    return FakeFilesystem
