"""Storage abstraction (S3-compatible object storage or local filesystem)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, Sequence


@dataclass(frozen=True)
class ObjectEntry:
    key: str
    last_modified: datetime


@dataclass(frozen=True)
class FileStat:
    path: str
    modified: float  # seconds since the epoch


class ObjectListingClient(Protocol):
    def list_entries(self, bucket: str, prefix: str | None = None) -> Sequence[ObjectEntry]:
        ...


class Filesystem(Protocol):
    def list_dir(self, path: str) -> Sequence[str]:  # child names
        ...

    def stat(self, path: str) -> FileStat:
        ...


__all__ = ["ObjectEntry", "FileStat", "ObjectListingClient", "Filesystem"]
