"""Resolve the most recent savepoint under an object storage prefix or a local directory."""

from __future__ import annotations

import math
from typing import Callable, Optional

from savepoints.exceptions import EmptyDirectoryError, ListingError
from savepoints.location import Backend, Location, classify_location, parse_location
from savepoints.logging_config import get_logger
from savepoints.settings import Settings
from savepoints.storage import Filesystem, ObjectEntry, ObjectListingClient
from savepoints.storage.local import LocalFilesystem
from savepoints.storage.s3 import S3ObjectStore

logger = get_logger(__name__)

# Object written last by a completed savepoint.
METADATA_SUFFIX = "_metadata"

ClientFactory = Callable[[], ObjectListingClient]


class ObjectStorageResolver:
    """Picks the newest ``*_metadata`` object under a bucket prefix."""

    def __init__(self, client: ObjectListingClient) -> None:
        self.client = client

    def latest(self, location: Location) -> str:
        """Return the location of the newest metadata object.

        An empty string is returned when the listing has no metadata objects.

        Raises:
            ListingError: If the bucket could not be listed.
        """
        entries = self.client.list_entries(location.bucket, location.prefix)
        logger.debug("Listed {} objects under {}", len(entries), location)

        newest: ObjectEntry | None = None
        for entry in entries:
            if not entry.key.endswith(METADATA_SUFFIX):
                continue
            if newest is None or entry.last_modified > newest.last_modified:
                newest = entry

        if newest is None:
            return ""
        return str(location.with_key(newest.key))


class LocalFilesystemResolver:
    """Picks the most recently modified entry of a local directory."""

    def __init__(self, filesystem: Filesystem | None = None) -> None:
        self.filesystem = filesystem or LocalFilesystem()

    def latest(self, directory: str) -> str:
        directory = _strip_trailing_separator(directory)

        names = self.filesystem.list_dir(directory)
        if not names:
            raise EmptyDirectoryError(
                f"No savepoints present in directory: {directory}",
                {"path": directory},
            )

        newest_path = ""
        newest_time: int | None = None
        for name in names:
            path = f"{directory.rstrip('/')}/{name}"
            modified = math.floor(self.filesystem.stat(path).modified)
            if newest_time is None or modified > newest_time:
                newest_time = modified
                newest_path = path

        logger.debug("Newest of {} entries in {} is {}", len(names), directory, newest_path)
        return newest_path


class SavepointLocator:
    """Routes a location string to exactly one resolver.

    The object storage client is only created when an object storage
    location is resolved, so local lookups never touch AWS configuration.
    """

    def __init__(
        self,
        filesystem: Filesystem | None = None,
        client_factory: Optional[ClientFactory] = None,
    ) -> None:
        self.local = LocalFilesystemResolver(filesystem)
        self.client_factory = client_factory or _default_client_factory(None)

    def locate(self, raw: str) -> str:
        if classify_location(raw) is Backend.OBJECT_STORAGE:
            resolver = ObjectStorageResolver(self.client_factory())
            return resolver.latest(parse_location(raw))
        return self.local.latest(raw)


def resolve_latest_savepoint(
    raw: str,
    settings: Settings | None = None,
    locator: SavepointLocator | None = None,
) -> str:
    """Resolve the newest savepoint under ``raw`` and log listing failures by cause."""
    locator = locator or SavepointLocator(client_factory=_default_client_factory(settings))
    try:
        return locator.locate(raw)
    except ListingError as exc:
        if exc.bucket_missing:
            logger.error("s3 no such bucket: {}", exc.message)
        else:
            logger.error("s3 ListObjectsV2 request failed: {}", exc.message)
        raise


def _strip_trailing_separator(directory: str) -> str:
    stripped = directory.rstrip("/")
    return stripped or directory[:1]


def _default_client_factory(settings: Settings | None) -> ClientFactory:
    def factory() -> ObjectListingClient:
        return S3ObjectStore.from_settings(settings.storage if settings else None)

    return factory


__all__ = [
    "METADATA_SUFFIX",
    "ObjectStorageResolver",
    "LocalFilesystemResolver",
    "SavepointLocator",
    "resolve_latest_savepoint",
]
