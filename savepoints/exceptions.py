"""Custom exception hierarchy for savepoint resolution."""

from __future__ import annotations

from enum import Enum


class ListingFailure(str, Enum):
    """Classified cause of an object storage listing failure."""

    BUCKET_NOT_FOUND = "bucket_not_found"
    REQUEST_FAILED = "request_failed"


class SavepointError(Exception):
    """Base exception for all savepoint lookup errors."""

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(SavepointError):
    """Raised when storage credentials or configuration cannot be loaded."""
    pass


class StorageError(SavepointError):
    """Base class for storage backend errors."""
    pass


class ListingError(StorageError):
    """Raised when listing objects in a bucket fails."""

    def __init__(
        self,
        message: str,
        reason: ListingFailure = ListingFailure.REQUEST_FAILED,
        details: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message, {**(details or {}), "reason": reason.value})
        self.reason = reason

    @property
    def bucket_missing(self) -> bool:
        return self.reason is ListingFailure.BUCKET_NOT_FOUND


class LocalStorageError(StorageError):
    """Base class for local filesystem errors."""
    pass


class DirectoryListingError(LocalStorageError):
    """Raised when a local directory cannot be listed."""
    pass


class EmptyDirectoryError(LocalStorageError):
    """Raised when a savepoint directory has no entries."""
    pass


class StatError(LocalStorageError):
    """Raised when metadata of a local entry cannot be read."""
    pass


__all__ = [
    "ListingFailure",
    "SavepointError",
    "ConfigurationError",
    "StorageError",
    "ListingError",
    "LocalStorageError",
    "DirectoryListingError",
    "EmptyDirectoryError",
    "StatError",
]
