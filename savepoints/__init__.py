"""Locate the most recent savepoint in S3 or on the local filesystem."""

from savepoints.exceptions import SavepointError
from savepoints.resolver import SavepointLocator, resolve_latest_savepoint

__all__ = ["SavepointError", "SavepointLocator", "resolve_latest_savepoint"]
