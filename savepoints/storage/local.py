from __future__ import annotations

import os

from savepoints.exceptions import DirectoryListingError, StatError
from savepoints.storage import FileStat


class LocalFilesystem:
    """Filesystem backed by the operating system."""

    def list_dir(self, path: str) -> list[str]:
        try:
            return sorted(os.listdir(path))
        except OSError as exc:
            raise DirectoryListingError(
                f"unable to list directory {path}: {exc.strerror or exc}",
                {"path": path},
            ) from exc

    def stat(self, path: str) -> FileStat:
        try:
            result = os.stat(path)
        except OSError as exc:
            raise StatError(
                f"unable to stat {path}: {exc.strerror or exc}",
                {"path": path},
            ) from exc
        return FileStat(path=path, modified=result.st_mtime)


__all__ = ["LocalFilesystem"]
