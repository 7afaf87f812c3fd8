"""Location parsing and backend classification."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote, unquote, urlsplit

# Scheme aliases under which the object store is addressed.
OBJECT_STORAGE_SCHEMES = frozenset({"s3", "s3a", "s3p"})

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
# Sub-delimiters left unescaped in a path, as URL builders do.
_PATH_SAFE = "/!$&'()*+,;=:@~"


class Backend(str, Enum):
    OBJECT_STORAGE = "object_storage"
    LOCAL = "local"


@dataclass(frozen=True)
class Location:
    """A parsed ``scheme://host/path`` address."""

    scheme: str
    host: str
    path: str

    @property
    def bucket(self) -> str:
        return self.host

    @property
    def prefix(self) -> str | None:
        """Key prefix with leading separators trimmed, ``None`` without a path."""
        if not self.path:
            return None
        return self.path.lstrip("/")

    def with_key(self, key: str) -> "Location":
        return Location(scheme=self.scheme, host=self.host, path="/" + key.lstrip("/"))

    def __str__(self) -> str:
        text = f"{self.scheme}:" if self.scheme else ""
        if self.host or self.scheme:
            text += f"//{self.host}"
        return text + quote(self.path, safe=_PATH_SAFE)


def parse_location(raw: str) -> Location:
    """Parse ``raw`` into a :class:`Location`.

    Raises:
        ValueError: If ``raw`` is not a well-formed URL.
    """
    if not isinstance(raw, str):
        raise ValueError(f"Location must be a string, got {type(raw).__name__}")
    parts = urlsplit(raw)
    # Accessing ``port`` validates the network location.
    parts.port
    if _BAD_ESCAPE.search(parts.path):
        raise ValueError(f"invalid URL escape in {raw!r}")
    host = parts.netloc.rpartition("@")[2]
    return Location(scheme=parts.scheme, host=host, path=unquote(parts.path))


def classify_location(raw: str) -> Backend:
    """Decide which backend resolves ``raw``; unparseable input is a local path."""
    try:
        location = parse_location(raw)
    except ValueError:
        return Backend.LOCAL
    if location.scheme in OBJECT_STORAGE_SCHEMES:
        return Backend.OBJECT_STORAGE
    return Backend.LOCAL


__all__ = [
    "OBJECT_STORAGE_SCHEMES",
    "Backend",
    "Location",
    "parse_location",
    "classify_location",
]
