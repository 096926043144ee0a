"""Error taxonomy for content loading.

``CacheMiss`` and its subclasses never leave the repository: they only
steer a load from the disk snapshot to the network.  Everything else
propagates to the caller and, depending on ``retry_failed_loads``, stays
memoized as the outcome for that key.
"""

from typing import Any


class ContentError(Exception):
    """Base class for content loading errors."""


class ConfigurationError(ContentError):
    """A required setting is missing for the requested operation."""


class NetworkError(ContentError):
    """The upstream request failed or returned a non-2xx response."""

    def __init__(
        self, message: str, *, url: str = "", status_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ContentValidationError(ContentError):
    """An upstream payload does not match the expected schema."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class CacheMiss(ContentError):
    """The on-disk snapshot cannot satisfy a load."""

    def __init__(self, path: str, reason: str = "") -> None:
        super().__init__(f"{path}: {reason}" if reason else path)
        self.path = path
        self.reason = reason


class CacheFileMissing(CacheMiss):
    """Snapshot file is absent or cannot be read."""


class CacheFileMalformed(CacheMiss):
    """Snapshot file exists but is not valid JSON or fails validation."""
