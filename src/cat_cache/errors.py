"""Error taxonomy for cache operations.

Repositories raise these, services pass them through (or recover from them),
and handlers translate them into HTTP status codes.
"""


class CacheError(Exception):
    """Base class for all cache errors."""


class EntryNotFoundError(CacheError):
    """No stored object exists for the key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"No cached entry for key {key!r}")


class StorageError(CacheError):
    """Storage read/write/delete failed for a reason other than absence."""


class UpstreamError(CacheError):
    """The origin could not deliver the resource.

    Covers network failures, timeouts and non-success statuses alike.
    """

    def __init__(self, key: str, reason: str, status_code: int | None = None) -> None:
        self.key = key
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Origin fetch failed for key {key!r}: {reason}")


class InvalidKeyError(CacheError):
    """The key is empty or cannot be mapped to a storage location."""
