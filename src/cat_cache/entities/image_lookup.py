"""Image lookup domain entity."""

from dataclasses import dataclass
from enum import Enum


class LookupSource(str, Enum):
    """Where a retrieved blob came from."""

    CACHE = "cache"
    ORIGIN = "origin"


@dataclass(frozen=True)
class ImageLookup:
    """Result of a successful retrieve.

    Attributes:
        key: The cache key that was looked up
        blob: The image bytes
        source: CACHE on a hit, ORIGIN when fetched after a miss
    """

    key: str
    blob: bytes
    source: LookupSource

    @property
    def from_cache(self) -> bool:
        """True if the blob was served from the cache."""
        return self.source is LookupSource.CACHE

    @property
    def needs_populate(self) -> bool:
        """True if the blob should be written back to the cache."""
        return self.source is LookupSource.ORIGIN
