"""Filesystem implementation of CacheStore.

Each key is stored as one file, ``<cache_dir>/<encoded key>.jpg``. There is no index
and no metadata sidecar: presence of the file is the cache entry.
"""

import asyncio
import logging
import os
import tempfile
from pathlib import Path
from urllib.parse import quote

from cat_cache.errors import EntryNotFoundError, InvalidKeyError, StorageError

logger = logging.getLogger(__name__)


class FileCacheRepository:
    """Directory-backed blob store.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Every key is stored flat in the cache directory under its fully
    percent-encoded form, so ``nested/code`` becomes ``nested%2Fcode.jpg``.
    The encoding is injective and never yields a path separator, so no key
    can name a directory or a file outside the cache directory.

    Blocking filesystem calls run in a worker thread so concurrent requests
    are not held up by disk I/O.
    """

    EXTENSION = ".jpg"

    def __init__(self, cache_dir: Path | str) -> None:
        """Initialize the repository.

        Args:
            cache_dir: Directory holding the cached files. Not created until
                ``ensure_ready`` is called.
        """
        self._root = Path(cache_dir).resolve()

    @classmethod
    def create(cls, cache_dir: Path | str) -> "FileCacheRepository":
        """Factory method that returns a repository with its directory ready.

        Raises:
            StorageError: If the directory cannot be created or written
        """
        repository = cls(cache_dir)
        repository.ensure_ready()
        return repository

    @property
    def root(self) -> Path:
        """Get the cache directory."""
        return self._root

    def ensure_ready(self) -> None:
        """Create the cache directory if absent and check it is writable."""
        if not self._root.is_dir():
            try:
                self._root.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StorageError(f"Cannot create cache dir {self._root}: {e}") from e
            logger.info("Created cache dir: %s", self._root)

        if not os.access(self._root, os.W_OK | os.X_OK):
            raise StorageError(f"Cache dir {self._root} is not writable")

    def path_for(self, key: str) -> Path:
        """Map a key to its storage path.

        Raises:
            InvalidKeyError: If the key is empty
        """
        if not key:
            raise InvalidKeyError("Empty key")
        return self._root / f"{quote(key, safe='')}{self.EXTENSION}"

    async def get(self, key: str) -> bytes:
        """Read the blob stored for a key."""
        path = self.path_for(key)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError as e:
            raise EntryNotFoundError(key) from e
        except OSError as e:
            if not path.is_file():
                raise EntryNotFoundError(key) from e
            raise StorageError(f"Cannot read {path}: {e}") from e

    async def put(self, key: str, blob: bytes) -> None:
        """Write the blob for a key, replacing any previous one atomically."""
        path = self.path_for(key)
        try:
            await asyncio.to_thread(self._write_atomic, path, blob)
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}") from e

    async def delete(self, key: str) -> None:
        """Remove the blob for a key."""
        path = self.path_for(key)
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError as e:
            raise EntryNotFoundError(key) from e
        except OSError as e:
            # Anything other than a regular file there is not a cache entry
            if not path.is_file():
                raise EntryNotFoundError(key) from e
            raise StorageError(f"Cannot delete {path}: {e}") from e

    @staticmethod
    def _write_atomic(path: Path, data: bytes) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            # Readers only ever see the final name, never the temp file
            Path(tmp_name).unlink(missing_ok=True)
            raise
