"""Cache storage protocol.

Defines the interface for a key -> blob store. One object per key; storing
again replaces the previous object wholesale.

Implementations can include:
- Local filesystem directory (default)
- In-memory dictionaries (tests)
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for blob storage backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.
    """

    def ensure_ready(self) -> None:
        """Prepare the backing storage. Idempotent.

        Raises:
            StorageError: If the storage cannot be created or is not writable
        """
        ...

    async def get(self, key: str) -> bytes:
        """Return the full blob stored for a key.

        Raises:
            EntryNotFoundError: If nothing is stored for the key
            StorageError: On any other read failure
        """
        ...

    async def put(self, key: str, blob: bytes) -> None:
        """Create or overwrite the blob for a key.

        A failed write leaves no partial object visible to ``get``.

        Raises:
            StorageError: If the write cannot be completed
        """
        ...

    async def delete(self, key: str) -> None:
        """Remove the blob for a key.

        Raises:
            EntryNotFoundError: If nothing is stored for the key
            StorageError: On any other failure
        """
        ...
