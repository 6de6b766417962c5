"""Object storage interface.

This module defines the contract the upload gateway needs from the object
store, independent of the managed service behind it.
"""

from abc import ABC, abstractmethod


class ObjectStorage(ABC):
    """Abstract object store addressed by storage keys (``{owner}/{uuid}.{ext}``)."""

    @abstractmethod
    async def upload(
        self, path: str, content: bytes, content_type: str, upsert: bool = False
    ) -> str:
        """Write ``content`` under ``path``.

        With ``upsert=False`` an existing object is never overwritten; the
        write fails instead.

        Returns:
            str: The key the object was stored under.

        Raises:
            StorageWriteError: If the object store rejects the write.
        """
        pass

    @abstractmethod
    async def create_signed_url(self, path: str, expires_in: int) -> str:
        """Create a time-limited download URL for ``path``.

        Raises:
            StorageWriteError: If the object store cannot sign the URL.
        """
        pass
