"""
Session Storage Port - Abstract interface for client-side key/value storage.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageError(Exception):
    """Local storage could not be read or written."""


class SessionStoragePort(ABC):
    """Abstract interface for persisted key/value pairs."""

    @abstractmethod
    async def initialize(self) -> None:
        """Open the storage."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the storage."""
        pass

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """Get a value, None if missing."""
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Set a value."""
        pass

    @abstractmethod
    async def set_items(self, items: dict[str, str]) -> None:
        """Set several values in one transaction."""
        pass

    @abstractmethod
    async def remove_items(self, *keys: str) -> None:
        """Delete values; missing keys are ignored."""
        pass
