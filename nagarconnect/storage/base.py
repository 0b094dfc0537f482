"""Base storage provider interface."""

from abc import ABC, abstractmethod


class StorageProvider(ABC):
    """Abstract storage provider."""

    @abstractmethod
    def save(self, key: str, data: bytes) -> str:
        """Store data under key. Returns key."""
        raise NotImplementedError

    @abstractmethod
    def url_for(self, key: str) -> str:
        """Return public URL for key."""
        raise NotImplementedError
