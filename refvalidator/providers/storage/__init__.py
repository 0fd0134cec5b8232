"""File storage providers."""

from .interface import StorageProviderInterface
from .mock_impl import MockStorageProvider

__all__ = ["StorageProviderInterface", "MockStorageProvider"]
