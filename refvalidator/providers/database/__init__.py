"""Persistence providers."""

from .interface import DatabaseProviderInterface
from .mock_impl import MockDatabaseProvider

__all__ = ["DatabaseProviderInterface", "MockDatabaseProvider"]
