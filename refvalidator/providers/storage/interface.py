"""
Abstract interface for file storage providers.

Stores supporting documents (payslips, contracts) referenced by
employment history entries.
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class StorageProviderInterface(ABC):

    @abstractmethod
    async def upload_file(self, content: bytes, path: str) -> str:
        """Store content at a path and return its URL."""
        pass

    @abstractmethod
    async def get_file_url(self, path: str) -> str:
        """Get the URL of a stored file."""
        pass

    @abstractmethod
    async def delete_file(self, path: str) -> None:
        pass

    @abstractmethod
    async def file_exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        pass

    @abstractmethod
    def is_available(self) -> bool:
        pass
