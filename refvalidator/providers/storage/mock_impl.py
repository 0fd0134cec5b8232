"""
Mock Storage Provider implementation.

Holds uploaded bytes in memory and hands out mock:// URLs.
"""
from __future__ import annotations

from typing import Dict, Optional

from ...config import get_logger
from ...exceptions import NotFoundError
from .interface import StorageProviderInterface

logger = get_logger("storage.mock")

MOCK_URL_PREFIX = "mock://storage/"


class MockStorageProvider(StorageProviderInterface):

    def __init__(self):
        self._files: Dict[str, bytes] = {}

    @staticmethod
    def _normalize(path: str) -> str:
        return path.strip().lstrip("/")

    async def upload_file(self, content: bytes, path: str) -> str:
        key = self._normalize(path)
        self._files[key] = bytes(content)
        logger.debug("Stored %d bytes at %s", len(content), key)
        return MOCK_URL_PREFIX + key

    async def get_file_url(self, path: str) -> str:
        key = self._normalize(path)
        if key not in self._files:
            raise NotFoundError("File", key)
        return MOCK_URL_PREFIX + key

    async def delete_file(self, path: str) -> None:
        key = self._normalize(path)
        if self._files.pop(key, None) is None:
            raise NotFoundError("File", key)

    async def file_exists(self, path: str) -> bool:
        return self._normalize(path) in self._files

    def read_file(self, path: str) -> Optional[bytes]:
        """Mock-only accessor for stored content."""
        return self._files.get(self._normalize(path))

    def get_provider_name(self) -> str:
        return "mock"

    def is_available(self) -> bool:
        return True
