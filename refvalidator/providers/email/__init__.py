"""Email providers."""

from .interface import EmailProviderInterface
from .mock_impl import MockEmailProvider

__all__ = ["EmailProviderInterface", "MockEmailProvider"]
