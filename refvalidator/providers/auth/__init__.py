"""Authentication providers."""

from .interface import AuthProviderInterface
from .mock_impl import MockAuthProvider

__all__ = ["AuthProviderInterface", "MockAuthProvider"]
