"""Text-analysis providers."""

from .interface import NLPProviderInterface
from .mock_impl import MockNLPProvider

__all__ = ["NLPProviderInterface", "MockNLPProvider"]
