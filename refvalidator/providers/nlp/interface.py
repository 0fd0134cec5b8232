"""
Abstract interface for text-analysis providers.

Implement this to score references with any model (OpenAI, Anthropic,
a local classifier).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List

from ...models import ReferenceResponse, ScoreBreakdown


class NLPProviderInterface(ABC):
    """
    Abstract interface for NLP providers.

    All implementations must provide:
    - Sentiment scoring
    - Reference summarization and score breakdowns
    - Entity extraction and red-flag detection
    """

    @abstractmethod
    async def analyze_sentiment(self, text: str) -> float:
        """
        Score the sentiment of a text.

        Returns:
            Value between -1.0 (negative) and 1.0 (positive)
        """
        pass

    @abstractmethod
    async def summarize_references(self, responses: List[ReferenceResponse]) -> str:
        """Write a narrative summary over a set of reference responses."""
        pass

    @abstractmethod
    async def generate_scores(self, responses: List[ReferenceResponse]) -> ScoreBreakdown:
        """
        Score credibility, integrity, achievements and rehire likelihood.

        Each dimension carries a 0-100 score and the factors behind it.
        """
        pass

    @abstractmethod
    async def extract_entities(self, text: str) -> Dict[str, List[str]]:
        """Extract named entities grouped by entity type."""
        pass

    @abstractmethod
    async def detect_red_flags(self, text: str) -> List[str]:
        """Return the red-flag phrases found in a text."""
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Get the provider name (e.g., 'mock', 'openai')."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider is available."""
        pass
