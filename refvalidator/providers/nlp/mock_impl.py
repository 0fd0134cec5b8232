"""
Mock NLP Provider implementation.

Deterministic, lexicon-based stand-in for a language model. Scores are
read off the referees' yes/no answers; free text only feeds sentiment,
entity extraction and red-flag detection.
"""
from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional, Tuple

from ...config import get_logger
from ...models import ReferenceResponse, ScoreBreakdown, ScoreDetail
from .interface import NLPProviderInterface

logger = get_logger("nlp.mock")

POSITIVE_WORDS = frozenset({
    "excellent", "great", "good", "outstanding", "reliable", "dependable",
    "strong", "talented", "skilled", "honest", "trustworthy", "helpful",
    "leader", "recommend", "proactive", "collaborative", "exceptional",
})
NEGATIVE_WORDS = frozenset({
    "poor", "bad", "unreliable", "late", "lazy", "dishonest", "difficult",
    "rude", "weak", "careless", "problem", "problems", "issue", "issues",
    "terminated", "fired", "misconduct",
})
RED_FLAG_PHRASES: Tuple[str, ...] = (
    "would not rehire",
    "not eligible for rehire",
    "terminated",
    "fired",
    "dismissed",
    "misconduct",
    "dishonest",
    "theft",
    "harassment",
    "lawsuit",
    "disciplinary",
    "unreliable",
    "did not return",
    "falsified",
)

_WORD = re.compile(r"[a-z']+")
_EMAIL = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
_URL = re.compile(r"https?://[^\s,;]+")
_YEAR = re.compile(r"\b(?:19|20)\d{2}\b")
_ORGANIZATION = re.compile(
    r"\b(?:[A-Z][\w&]*\s+){0,3}[A-Z][\w&]*\s+(?:Inc|Corp|Corporation|Ltd|LLC|GmbH|Group|Labs)\b\.?"
)


def _ratio(answers: Iterable[Optional[bool]]) -> Tuple[float, int, int]:
    """Percentage of True among given answers, with counts."""
    given = [a for a in answers if a is not None]
    favorable = sum(1 for a in given if a)
    score = round(100.0 * favorable / len(given), 1) if given else 0.0
    return score, favorable, len(given)


class MockNLPProvider(NLPProviderInterface):

    async def analyze_sentiment(self, text: str) -> float:
        words = _WORD.findall(text.lower())
        positive = sum(1 for w in words if w in POSITIVE_WORDS)
        negative = sum(1 for w in words if w in NEGATIVE_WORDS)
        matched = positive + negative
        if not matched:
            return 0.0
        return (positive - negative) / matched

    async def summarize_references(self, responses: List[ReferenceResponse]) -> str:
        submitted = [r for r in responses if r.is_submitted]
        if not submitted:
            return "No completed references yet."

        _, yes, asked = _ratio(r.would_rehire for r in submitted)
        parts = [f"{len(submitted)} completed reference(s)."]
        if asked:
            parts.append(f"{yes} of {asked} referee(s) would rehire the candidate.")

        comments = " ".join(r.additional_comments or "" for r in submitted).strip()
        if comments:
            sentiment = await self.analyze_sentiment(comments)
            tone = "positive" if sentiment > 0.2 else "negative" if sentiment < -0.2 else "neutral"
            parts.append(f"Overall tone of comments is {tone}.")

        concerns = [r.concerns.strip() for r in submitted if r.concerns and r.concerns.strip()]
        if concerns:
            parts.append(f"Concerns raised: {'; '.join(concerns)}.")
        return " ".join(parts)

    async def generate_scores(self, responses: List[ReferenceResponse]) -> ScoreBreakdown:
        submitted = [r for r in responses if r.is_submitted]

        confirmed = [
            bool(r.role_confirmation and r.duration_confirmation) for r in submitted
        ]
        credibility, cred_yes, cred_n = _ratio(confirmed)

        integrity_answers: List[Optional[bool]] = []
        for r in submitted:
            integrity_answers.extend([r.left_on_good_terms, r.returned_property])
        integrity, int_yes, int_n = _ratio(integrity_answers)

        achievements, ach_yes, ach_n = _ratio(r.achievements_aligned for r in submitted)
        rehire, reh_yes, reh_n = _ratio(r.would_rehire for r in submitted)

        logger.debug(
            "Mock scores | responses=%d | credibility=%.1f | integrity=%.1f",
            len(submitted), credibility, integrity,
        )
        return ScoreBreakdown(
            credibility=ScoreDetail(
                score=credibility,
                factors=[f"{cred_yes}/{cred_n} referees confirmed role and duration"],
            ),
            integrity=ScoreDetail(
                score=integrity,
                factors=[f"{int_yes}/{int_n} favorable answers on exit terms and property"],
            ),
            achievements=ScoreDetail(
                score=achievements,
                factors=[f"{ach_yes}/{ach_n} referees agreed with claimed achievements"],
            ),
            rehire=ScoreDetail(
                score=rehire,
                factors=[f"{reh_yes}/{reh_n} referees would rehire"],
            ),
        )

    async def extract_entities(self, text: str) -> Dict[str, List[str]]:
        def unique(items: Iterable[str]) -> List[str]:
            return list(dict.fromkeys(item.strip().rstrip(".") for item in items))

        return {
            "emails": unique(_EMAIL.findall(text)),
            "urls": unique(_URL.findall(text)),
            "years": unique(_YEAR.findall(text)),
            "organizations": unique(_ORGANIZATION.findall(text)),
        }

    async def detect_red_flags(self, text: str) -> List[str]:
        lowered = text.lower()
        return [phrase for phrase in RED_FLAG_PHRASES if phrase in lowered]

    def get_provider_name(self) -> str:
        return "mock"

    def is_available(self) -> bool:
        return True
