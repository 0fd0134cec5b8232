"""
Review flags and status for a candidate's reference check.

Flags are facts read straight from the records. The only threshold-based
flag (low credibility) is raised when a threshold is configured; no
business threshold is assumed otherwise.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..models import (
    CandidateScores,
    CandidateStatus,
    Referee,
    ReferenceResponse,
    utc_now,
)


def derive_flags(
    referees: Sequence[Referee],
    responses: Sequence[ReferenceResponse],
    scores: Optional[CandidateScores] = None,
    score_threshold: Optional[float] = None,
    now: Optional[datetime] = None,
) -> list[str]:
    """
    Collect review flags for one candidate.

    Args:
        referees: The candidate's referees
        responses: Responses requested from those referees
        scores: Latest score set, if any
        score_threshold: Credibility score below which a flag is raised
        now: Reference time for expiry checks

    Returns:
        Human-readable flags, in a stable order
    """
    now = now or utc_now()
    names = {referee.id: referee.name for referee in referees}
    flags: list[str] = []

    for referee in referees:
        if not referee.is_verified:
            flags.append(f"Referee {referee.name} is not verified")

    for response in responses:
        who = names.get(response.referee_id, f"referee {response.referee_id}")
        if not response.is_submitted:
            if response.is_expired(now):
                flags.append(f"Reference request to {who} expired without a response")
            continue
        if response.would_rehire is False:
            flags.append(f"{who} would not rehire the candidate")
        if response.left_on_good_terms is False:
            flags.append(f"{who} reports the candidate did not leave on good terms")
        if response.returned_property is False:
            flags.append(f"{who} reports company property was not returned")
        if response.achievements_aligned is False:
            flags.append(f"{who} disputes the claimed achievements")
        if response.concerns and response.concerns.strip():
            flags.append(f"{who} raised concerns: {response.concerns.strip()}")

    if (
        scores is not None
        and score_threshold is not None
        and scores.credibility_score < score_threshold
    ):
        flags.append(
            f"Credibility score {scores.credibility_score:g} is below {score_threshold:g}"
        )

    return flags


def derive_status(
    referees: Sequence[Referee],
    responses: Sequence[ReferenceResponse],
) -> CandidateStatus:
    """Summarize how far a candidate's reference check has progressed."""
    if not referees:
        return CandidateStatus.AWAITING_REFEREES

    answered = {r.referee_id for r in responses if r.is_submitted}
    pending = any(not r.is_submitted for r in responses)
    if pending or any(referee.id not in answered for referee in referees):
        return CandidateStatus.REFERENCES_PENDING
    return CandidateStatus.REFERENCES_COMPLETE
