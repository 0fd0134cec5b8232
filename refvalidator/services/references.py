"""
Reference-check workflow.

Enforces the relational rules the persistence providers trust their
callers to keep:
- a referee's employment belongs to the referee's candidate
- reference tokens are unique
- a response expires strictly after it is created
- a response can be submitted once, before it expires
"""
from __future__ import annotations

import secrets
from datetime import timedelta
from typing import List, Optional, Tuple

from ..config import Settings, get_logger, get_settings
from ..exceptions import (
    NotFoundError,
    ReferenceAlreadySubmittedError,
    ReferenceExpiredError,
    ValidationError,
)
from ..models import (
    CandidateScores,
    CandidateScoresCreate,
    EmailData,
    Referee,
    RefereeCreate,
    RefereeInvite,
    ReferenceAnswers,
    ReferenceResponse,
    ReferenceResponseCreate,
    ReferenceResponseUpdate,
    utc_now,
)
from ..providers.database.interface import DatabaseProviderInterface
from ..providers.email.interface import EmailProviderInterface
from ..providers.nlp.interface import NLPProviderInterface

logger = get_logger("services.references")

TOKEN_BYTES = 32
MAX_TOKEN_ATTEMPTS = 5


def email_domain(address: str) -> str:
    """Domain part of an email address, lowercased."""
    return address.rpartition("@")[2].strip().lower()


async def generate_reference_token(database: DatabaseProviderInterface) -> str:
    """Generate a URL-safe token no existing response uses."""
    for _ in range(MAX_TOKEN_ATTEMPTS):
        token = secrets.token_urlsafe(TOKEN_BYTES)
        if await database.get_reference_response_by_token(token) is None:
            return token
    raise RuntimeError("Could not generate a unique reference token")


async def invite_referee(
    database: DatabaseProviderInterface,
    email: EmailProviderInterface,
    candidate_id: str,
    invite: RefereeInvite,
    settings: Optional[Settings] = None,
) -> Tuple[Referee, ReferenceResponse]:
    """
    Attach a referee to a candidate's employment and send the request.

    Args:
        database: Persistence provider
        email: Email provider used for the reference request
        candidate_id: Candidate the reference is for
        invite: Referee details
        settings: Settings for link URL and token lifetime

    Returns:
        The created referee and its pending response

    Raises:
        NotFoundError: If the candidate or employment does not exist
        ValidationError: If the employment belongs to another candidate
    """
    settings = settings or get_settings()

    candidate = await database.get_candidate(candidate_id)
    if candidate is None:
        raise NotFoundError("Candidate", candidate_id)

    employment = await database.get_employment(invite.employment_id)
    if employment is None:
        raise NotFoundError("Employment history", invite.employment_id)
    if employment.candidate_id != candidate_id:
        raise ValidationError(
            "Employment does not belong to this candidate",
            details=f"employment {employment.id} belongs to candidate {employment.candidate_id}",
        )

    referee = await database.create_referee(
        RefereeCreate(
            candidate_id=candidate_id,
            employment_id=employment.id,
            name=invite.name,
            email=invite.email,
            company=invite.company,
            role=invite.role,
            relationship=invite.relationship,
            email_domain=email_domain(invite.email),
            is_verified=False,
        )
    )

    now = utc_now()
    response = await database.create_reference_response(
        ReferenceResponseCreate(
            referee_id=referee.id,
            token=await generate_reference_token(database),
            expires_at=now + timedelta(days=settings.REFERENCE_TOKEN_TTL_DAYS),
        )
    )

    try:
        message_id = await email.send_template(
            EmailData(
                to=referee.email,
                template="reference_request",
                data={
                    "candidate_name": candidate.full_name,
                    "referee_name": referee.name,
                    "company": employment.company_name,
                    "job_title": employment.job_title,
                    "link": f"{settings.APP_BASE_URL.rstrip('/')}/reference/{response.token}",
                    "expires_at": response.expires_at.isoformat(),
                },
            )
        )
    except Exception:
        logger.error(
            "Reference request email failed; discarding invitation | candidate=%s | referee=%s",
            candidate_id, referee.id,
        )
        await database.delete_reference_response(response.id)
        await database.delete_referee(referee.id)
        raise
    logger.info(
        "Referee invited | candidate=%s | referee=%s | message=%s",
        candidate_id, referee.id, message_id,
    )
    return referee, response


async def get_reference_by_token(
    database: DatabaseProviderInterface, token: str
) -> ReferenceResponse:
    """
    Raises:
        NotFoundError: If no response uses the token
    """
    response = await database.get_reference_response_by_token(token)
    if response is None:
        raise NotFoundError("Reference", token, message="No reference request matches this link")
    return response


async def submit_reference(
    database: DatabaseProviderInterface,
    token: str,
    answers: ReferenceAnswers,
) -> ReferenceResponse:
    """
    Record a referee's answers. Tokens are single use.

    Raises:
        NotFoundError: If no response uses the token
        ReferenceAlreadySubmittedError: If the response was already submitted
        ReferenceExpiredError: If the token has expired
    """
    response = await get_reference_by_token(database, token)
    if response.is_submitted:
        raise ReferenceAlreadySubmittedError()

    now = utc_now()
    if response.is_expired(now):
        raise ReferenceExpiredError()

    updates = ReferenceResponseUpdate(
        **answers.model_dump(exclude_unset=True),
        submitted_at=now,
    )
    submitted = await database.update_reference_response(response.id, updates)
    logger.info("Reference submitted | response=%s | referee=%s", submitted.id, submitted.referee_id)
    return submitted


async def collect_submitted_responses(
    database: DatabaseProviderInterface, candidate_id: str
) -> List[ReferenceResponse]:
    """Submitted responses across all of a candidate's referees."""
    responses: List[ReferenceResponse] = []
    for referee in await database.get_referees(candidate_id):
        responses.extend(
            r for r in await database.get_reference_responses(referee.id) if r.is_submitted
        )
    return responses


async def analyze_candidate(
    database: DatabaseProviderInterface,
    nlp: NLPProviderInterface,
    candidate_id: str,
) -> CandidateScores:
    """
    Score a candidate from their submitted references and store the result.

    Raises:
        NotFoundError: If the candidate does not exist
    """
    if await database.get_candidate(candidate_id) is None:
        raise NotFoundError("Candidate", candidate_id)

    responses = await collect_submitted_responses(database, candidate_id)
    breakdown = await nlp.generate_scores(responses)
    summary = await nlp.summarize_references(responses)

    scores = await database.create_ai_scores(
        CandidateScoresCreate(
            candidate_id=candidate_id,
            credibility_score=breakdown.credibility.score,
            integrity_score=breakdown.integrity.score,
            achievement_score=breakdown.achievements.score,
            rehire_score=breakdown.rehire.score,
            summary=summary,
        )
    )
    logger.info(
        "Candidate analyzed | candidate=%s | responses=%d | provider=%s",
        candidate_id, len(responses), nlp.get_provider_name(),
    )
    return scores
