"""
Referee-facing endpoints addressed by the single-use reference token.

Usage:
    GET  /api/references/{token}   - What the referee is asked about
    POST /api/references/{token}   - Submit the questionnaire
"""
from fastapi import APIRouter, Request

from ..config import get_logger, settings
from ..dependencies import DatabaseDep, limiter
from ..models import ApiResponse, ReferenceAnswers
from ..services import references

logger = get_logger("routes.references")

router = APIRouter(prefix="/api/references", tags=["References"])


@router.get("/{token}", summary="Reference request details")
async def get_reference(token: str, database: DatabaseDep):
    response = await references.get_reference_by_token(database, token)
    referee = await database.get_referee(response.referee_id)
    candidate = await database.get_candidate(referee.candidate_id) if referee else None
    employment = await database.get_employment(referee.employment_id) if referee else None

    return ApiResponse(
        data={
            "candidate_name": candidate.full_name if candidate else None,
            "referee_name": referee.name if referee else None,
            "company": employment.company_name if employment else None,
            "job_title": employment.job_title if employment else None,
            "achievements": employment.achievements if employment else [],
            "expires_at": response.expires_at.isoformat(),
            "submitted": response.is_submitted,
            "expired": response.is_expired(),
        }
    )


@router.post("/{token}", summary="Submit reference answers")
@limiter.limit(settings.RATE_LIMIT)
async def submit_reference(
    request: Request,
    token: str,
    answers: ReferenceAnswers,
    database: DatabaseDep,
):
    submitted = await references.submit_reference(database, token, answers)
    return ApiResponse(
        data={"id": submitted.id, "submitted_at": submitted.submitted_at.isoformat()},
        message="Thank you, your reference has been recorded",
    )
