"""
Candidate endpoints: overview, referee invitations and scoring.
"""
from fastapi import APIRouter, Request, status

from ..config import get_logger, settings
from ..dependencies import AppStateDep, DatabaseDep, EmailDep, NLPDep, limiter
from ..models import ApiResponse, RefereeInvite
from ..services import references

logger = get_logger("routes.candidates")

router = APIRouter(prefix="/api/candidates", tags=["Candidates"])


@router.get("/{candidate_id}/overview", summary="Candidate with all dependent records")
async def get_overview(candidate_id: str, database: DatabaseDep):
    overview = await database.get_candidate_overview(candidate_id)
    return ApiResponse(data=overview.model_dump(mode="json"))


@router.post(
    "/{candidate_id}/referees",
    status_code=status.HTTP_201_CREATED,
    summary="Invite a referee for one of the candidate's roles",
)
@limiter.limit(settings.RATE_LIMIT)
async def invite_referee(
    request: Request,
    candidate_id: str,
    invite: RefereeInvite,
    state: AppStateDep,
    database: DatabaseDep,
    email: EmailDep,
):
    """
    Create the referee, a pending reference request and send the email.

    The reference token is only delivered by email.
    """
    referee, response = await references.invite_referee(
        database, email, candidate_id, invite, settings=state.settings
    )
    return ApiResponse(
        data={
            "referee": referee.model_dump(mode="json"),
            "reference": {
                "id": response.id,
                "expires_at": response.expires_at.isoformat(),
            },
        },
        message="Reference request sent",
    )


@router.post("/{candidate_id}/analysis", summary="Score the candidate from submitted references")
async def analyze(candidate_id: str, database: DatabaseDep, nlp: NLPDep):
    scores = await references.analyze_candidate(database, nlp, candidate_id)
    return ApiResponse(data=scores.model_dump(mode="json"), message="Analysis complete")
