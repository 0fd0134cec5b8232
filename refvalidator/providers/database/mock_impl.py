"""
Mock Database Provider implementation.

In-memory store for development and testing. Five keyed collections,
seeded with one illustrative record per entity type. Nothing survives a
process restart and there is no locking: concurrent writers race and the
last write wins.
"""
from __future__ import annotations

import uuid
from datetime import date, timedelta
from typing import Callable, Dict, List, Optional, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ...config import get_logger
from ...exceptions import NotFoundError, ValidationError
from ...models import (
    Candidate,
    CandidateCreate,
    CandidateOverview,
    CandidateScores,
    CandidateScoresCreate,
    CandidateScoresUpdate,
    CandidateUpdate,
    DashboardStats,
    EmploymentHistory,
    EmploymentHistoryCreate,
    EmploymentHistoryUpdate,
    EmploymentStatus,
    Referee,
    RefereeCreate,
    RefereeUpdate,
    ReferenceResponse,
    ReferenceResponseCreate,
    ReferenceResponseUpdate,
    utc_now,
)
from ...services.review import derive_flags, derive_status
from .interface import DatabaseProviderInterface

logger = get_logger("database.mock")

IdFactory = Callable[[], str]
EntityT = TypeVar("EntityT", bound=BaseModel)

SEED_ID = "1"


def uuid_id_factory() -> str:
    """Default identifier scheme: random UUID4 hex."""
    return uuid.uuid4().hex


class MockDatabaseProvider(DatabaseProviderInterface):
    """
    In-memory database provider.

    Identifier generation is pluggable through `id_factory`; seeded
    records always use id "1".
    """

    def __init__(
        self,
        id_factory: Optional[IdFactory] = None,
        flag_score_threshold: Optional[float] = None,
        seed: bool = True,
    ):
        self._id_factory = id_factory or uuid_id_factory
        self._flag_score_threshold = flag_score_threshold
        self._candidates: Dict[str, Candidate] = {}
        self._employment_history: Dict[str, EmploymentHistory] = {}
        self._referees: Dict[str, Referee] = {}
        self._reference_responses: Dict[str, ReferenceResponse] = {}
        self._ai_scores: Dict[str, CandidateScores] = {}
        if seed:
            self._seed()

    def _seed(self) -> None:
        now = utc_now()

        self._candidates[SEED_ID] = Candidate(
            id=SEED_ID,
            email="john.doe@example.com",
            full_name="John Doe",
            linkedin_id="linkedin-123",
            current_employment_status=EmploymentStatus.EMPLOYED,
            created_at=now,
            updated_at=now,
        )
        self._employment_history[SEED_ID] = EmploymentHistory(
            id=SEED_ID,
            candidate_id=SEED_ID,
            company_name="Tech Corp",
            job_title="Senior Software Engineer",
            start_date=date(2022, 1, 1),
            end_date=date(2024, 1, 1),
            is_current=False,
            achievements=["Led team of 5 developers", "Improved performance by 40%"],
            documents_urls=["https://example.com/doc1.pdf"],
            created_at=now,
        )
        self._referees[SEED_ID] = Referee(
            id=SEED_ID,
            candidate_id=SEED_ID,
            employment_id=SEED_ID,
            name="Jane Smith",
            email="jane.smith@techcorp.com",
            company="Tech Corp",
            role="Engineering Manager",
            relationship="Direct Manager",
            email_domain="techcorp.com",
            is_verified=True,
            created_at=now,
        )
        self._reference_responses[SEED_ID] = ReferenceResponse(
            id=SEED_ID,
            referee_id=SEED_ID,
            token="mock-token-123",
            relationship="Direct Manager",
            role_confirmation="Senior Software Engineer",
            duration_confirmation="2 years",
            would_rehire=True,
            returned_property=True,
            left_on_good_terms=True,
            achievements_aligned=True,
            concerns="",
            additional_comments="Excellent team player and technical leader.",
            submitted_at=now,
            expires_at=now + timedelta(days=30),
            created_at=now,
        )
        self._ai_scores[SEED_ID] = CandidateScores(
            id=SEED_ID,
            candidate_id=SEED_ID,
            credibility_score=85,
            integrity_score=90,
            achievement_score=88,
            rehire_score=92,
            summary="Strong candidate with excellent references and proven track record.",
            analysis_date=now,
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _new_id(self) -> str:
        return self._id_factory()

    @staticmethod
    def _apply(
        store: Dict[str, EntityT],
        entity: str,
        entity_id: str,
        updates: BaseModel,
        **extra,
    ) -> EntityT:
        current = store.get(entity_id)
        if current is None:
            raise NotFoundError(entity, entity_id)
        changes = updates.model_dump(exclude_unset=True)
        changes.update(extra)
        try:
            updated = type(current).model_validate({**current.model_dump(), **changes})
        except PydanticValidationError as exc:
            raise ValidationError(f"Invalid {entity.lower()} update", details=str(exc)) from exc
        store[entity_id] = updated
        logger.debug("Updated %s %s | fields=%s", entity, entity_id, sorted(changes))
        return updated

    @staticmethod
    def _remove(store: Dict[str, BaseModel], entity: str, entity_id: str) -> None:
        if store.pop(entity_id, None) is None:
            raise NotFoundError(entity, entity_id)
        logger.debug("Deleted %s %s", entity, entity_id)

    # =========================================================================
    # Candidates
    # =========================================================================

    async def create_candidate(self, candidate: CandidateCreate) -> Candidate:
        now = utc_now()
        created = Candidate(
            **candidate.model_dump(),
            id=self._new_id(),
            created_at=now,
            updated_at=now,
        )
        self._candidates[created.id] = created
        logger.debug("Created candidate %s", created.id)
        return created

    async def get_candidate(self, candidate_id: str) -> Optional[Candidate]:
        return self._candidates.get(candidate_id)

    async def get_candidate_by_email(self, email: str) -> Optional[Candidate]:
        email = email.lower()
        for candidate in self._candidates.values():
            if candidate.email == email:
                return candidate
        return None

    async def list_candidates(self, limit: Optional[int] = None) -> List[Candidate]:
        candidates = list(self._candidates.values())
        return candidates if limit is None else candidates[:limit]

    async def update_candidate(self, candidate_id: str, updates: CandidateUpdate) -> Candidate:
        return self._apply(
            self._candidates, "Candidate", candidate_id, updates, updated_at=utc_now()
        )

    async def delete_candidate(self, candidate_id: str) -> None:
        self._remove(self._candidates, "Candidate", candidate_id)

    # =========================================================================
    # Employment history
    # =========================================================================

    async def create_employment_history(
        self, employment: EmploymentHistoryCreate
    ) -> EmploymentHistory:
        created = EmploymentHistory(
            **employment.model_dump(), id=self._new_id(), created_at=utc_now()
        )
        self._employment_history[created.id] = created
        return created

    async def get_employment(self, employment_id: str) -> Optional[EmploymentHistory]:
        return self._employment_history.get(employment_id)

    async def get_employment_history(self, candidate_id: str) -> List[EmploymentHistory]:
        return [
            entry for entry in self._employment_history.values()
            if entry.candidate_id == candidate_id
        ]

    async def update_employment_history(
        self, employment_id: str, updates: EmploymentHistoryUpdate
    ) -> EmploymentHistory:
        return self._apply(
            self._employment_history, "Employment history", employment_id, updates
        )

    async def delete_employment_history(self, employment_id: str) -> None:
        self._remove(self._employment_history, "Employment history", employment_id)

    # =========================================================================
    # Referees
    # =========================================================================

    async def create_referee(self, referee: RefereeCreate) -> Referee:
        created = Referee(**referee.model_dump(), id=self._new_id(), created_at=utc_now())
        self._referees[created.id] = created
        return created

    async def get_referee(self, referee_id: str) -> Optional[Referee]:
        return self._referees.get(referee_id)

    async def get_referees(self, candidate_id: str) -> List[Referee]:
        return [r for r in self._referees.values() if r.candidate_id == candidate_id]

    async def update_referee(self, referee_id: str, updates: RefereeUpdate) -> Referee:
        return self._apply(self._referees, "Referee", referee_id, updates)

    async def delete_referee(self, referee_id: str) -> None:
        self._remove(self._referees, "Referee", referee_id)

    # =========================================================================
    # Reference responses
    # =========================================================================

    async def create_reference_response(
        self, response: ReferenceResponseCreate
    ) -> ReferenceResponse:
        created = ReferenceResponse(
            **response.model_dump(), id=self._new_id(), created_at=utc_now()
        )
        self._reference_responses[created.id] = created
        return created

    async def get_reference_response(self, response_id: str) -> Optional[ReferenceResponse]:
        return self._reference_responses.get(response_id)

    async def get_reference_response_by_token(self, token: str) -> Optional[ReferenceResponse]:
        for response in self._reference_responses.values():
            if response.token == token:
                return response
        return None

    async def get_reference_responses(self, referee_id: str) -> List[ReferenceResponse]:
        return [
            r for r in self._reference_responses.values() if r.referee_id == referee_id
        ]

    async def update_reference_response(
        self, response_id: str, updates: ReferenceResponseUpdate
    ) -> ReferenceResponse:
        return self._apply(
            self._reference_responses, "Reference response", response_id, updates
        )

    async def delete_reference_response(self, response_id: str) -> None:
        self._remove(self._reference_responses, "Reference response", response_id)

    # =========================================================================
    # Candidate scores
    # =========================================================================

    async def create_ai_scores(self, scores: CandidateScoresCreate) -> CandidateScores:
        created = CandidateScores(
            **scores.model_dump(), id=self._new_id(), analysis_date=utc_now()
        )
        self._ai_scores[created.id] = created
        return created

    async def get_ai_scores(self, candidate_id: str) -> Optional[CandidateScores]:
        latest: Optional[CandidateScores] = None
        for scores in self._ai_scores.values():
            if scores.candidate_id != candidate_id:
                continue
            if latest is None or scores.analysis_date >= latest.analysis_date:
                latest = scores
        return latest

    async def update_ai_scores(
        self, scores_id: str, updates: CandidateScoresUpdate
    ) -> CandidateScores:
        return self._apply(self._ai_scores, "Candidate scores", scores_id, updates)

    async def delete_ai_scores(self, scores_id: str) -> None:
        self._remove(self._ai_scores, "Candidate scores", scores_id)

    # =========================================================================
    # Read compositions
    # =========================================================================

    async def _candidate_responses(self, referees: List[Referee]) -> List[ReferenceResponse]:
        responses: List[ReferenceResponse] = []
        for referee in referees:
            responses.extend(await self.get_reference_responses(referee.id))
        return responses

    async def get_dashboard_stats(self) -> DashboardStats:
        responses = list(self._reference_responses.values())
        completed = sum(1 for r in responses if r.is_submitted)

        scores = list(self._ai_scores.values())
        average = (
            sum(s.credibility_score for s in scores) / len(scores) if scores else 0.0
        )

        flagged = 0
        for candidate_id in self._candidates:
            referees = await self.get_referees(candidate_id)
            flags = derive_flags(
                referees,
                await self._candidate_responses(referees),
                await self.get_ai_scores(candidate_id),
                self._flag_score_threshold,
            )
            if flags:
                flagged += 1

        return DashboardStats(
            total_candidates=len(self._candidates),
            pending_references=len(responses) - completed,
            completed_references=completed,
            average_score=average,
            flagged_candidates=flagged,
        )

    async def get_candidate_overview(self, candidate_id: str) -> CandidateOverview:
        candidate = await self.get_candidate(candidate_id)
        if candidate is None:
            raise NotFoundError("Candidate", candidate_id)

        referees = await self.get_referees(candidate_id)
        responses = await self._candidate_responses(referees)
        scores = await self.get_ai_scores(candidate_id)

        return CandidateOverview(
            candidate=candidate,
            employment_history=await self.get_employment_history(candidate_id),
            referees=referees,
            reference_responses=responses,
            scores=scores,
            flags=derive_flags(referees, responses, scores, self._flag_score_threshold),
            status=derive_status(referees, responses),
        )

    # =========================================================================
    # Mock-specific helpers
    # =========================================================================

    def clear_all(self) -> None:
        """Drop every record, seeded ones included."""
        self._candidates.clear()
        self._employment_history.clear()
        self._referees.clear()
        self._reference_responses.clear()
        self._ai_scores.clear()

    def list_employment_history(self) -> List[EmploymentHistory]:
        return list(self._employment_history.values())

    def list_referees(self) -> List[Referee]:
        return list(self._referees.values())

    def list_reference_responses(self) -> List[ReferenceResponse]:
        return list(self._reference_responses.values())

    def list_ai_scores(self) -> List[CandidateScores]:
        return list(self._ai_scores.values())

    # =========================================================================
    # Provider information
    # =========================================================================

    def get_provider_name(self) -> str:
        return "mock"

    def is_available(self) -> bool:
        return True
