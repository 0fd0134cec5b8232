"""
Abstract interface for persistence providers.

Covers the five entity collections plus the two read compositions the
dashboard needs. Any backend (in-memory, Supabase, PostgreSQL) registered
under the "database" category must implement all of it.

Update and delete of a missing id raise NotFoundError. Lookups of a
missing id return None.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

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
    Referee,
    RefereeCreate,
    RefereeUpdate,
    ReferenceResponse,
    ReferenceResponseCreate,
    ReferenceResponseUpdate,
)


class DatabaseProviderInterface(ABC):
    """
    Abstract interface for persistence providers.

    All implementations must provide:
    - CRUD for candidates, employment history, referees,
      reference responses and candidate scores
    - Dashboard aggregate counts
    - A single candidate's overview with all dependents
    """

    # ===== Candidates =====

    @abstractmethod
    async def create_candidate(self, candidate: CandidateCreate) -> Candidate:
        pass

    @abstractmethod
    async def get_candidate(self, candidate_id: str) -> Optional[Candidate]:
        pass

    @abstractmethod
    async def get_candidate_by_email(self, email: str) -> Optional[Candidate]:
        pass

    @abstractmethod
    async def list_candidates(self, limit: Optional[int] = None) -> List[Candidate]:
        """List candidates in creation order, optionally capped at `limit`."""
        pass

    @abstractmethod
    async def update_candidate(self, candidate_id: str, updates: CandidateUpdate) -> Candidate:
        pass

    @abstractmethod
    async def delete_candidate(self, candidate_id: str) -> None:
        """Delete a candidate. Dependent records are left untouched."""
        pass

    # ===== Employment history =====

    @abstractmethod
    async def create_employment_history(
        self, employment: EmploymentHistoryCreate
    ) -> EmploymentHistory:
        pass

    @abstractmethod
    async def get_employment(self, employment_id: str) -> Optional[EmploymentHistory]:
        pass

    @abstractmethod
    async def get_employment_history(self, candidate_id: str) -> List[EmploymentHistory]:
        """List a candidate's employment history entries."""
        pass

    @abstractmethod
    async def update_employment_history(
        self, employment_id: str, updates: EmploymentHistoryUpdate
    ) -> EmploymentHistory:
        pass

    @abstractmethod
    async def delete_employment_history(self, employment_id: str) -> None:
        pass

    # ===== Referees =====

    @abstractmethod
    async def create_referee(self, referee: RefereeCreate) -> Referee:
        pass

    @abstractmethod
    async def get_referee(self, referee_id: str) -> Optional[Referee]:
        pass

    @abstractmethod
    async def get_referees(self, candidate_id: str) -> List[Referee]:
        """List the referees attached to a candidate."""
        pass

    @abstractmethod
    async def update_referee(self, referee_id: str, updates: RefereeUpdate) -> Referee:
        pass

    @abstractmethod
    async def delete_referee(self, referee_id: str) -> None:
        pass

    # ===== Reference responses =====

    @abstractmethod
    async def create_reference_response(
        self, response: ReferenceResponseCreate
    ) -> ReferenceResponse:
        pass

    @abstractmethod
    async def get_reference_response(self, response_id: str) -> Optional[ReferenceResponse]:
        pass

    @abstractmethod
    async def get_reference_response_by_token(self, token: str) -> Optional[ReferenceResponse]:
        pass

    @abstractmethod
    async def get_reference_responses(self, referee_id: str) -> List[ReferenceResponse]:
        """List the responses requested from one referee."""
        pass

    @abstractmethod
    async def update_reference_response(
        self, response_id: str, updates: ReferenceResponseUpdate
    ) -> ReferenceResponse:
        pass

    @abstractmethod
    async def delete_reference_response(self, response_id: str) -> None:
        pass

    # ===== Candidate scores =====

    @abstractmethod
    async def create_ai_scores(self, scores: CandidateScoresCreate) -> CandidateScores:
        pass

    @abstractmethod
    async def get_ai_scores(self, candidate_id: str) -> Optional[CandidateScores]:
        """Get the most recent score set for a candidate."""
        pass

    @abstractmethod
    async def update_ai_scores(
        self, scores_id: str, updates: CandidateScoresUpdate
    ) -> CandidateScores:
        pass

    @abstractmethod
    async def delete_ai_scores(self, scores_id: str) -> None:
        pass

    # ===== Read compositions =====

    @abstractmethod
    async def get_dashboard_stats(self) -> DashboardStats:
        pass

    @abstractmethod
    async def get_candidate_overview(self, candidate_id: str) -> CandidateOverview:
        """
        Get a candidate with every dependent record, flags and status.

        Raises:
            NotFoundError: If the candidate does not exist
        """
        pass

    # ===== Provider information =====

    @abstractmethod
    def get_provider_name(self) -> str:
        """Get the provider name (e.g., 'mock', 'supabase')."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the store is reachable."""
        pass
