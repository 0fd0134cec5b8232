"""
Pydantic models for domain entities and API payloads.

Entities follow the relational shape: every dependent record carries the
id of its parent (candidate_id, employment_id, referee_id).

Create payloads omit server-assigned fields. Update payloads make every
mutable field optional; providers apply only the fields that were set
(``model_dump(exclude_unset=True)``).

Usage:
    from refvalidator.models import Candidate, CandidateCreate, EmploymentStatus
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utc_now() -> datetime:
    """Timezone-aware current time used for every server-assigned timestamp."""
    return datetime.now(timezone.utc)


# =============================================================================
# Enums
# =============================================================================

class UserRole(str, Enum):
    """Roles a principal can hold."""
    CANDIDATE = "candidate"
    REFEREE = "referee"
    ADMIN = "admin"
    HR_MANAGER = "hr_manager"
    CREDENTIAL_ISSUER = "credential_issuer"


class EmploymentStatus(str, Enum):
    """Coarse employment status of a candidate."""
    EMPLOYED = "employed"
    UNEMPLOYED = "unemployed"
    FREELANCING = "freelancing"
    CONTRACTING = "contracting"
    STUDENT = "student"


class DeliveryStatus(str, Enum):
    """Email delivery states."""
    DELIVERED = "delivered"
    FAILED = "failed"
    PENDING = "pending"


class TransactionStatus(str, Enum):
    """Ledger transaction states."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class CandidateStatus(str, Enum):
    """Progress of a candidate's reference check."""
    AWAITING_REFEREES = "awaiting_referees"
    REFERENCES_PENDING = "references_pending"
    REFERENCES_COMPLETE = "references_complete"


# =============================================================================
# Principals
# =============================================================================

class User(BaseModel):
    """Authenticated principal returned by auth providers."""

    id: str
    email: str
    full_name: str
    role: UserRole
    linkedin_id: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


# =============================================================================
# Candidates
# =============================================================================

class CandidateCreate(BaseModel):
    """Payload for creating a candidate."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(..., min_length=3, max_length=320)
    full_name: str = Field(..., min_length=1, max_length=200)
    linkedin_id: str | None = None
    current_employment_status: EmploymentStatus = EmploymentStatus.EMPLOYED

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


class CandidateUpdate(BaseModel):
    """Partial candidate update."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: str | None = None
    full_name: str | None = None
    linkedin_id: str | None = None
    current_employment_status: EmploymentStatus | None = None

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str | None) -> str | None:
        return v.lower() if v is not None else v


class Candidate(CandidateCreate):
    id: str
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Employment History
# =============================================================================

class EmploymentHistoryCreate(BaseModel):
    candidate_id: str
    company_name: str = Field(..., min_length=1)
    job_title: str = Field(..., min_length=1)
    start_date: date
    end_date: date | None = None
    is_current: bool = False
    achievements: list[str] = Field(default_factory=list)
    documents_urls: list[str] = Field(default_factory=list)


class EmploymentHistoryUpdate(BaseModel):
    company_name: str | None = None
    job_title: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool | None = None
    achievements: list[str] | None = None
    documents_urls: list[str] | None = None


class EmploymentHistory(EmploymentHistoryCreate):
    id: str
    created_at: datetime


# =============================================================================
# Referees
# =============================================================================

class RefereeCreate(BaseModel):
    candidate_id: str
    employment_id: str
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    company: str = Field(..., min_length=1)
    role: str | None = None
    relationship: str | None = None
    email_domain: str
    is_verified: bool = False


class RefereeUpdate(BaseModel):
    name: str | None = None
    email: str | None = None
    company: str | None = None
    role: str | None = None
    relationship: str | None = None
    email_domain: str | None = None
    is_verified: bool | None = None


class Referee(RefereeCreate):
    id: str
    created_at: datetime


class RefereeInvite(BaseModel):
    """
    Request body for inviting a referee.

    The candidate comes from the URL and the email domain is derived
    from the address.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    employment_id: str
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=320)
    company: str = Field(..., min_length=1, max_length=200)
    role: str | None = None
    relationship: str | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        local, sep, domain = v.rpartition("@")
        if not sep or not local or "." not in domain:
            raise ValueError("Invalid email address")
        return v.lower()


# =============================================================================
# Reference Responses
# =============================================================================

class ReferenceAnswers(BaseModel):
    """Answers to the fixed reference questionnaire."""

    relationship: str | None = None
    role_confirmation: str | None = None
    duration_confirmation: str | None = None
    would_rehire: bool | None = None
    returned_property: bool | None = None
    left_on_good_terms: bool | None = None
    achievements_aligned: bool | None = None
    concerns: str | None = None
    additional_comments: str | None = None


class ReferenceResponseCreate(ReferenceAnswers):
    referee_id: str
    token: str
    submitted_at: datetime | None = None
    expires_at: datetime


class ReferenceResponseUpdate(ReferenceAnswers):
    submitted_at: datetime | None = None
    expires_at: datetime | None = None


class ReferenceResponse(ReferenceResponseCreate):
    id: str
    created_at: datetime

    @property
    def is_submitted(self) -> bool:
        return self.submitted_at is not None

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utc_now()) >= self.expires_at


# =============================================================================
# Scores
# =============================================================================

class CandidateScoresCreate(BaseModel):
    candidate_id: str
    credibility_score: float = Field(..., ge=0, le=100)
    integrity_score: float = Field(..., ge=0, le=100)
    achievement_score: float = Field(..., ge=0, le=100)
    rehire_score: float = Field(..., ge=0, le=100)
    summary: str = ""


class CandidateScoresUpdate(BaseModel):
    credibility_score: float | None = Field(default=None, ge=0, le=100)
    integrity_score: float | None = Field(default=None, ge=0, le=100)
    achievement_score: float | None = Field(default=None, ge=0, le=100)
    rehire_score: float | None = Field(default=None, ge=0, le=100)
    summary: str | None = None


class CandidateScores(CandidateScoresCreate):
    id: str
    analysis_date: datetime


class ScoreDetail(BaseModel):
    """One dimension of an NLP score breakdown."""

    score: float = Field(..., ge=0, le=100)
    factors: list[str] = Field(default_factory=list)


class ScoreBreakdown(BaseModel):
    credibility: ScoreDetail
    integrity: ScoreDetail
    achievements: ScoreDetail
    rehire: ScoreDetail


# =============================================================================
# Read Compositions
# =============================================================================

class DashboardStats(BaseModel):
    total_candidates: int
    pending_references: int
    completed_references: int
    average_score: float
    flagged_candidates: int


class CandidateOverview(BaseModel):
    candidate: Candidate
    employment_history: list[EmploymentHistory]
    referees: list[Referee]
    reference_responses: list[ReferenceResponse]
    scores: CandidateScores | None = None
    flags: list[str] = Field(default_factory=list)
    status: CandidateStatus


# =============================================================================
# Email
# =============================================================================

class EmailData(BaseModel):
    """Templated email request."""

    to: str
    template: str
    data: dict[str, Any] = Field(default_factory=dict)


class EmailDeliveryStatus(BaseModel):
    message_id: str
    status: DeliveryStatus
    delivered_at: datetime | None = None
    error: str | None = None


# =============================================================================
# Ledger
# =============================================================================

class NetworkInfo(BaseModel):
    chain_id: int
    network_name: str
    block_height: int


# =============================================================================
# API Envelopes
# =============================================================================

ACTION_ALIASES: dict[str, str] = {
    "createCandidate": "create-candidate",
    "getCandidate": "get-candidate",
    "getStats": "get-stats",
}


class ProviderActionRequest(BaseModel):
    """Body of POST /api/providers."""

    action: str = Field(..., min_length=1)
    data: dict[str, Any] = Field(default_factory=dict)
    provider: str | None = Field(
        default=None,
        description="Database provider name (configured default when omitted)",
    )

    @field_validator("action")
    @classmethod
    def normalize_action(cls, v: str) -> str:
        """Accept camelCase action names from older clients."""
        v = v.strip()
        return ACTION_ALIASES.get(v, v)


class ApiResponse(BaseModel):
    """Success envelope shared by the JSON endpoints."""

    success: bool = True
    data: Any = None
    message: str = ""


class ErrorResponse(BaseModel):
    """
    Failure envelope.

    Never carries a traceback; `error` is the exception message and
    `message` a fixed description of what the endpoint was doing.
    """

    model_config = ConfigDict(frozen=True)

    success: bool = False
    error: str
    message: str
    error_type: str | None = None


class PingResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str = "ok"


class ReadinessResponse(BaseModel):
    """Readiness probe response for container orchestration."""

    model_config = ConfigDict(frozen=True)

    ready: bool
    checks: dict[str, bool] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    status: str
    providers: dict[str, Any]
    timestamp: str
    version: str
