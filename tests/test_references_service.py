"""Reference workflow: invitations, submissions and scoring."""
from datetime import date, timedelta

import pytest

from refvalidator.exceptions import (
    NotFoundError,
    ReferenceAlreadySubmittedError,
    ReferenceExpiredError,
    ValidationError,
)
from refvalidator.models import (
    CandidateCreate,
    EmploymentHistoryCreate,
    RefereeInvite,
    ReferenceAnswers,
    ReferenceResponseCreate,
    ReferenceResponseUpdate,
    utc_now,
)
from refvalidator.providers.email import MockEmailProvider
from refvalidator.services import references
from refvalidator.services.review import derive_flags


class BouncingEmailProvider(MockEmailProvider):
    async def send_template(self, email):
        raise ConnectionError("SMTP relay unavailable")


def invite(**overrides):
    payload = {
        "employment_id": "1",
        "name": "Sam Lee",
        "email": "Sam.Lee@TechCorp.com",
        "company": "Tech Corp",
        "role": "CTO",
        "relationship": "Skip-level manager",
    }
    payload.update(overrides)
    return RefereeInvite(**payload)


def answers(**overrides):
    payload = {
        "role_confirmation": "Senior Software Engineer",
        "duration_confirmation": "2 years",
        "would_rehire": True,
        "returned_property": True,
        "left_on_good_terms": True,
        "achievements_aligned": True,
        "additional_comments": "Great colleague",
    }
    payload.update(overrides)
    return ReferenceAnswers(**payload)


class TestInviteReferee:
    @pytest.mark.asyncio
    async def test_creates_referee_response_and_email(self, database, email, settings):
        referee, response = await references.invite_referee(
            database, email, "1", invite(), settings=settings
        )

        assert referee.candidate_id == "1"
        assert referee.employment_id == "1"
        assert referee.email == "sam.lee@techcorp.com"
        assert referee.email_domain == "techcorp.com"
        assert not referee.is_verified

        assert response.referee_id == referee.id
        assert not response.is_submitted
        assert response.expires_at > response.created_at
        assert response.expires_at - utc_now() > timedelta(days=settings.REFERENCE_TOKEN_TTL_DAYS - 1)

        sent = email.outbox
        assert len(sent) == 1
        assert sent[0].to == "sam.lee@techcorp.com"
        assert sent[0].template == "reference_request"
        assert f"{settings.APP_BASE_URL}/reference/{response.token}" in sent[0].content

    @pytest.mark.asyncio
    async def test_tokens_are_unique(self, database, email, settings):
        tokens = set()
        for index in range(5):
            _, response = await references.invite_referee(
                database, email, "1", invite(email=f"ref{index}@techcorp.com"), settings=settings
            )
            tokens.add(response.token)

        assert len(tokens) == 5
        assert "mock-token-123" not in tokens

    @pytest.mark.asyncio
    async def test_missing_candidate(self, database, email, settings):
        with pytest.raises(NotFoundError):
            await references.invite_referee(database, email, "missing", invite(), settings=settings)
        assert email.outbox == []

    @pytest.mark.asyncio
    async def test_missing_employment(self, database, email, settings):
        with pytest.raises(NotFoundError):
            await references.invite_referee(
                database, email, "1", invite(employment_id="missing"), settings=settings
            )

    @pytest.mark.asyncio
    async def test_employment_of_other_candidate(self, database, email, settings):
        other = await database.create_candidate(
            CandidateCreate(email="other@example.com", full_name="Other Person")
        )
        job = await database.create_employment_history(
            EmploymentHistoryCreate(
                candidate_id=other.id,
                company_name="Elsewhere Inc",
                job_title="Analyst",
                start_date=date(2020, 5, 1),
            )
        )

        with pytest.raises(ValidationError):
            await references.invite_referee(
                database, email, "1", invite(employment_id=job.id), settings=settings
            )
        assert len(database.list_referees()) == 1

    @pytest.mark.asyncio
    async def test_failed_email_leaves_no_invitation(self, database, settings):
        with pytest.raises(ConnectionError):
            await references.invite_referee(
                database, BouncingEmailProvider(), "1", invite(), settings=settings
            )

        assert [r.id for r in database.list_referees()] == ["1"]
        assert [r.id for r in database.list_reference_responses()] == ["1"]
        overview = await database.get_candidate_overview("1")
        assert overview.flags == []

    def test_invalid_invite_email(self):
        with pytest.raises(ValueError):
            invite(email="not-an-email")

    def test_email_domain(self):
        assert references.email_domain("Jane@TechCorp.COM") == "techcorp.com"


class TestSubmitReference:
    @pytest.mark.asyncio
    async def test_submit_once(self, database, email, settings):
        referee, response = await references.invite_referee(
            database, email, "1", invite(), settings=settings
        )

        submitted = await references.submit_reference(database, response.token, answers())

        assert submitted.is_submitted
        assert submitted.would_rehire is True
        assert submitted.token == response.token

        with pytest.raises(ReferenceAlreadySubmittedError) as exc_info:
            await references.submit_reference(database, response.token, answers())
        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_seeded_token_already_submitted(self, database):
        with pytest.raises(ReferenceAlreadySubmittedError):
            await references.submit_reference(database, "mock-token-123", answers())

    @pytest.mark.asyncio
    async def test_expired_token(self, database):
        now = utc_now()
        stale = await database.create_reference_response(
            ReferenceResponseCreate(
                referee_id="1",
                token="stale-token",
                expires_at=now - timedelta(minutes=1),
            )
        )

        with pytest.raises(ReferenceExpiredError) as exc_info:
            await references.submit_reference(database, stale.token, answers())
        assert exc_info.value.status_code == 410
        assert not (await database.get_reference_response(stale.id)).is_submitted

    @pytest.mark.asyncio
    async def test_unknown_token(self, database):
        with pytest.raises(NotFoundError):
            await references.submit_reference(database, "unknown", answers())
        with pytest.raises(NotFoundError):
            await references.get_reference_by_token(database, "unknown")


class TestAnalyzeCandidate:
    @pytest.mark.asyncio
    async def test_scores_are_stored(self, database, email, nlp, settings):
        _, response = await references.invite_referee(
            database, email, "1", invite(), settings=settings
        )
        await references.submit_reference(database, response.token, answers(would_rehire=False))

        scores = await references.analyze_candidate(database, nlp, "1")

        assert scores.candidate_id == "1"
        assert scores.rehire_score == 50.0
        assert scores.credibility_score == 100.0
        assert "2 completed reference(s)." in scores.summary
        assert await database.get_ai_scores("1") == scores

    @pytest.mark.asyncio
    async def test_pending_responses_are_ignored(self, database, email, nlp, settings):
        await references.invite_referee(database, email, "1", invite(), settings=settings)

        submitted = await references.collect_submitted_responses(database, "1")

        assert [r.token for r in submitted] == ["mock-token-123"]

    @pytest.mark.asyncio
    async def test_missing_candidate(self, database, nlp):
        with pytest.raises(NotFoundError):
            await references.analyze_candidate(database, nlp, "missing")


class TestDeriveFlags:
    @pytest.mark.asyncio
    async def test_expired_pending_request_is_flagged(self, database):
        referee = await database.get_referee("1")
        now = utc_now()
        stale = await database.create_reference_response(
            ReferenceResponseCreate(
                referee_id="1", token="stale", expires_at=now - timedelta(days=1)
            )
        )

        flags = derive_flags([referee], [stale], now=now)

        assert flags == ["Reference request to Jane Smith expired without a response"]

    @pytest.mark.asyncio
    async def test_answers_and_concerns_are_flagged(self, database):
        referee = await database.get_referee("1")
        response = await database.update_reference_response(
            "1",
            ReferenceResponseUpdate(left_on_good_terms=False, concerns="  Missed deadlines "),
        )

        flags = derive_flags([referee], [response])

        assert flags == [
            "Jane Smith reports the candidate did not leave on good terms",
            "Jane Smith raised concerns: Missed deadlines",
        ]

    @pytest.mark.asyncio
    async def test_threshold_only_applies_when_set(self, database):
        scores = await database.get_ai_scores("1")

        assert derive_flags([], [], scores) == []
        assert derive_flags([], [], scores, score_threshold=80) == []
        assert derive_flags([], [], scores, score_threshold=86) == [
            "Credibility score 85 is below 86"
        ]
