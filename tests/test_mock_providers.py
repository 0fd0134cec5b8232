"""Mock auth, email, NLP and storage providers."""
from datetime import timedelta

import pytest

from refvalidator.exceptions import AuthenticationFailedError, NotFoundError
from refvalidator.models import DeliveryStatus, EmailData, ReferenceResponse, UserRole, utc_now
from refvalidator.providers.auth.mock_impl import MOCK_VALID_TOKEN


def make_response(**answers):
    now = utc_now()
    return ReferenceResponse(
        id="r1",
        referee_id="ref1",
        token="t1",
        created_at=now,
        expires_at=now + timedelta(days=1),
        submitted_at=answers.pop("submitted_at", now),
        **answers,
    )


class TestMockAuth:
    @pytest.mark.asyncio
    async def test_login_returns_default_user(self, auth):
        user = await auth.authenticate({"email": "whoever@example.com"})

        assert user.id == "1"
        assert user.role == UserRole.CANDIDATE
        assert await auth.is_authenticated()
        assert await auth.get_current_user() == user

    @pytest.mark.asyncio
    async def test_logout_clears_session(self, auth):
        await auth.authenticate({})
        await auth.logout()

        assert not await auth.is_authenticated()
        assert await auth.get_current_user() is None

    @pytest.mark.asyncio
    async def test_verify_token(self, auth):
        assert (await auth.verify_token(MOCK_VALID_TOKEN)).id == "1"
        assert await auth.verify_token("something-else") is None

    @pytest.mark.asyncio
    async def test_login_fails_without_default_user(self, auth):
        auth.remove_user("1")
        with pytest.raises(AuthenticationFailedError):
            await auth.authenticate({})

    def test_seeded_roles(self, auth):
        roles = {user.role for user in auth.list_users()}
        assert roles == {UserRole.CANDIDATE, UserRole.ADMIN, UserRole.REFEREE}

    def test_auth_url(self, auth):
        assert auth.get_auth_url("linkedin") == "/auth/linkedin?mock=true"


class TestMockEmail:
    @pytest.mark.asyncio
    async def test_send_and_track(self, email):
        message_id = await email.send_email("a@example.com", "Hello", "Body")

        status = await email.get_delivery_status(message_id)
        assert status.status == DeliveryStatus.DELIVERED
        assert email.outbox[0].subject == "Hello"

    @pytest.mark.asyncio
    async def test_template_subject_uses_data(self, email):
        await email.send_template(
            EmailData(
                to="jane@techcorp.com",
                template="reference_request",
                data={"candidate_name": "John Doe", "link": "http://x/reference/abc"},
            )
        )

        sent = email.outbox[0]
        assert sent.subject == "Reference request for John Doe"
        assert "link: http://x/reference/abc" in sent.content
        assert sent.template == "reference_request"

    @pytest.mark.asyncio
    async def test_unknown_message_id(self, email):
        status = await email.get_delivery_status("nope")
        assert status.status == DeliveryStatus.FAILED
        assert status.error

    @pytest.mark.asyncio
    async def test_verify_email(self, email):
        assert await email.verify_email("jane@techcorp.com")
        assert not await email.verify_email("jane@")
        assert not await email.verify_email("not an email")


class TestMockNLP:
    @pytest.mark.asyncio
    async def test_sentiment_range(self, nlp):
        assert await nlp.analyze_sentiment("An excellent and reliable leader") == 1.0
        assert await nlp.analyze_sentiment("Unreliable and often late") == -1.0
        assert await nlp.analyze_sentiment("Worked here for two years") == 0.0

    @pytest.mark.asyncio
    async def test_scores_from_answers(self, nlp):
        responses = [
            make_response(
                role_confirmation="Engineer",
                duration_confirmation="2 years",
                would_rehire=True,
                left_on_good_terms=True,
                returned_property=True,
                achievements_aligned=True,
            ),
            make_response(
                role_confirmation="Engineer",
                would_rehire=False,
                left_on_good_terms=True,
                returned_property=False,
                achievements_aligned=None,
            ),
        ]

        scores = await nlp.generate_scores(responses)

        assert scores.credibility.score == 50.0
        assert scores.integrity.score == 75.0
        assert scores.achievements.score == 100.0
        assert scores.rehire.score == 50.0

    @pytest.mark.asyncio
    async def test_scores_ignore_unsubmitted(self, nlp):
        scores = await nlp.generate_scores([make_response(submitted_at=None, would_rehire=True)])
        assert scores.rehire.score == 0.0

    @pytest.mark.asyncio
    async def test_summary(self, nlp):
        assert await nlp.summarize_references([]) == "No completed references yet."

        summary = await nlp.summarize_references(
            [make_response(would_rehire=True, additional_comments="Excellent engineer")]
        )
        assert "1 of 1 referee(s) would rehire" in summary
        assert "positive" in summary

    @pytest.mark.asyncio
    async def test_extract_entities(self, nlp):
        entities = await nlp.extract_entities(
            "Jane (jane@techcorp.com) managed him at Tech Corp from 2019 to 2022. "
            "See https://techcorp.com/team"
        )

        assert entities["emails"] == ["jane@techcorp.com"]
        assert entities["urls"] == ["https://techcorp.com/team"]
        assert entities["years"] == ["2019", "2022"]
        assert "Tech Corp" in entities["organizations"]

    @pytest.mark.asyncio
    async def test_red_flags(self, nlp):
        flags = await nlp.detect_red_flags("He was terminated and we would not rehire him.")
        assert flags == ["would not rehire", "terminated"]
        assert await nlp.detect_red_flags("A pleasure to work with") == []


class TestMockStorage:
    @pytest.mark.asyncio
    async def test_upload_and_lookup(self, storage):
        url = await storage.upload_file(b"%PDF", "/docs/cv.pdf")

        assert url == "mock://storage/docs/cv.pdf"
        assert await storage.file_exists("docs/cv.pdf")
        assert await storage.get_file_url("docs/cv.pdf") == url
        assert storage.read_file("docs/cv.pdf") == b"%PDF"

    @pytest.mark.asyncio
    async def test_delete(self, storage):
        await storage.upload_file(b"x", "a.txt")
        await storage.delete_file("a.txt")

        assert not await storage.file_exists("a.txt")
        with pytest.raises(NotFoundError):
            await storage.delete_file("a.txt")
        with pytest.raises(NotFoundError):
            await storage.get_file_url("a.txt")
