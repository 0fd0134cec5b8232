"""Settings parsing and log redaction."""
import logging

import pytest
from pydantic import ValidationError

from refvalidator.config import SanitizingFormatter, Settings


def test_defaults(settings):
    assert settings.DEFAULT_PROVIDERS == {
        "auth": "mock",
        "database": "mock",
        "email": "mock",
        "nlp": "mock",
        "storage": "mock",
        "blockchain": "mock",
        "vc": "mock",
        "zk": "mock",
    }
    assert settings.REFERENCE_TOKEN_TTL_DAYS == 30
    assert settings.FLAG_SCORE_THRESHOLD is None


def test_blank_provider_falls_back_to_mock(monkeypatch):
    monkeypatch.setenv("DATABASE_PROVIDER", "  ")
    monkeypatch.setenv("EMAIL_PROVIDER", "SendGrid")

    settings = Settings(_env_file=None)

    assert settings.DATABASE_PROVIDER == "mock"
    assert settings.EMAIL_PROVIDER == "sendgrid"


def test_cors_origins_list():
    settings = Settings(_env_file=None, CORS_ORIGINS="https://a.example, https://b.example")
    assert settings.CORS_ORIGINS_LIST == ["https://a.example", "https://b.example"]


def test_invalid_rate_limit():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, RATE_LIMIT="lots")


def test_formatter_redacts_tokens():
    formatter = SanitizingFormatter("%(message)s")
    record = logging.LogRecord(
        "test", logging.INFO, __file__, 1,
        "GET /reference/abc123 with Bearer secret-value", None, None,
    )

    message = formatter.format(record)

    assert "abc123" not in message
    assert "secret-value" not in message
    assert "/reference/[REDACTED]" in message


def test_formatter_masks_email_local_part():
    formatter = SanitizingFormatter("%(message)s")
    record = logging.LogRecord(
        "test", logging.INFO, __file__, 1, "Invited jane.smith@techcorp.com", None, None,
    )

    assert formatter.format(record) == "Invited ***@techcorp.com"
