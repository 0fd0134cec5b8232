"""
Service configuration loaded from the environment.

Configuration Sources:
    1. Environment variables
    2. .env file (if present)
    3. Field defaults below

Provider selection is read once at start-up. Every capability category has
its own *_PROVIDER variable; unset or blank values fall back to "mock".

Usage:
    from refvalidator.config import settings, get_logger

    print(settings.DATABASE_PROVIDER)
"""
from __future__ import annotations

import logging
import re
from functools import cached_property, lru_cache
from typing import ClassVar, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PROVIDER_NAME = "mock"


class Settings(BaseSettings):
    """
    Environment-driven settings for the reference validator.

    All settings are validated at startup. Nothing is required, so the
    service boots with mock providers and no .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # Server Configuration
    # =========================================================================

    HOST: str = Field(
        default="0.0.0.0",
        description="Interface to bind",
    )
    PORT: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port to listen on",
    )
    DEBUG: bool = Field(
        default=False,
        description="Debug mode - enables auto-reload (NEVER use in production)",
    )
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root log level",
    )
    APP_BASE_URL: str = Field(
        default="http://localhost:3000",
        description="Public URL of the frontend, used to build reference links",
    )

    # =========================================================================
    # Provider Selection
    # =========================================================================
    # One default name per capability category. Custom providers registered
    # under other names can be selected here without code changes.

    AUTH_PROVIDER: str = Field(default=DEFAULT_PROVIDER_NAME)
    DATABASE_PROVIDER: str = Field(default=DEFAULT_PROVIDER_NAME)
    EMAIL_PROVIDER: str = Field(default=DEFAULT_PROVIDER_NAME)
    NLP_PROVIDER: str = Field(default=DEFAULT_PROVIDER_NAME)
    STORAGE_PROVIDER: str = Field(default=DEFAULT_PROVIDER_NAME)
    BLOCKCHAIN_PROVIDER: str = Field(default=DEFAULT_PROVIDER_NAME)
    VC_PROVIDER: str = Field(default=DEFAULT_PROVIDER_NAME)
    ZK_PROVIDER: str = Field(default=DEFAULT_PROVIDER_NAME)

    # =========================================================================
    # Reference Workflow
    # =========================================================================

    REFERENCE_TOKEN_TTL_DAYS: int = Field(
        default=30,
        ge=1,
        le=365,
        description="Days a referee has to answer before the reference link expires",
    )
    FLAG_SCORE_THRESHOLD: float | None = Field(
        default=None,
        ge=0,
        le=100,
        description="Flag candidates whose credibility score falls below this value (unset = never)",
    )

    # =========================================================================
    # Rate Limiting
    # =========================================================================

    RATE_LIMIT: str = Field(
        default="100/minute",
        pattern=r"^\d+/(second|minute|hour|day)$",
        description="Rate limit for write endpoints (format: 'count/period')",
    )
    RATE_LIMIT_ENABLED: bool = Field(
        default=True,
        description="Disable to turn off rate limiting (local tooling and tests)",
    )

    # =========================================================================
    # CORS Configuration
    # =========================================================================

    CORS_ORIGINS: str = Field(
        default="*",
        description="Comma-separated browser origins allowed to call the API",
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str) -> str:
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator(
        "AUTH_PROVIDER",
        "DATABASE_PROVIDER",
        "EMAIL_PROVIDER",
        "NLP_PROVIDER",
        "STORAGE_PROVIDER",
        "BLOCKCHAIN_PROVIDER",
        "VC_PROVIDER",
        "ZK_PROVIDER",
        mode="before",
    )
    @classmethod
    def normalize_provider(cls, v: str | None) -> str:
        """Lowercase provider names; blank means the mock provider."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_PROVIDER_NAME
        return v.strip().lower() if isinstance(v, str) else v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @cached_property
    def CORS_ORIGINS_LIST(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def DEFAULT_PROVIDERS(self) -> dict[str, str]:
        """Configured default provider name keyed by category value."""
        return {
            "auth": self.AUTH_PROVIDER,
            "database": self.DATABASE_PROVIDER,
            "email": self.EMAIL_PROVIDER,
            "nlp": self.NLP_PROVIDER,
            "storage": self.STORAGE_PROVIDER,
            "blockchain": self.BLOCKCHAIN_PROVIDER,
            "vc": self.VC_PROVIDER,
            "zk": self.ZK_PROVIDER,
        }


# =============================================================================
# Settings Factory with Caching
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings read once per process; tests build their own `Settings`."""
    return Settings()


settings = get_settings()


# =============================================================================
# Logging
# =============================================================================

_REDACTED = "[REDACTED]"


def _secret_after(label: str) -> re.Pattern[str]:
    """Match `label: value` / `label=value`, keeping the label."""
    return re.compile(rf'({label}["\']?\s*[:=]\s*["\']?)[^"\'\s,]+', re.I)


class SanitizingFormatter(logging.Formatter):
    """
    Formatter that masks credentials and referee contact details.

    Reference tokens grant write access to a referee's questionnaire, so
    they are treated like passwords wherever they show up: in links, in
    key/value pairs and behind a Bearer prefix. Referee email addresses
    keep their domain (useful when debugging verification) but lose the
    local part.
    """

    SENSITIVE_PATTERNS: ClassVar[list[tuple[re.Pattern[str], str]]] = [
        (re.compile(r"(Bearer\s+)\S+", re.I), rf"\1{_REDACTED}"),
        (re.compile(r"(/reference/)[^\s/?\"']+", re.I), rf"\1{_REDACTED}"),
        (_secret_after("token"), rf"\1{_REDACTED}"),
        (_secret_after("api[_-]?key"), rf"\1{_REDACTED}"),
        (_secret_after("password"), rf"\1{_REDACTED}"),
        (re.compile(r"\b[\w.+-]+@([\w-]+(?:\.[\w-]+)+)"), r"***@\1"),
    ]

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        for pattern, replacement in self.SENSITIVE_PATTERNS:
            text = pattern.sub(replacement, text)
        return text


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
QUIET_LOGGERS = ("httpx", "httpcore", "multipart", "uvicorn.access")


def configure_logging(log_level: str = "INFO") -> None:
    """Install a single redacting stream handler on the root logger."""
    handler = logging.StreamHandler()
    handler.setFormatter(SanitizingFormatter(LOG_FORMAT))
    logging.basicConfig(level=log_level, handlers=[handler], force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger under the `refvalidator` namespace."""
    if not name.startswith("refvalidator"):
        name = f"refvalidator.{name}"
    return logging.getLogger(name)


configure_logging(settings.LOG_LEVEL)
