"""
Errors raised by the registry, providers and services.

Every error carries the HTTP status it maps to, so route handlers can let
them propagate and the application-level handler renders the failure
envelope.

    RefCheckException (500)
    ├── ConfigurationError (500)
    ├── ValidationError (400)
    ├── AuthenticationFailedError (401)
    ├── NotFoundError (404)
    ├── ProviderNotFoundError (404)
    ├── ReferenceAlreadySubmittedError (409)
    └── ReferenceExpiredError (410)
"""
from __future__ import annotations

from typing import Any, Iterable


class RefCheckException(Exception):
    """
    Root of the service's error hierarchy.

    Subclasses set `default_message` and `default_status_code`; callers
    may override both per instance.

    Attributes:
        message: Text shown to API clients
        status_code: HTTP status the error maps to
        details: Extra context for clients, if any
        error_code: Stable machine-readable code (class name by default)
    """

    default_message: str = "Reference check failed"
    default_status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        details: str | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(message or self.default_message)
        self.message = str(self.args[0])
        self.status_code = status_code or self.default_status_code
        self.details = details
        self.error_code = error_code or type(self).__name__.upper()

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, status_code={self.status_code})"


class ConfigurationError(RefCheckException):
    """A provider or setting cannot be used as configured."""

    default_message = "Service is misconfigured"


# =============================================================================
# Client Errors (4xx)
# =============================================================================

class ValidationError(RefCheckException):
    """
    Raised when input violates a domain rule.

    Examples:
        - Referee attached to another candidate's employment
        - Unknown action on the diagnostic endpoint
    """

    default_message = "Request violates a domain rule"
    default_status_code = 400


class AuthenticationFailedError(RefCheckException):
    """Raised when credentials cannot be turned into a principal."""

    default_message = "Authentication failed"
    default_status_code = 401


class NotFoundError(RefCheckException):
    """Raised when an entity id is absent from the store."""

    default_status_code = 404

    def __init__(
        self,
        entity: str,
        entity_id: str,
        details: str | None = None,
        message: str | None = None,
    ) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(message or f"{entity} with id {entity_id} not found", details=details)


class ProviderNotFoundError(RefCheckException):
    """
    Raised when no provider is registered under the requested name.

    The message lists the names that are registered for the category so
    misconfigured *_PROVIDER variables are easy to spot.
    """

    default_status_code = 404

    def __init__(self, category: str, name: str, available: Iterable[str]) -> None:
        self.category = category
        self.name = name
        self.available = sorted(available)
        listing = ", ".join(self.available) if self.available else "none"
        super().__init__(
            f"{category} provider '{name}' not found. Available providers: {listing}"
        )


class ReferenceAlreadySubmittedError(RefCheckException):
    """Raised when a single-use reference token is used a second time."""

    default_message = "This reference has already been submitted"
    default_status_code = 409


class ReferenceExpiredError(RefCheckException):
    """Raised when a reference token is used after its expiry."""

    default_message = "This reference link has expired"
    default_status_code = 410
