"""
Application state management using the provider registry.

The registry is built once in the FastAPI lifespan hook and stored on
`app.state`; request handlers reach providers only through it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from .config import Settings, get_logger, get_settings
from .exceptions import ConfigurationError
from .providers.auth import MockAuthProvider
from .providers.database import MockDatabaseProvider
from .providers.email import MockEmailProvider
from .providers.nlp import MockNLPProvider
from .providers.storage import MockStorageProvider
from .registry import ProviderCategory, ProviderRegistry

logger = get_logger("state")


def create_registry(settings: Optional[Settings] = None) -> ProviderRegistry:
    """
    Build a registry with the mock providers registered as "mock".

    Register additional providers on the returned registry to make them
    selectable through the *_PROVIDER settings, e.g.:

        registry.register(ProviderCategory.DATABASE, "supabase", SupabaseDatabaseProvider())
    """
    settings = settings or get_settings()
    registry = ProviderRegistry.from_settings(settings)

    registry.register(ProviderCategory.AUTH, "mock", MockAuthProvider())
    registry.register(
        ProviderCategory.DATABASE,
        "mock",
        MockDatabaseProvider(flag_score_threshold=settings.FLAG_SCORE_THRESHOLD),
    )
    registry.register(ProviderCategory.EMAIL, "mock", MockEmailProvider())
    registry.register(ProviderCategory.NLP, "mock", MockNLPProvider())
    registry.register(ProviderCategory.STORAGE, "mock", MockStorageProvider())

    logger.info("Providers initialized | available=%s", registry.list_available())
    logger.info("Default providers | %s", registry.default_providers())
    return registry


@dataclass
class AppState:
    """
    Central container for shared application resources.

    Attributes:
        settings: Settings the registry was built from
        registry: Provider registry used by every request handler
    """
    settings: Settings
    registry: ProviderRegistry

    @classmethod
    def create(
        cls,
        settings: Optional[Settings] = None,
        registry: Optional[ProviderRegistry] = None,
    ) -> "AppState":
        """
        Create application state.

        Args:
            settings: Settings to use (cached settings when omitted)
            registry: Pre-built registry (a mock-populated one when omitted)
        """
        settings = settings or get_settings()
        registry = registry or create_registry(settings)
        return cls(settings=settings, registry=registry)

    def provider_status(self) -> dict[str, dict[str, object]]:
        """Availability of each category's default provider."""
        status: dict[str, dict[str, object]] = {}
        for category in ProviderCategory:
            name = self.registry.configured_default(category)
            registered = self.registry.has_provider(category, name)
            available = registered and self.registry.resolve(category, name).is_available()
            status[category.value] = {
                "provider": name,
                "registered": registered,
                "available": available,
            }
        return status

    def is_ready(self) -> bool:
        """Ready when the default auth and database providers are usable."""
        status = self.provider_status()
        return bool(
            status[ProviderCategory.AUTH.value]["available"]
            and status[ProviderCategory.DATABASE.value]["available"]
        )


def get_app_state(request: Request) -> AppState:
    """FastAPI dependency to get application state."""
    if not hasattr(request.app.state, "app_state"):
        raise ConfigurationError("Application state not initialized")
    return request.app.state.app_state
