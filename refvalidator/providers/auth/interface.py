"""
Abstract interface for authentication providers.

Implement this to plug in any identity service (Clerk, Auth0, a custom
JWT issuer). The mock implementation is a development stand-in and must
never be used as a security boundary.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from ...models import User


class AuthProviderInterface(ABC):
    """
    Abstract interface for authentication providers.

    All implementations must provide:
    - Credential authentication and token verification
    - Session state (current principal, logout)
    - OAuth redirect URLs
    """

    @abstractmethod
    async def authenticate(self, credentials: Any) -> User:
        """
        Authenticate a principal from credentials.

        Args:
            credentials: Provider-specific credential payload

        Returns:
            The authenticated User

        Raises:
            AuthenticationFailedError: If the credentials are rejected
        """
        pass

    @abstractmethod
    async def verify_token(self, token: str) -> Optional[User]:
        """Return the principal a token belongs to, or None if it is not valid."""
        pass

    @abstractmethod
    async def logout(self) -> None:
        """End the current session."""
        pass

    @abstractmethod
    async def get_current_user(self) -> Optional[User]:
        """Get the principal of the current session, if any."""
        pass

    @abstractmethod
    async def is_authenticated(self) -> bool:
        """Check whether a session is active."""
        pass

    @abstractmethod
    def get_auth_url(self, provider: str) -> str:
        """Get the OAuth redirect URL for an identity provider (e.g. 'linkedin')."""
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Get the provider name (e.g., 'mock', 'clerk')."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider is ready to authenticate."""
        pass
