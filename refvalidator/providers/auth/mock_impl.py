"""
Mock Authentication Provider implementation.

Development stand-in only. Any credentials authenticate as the seeded
candidate, and exactly one literal token verifies. Never use this
provider as a security boundary.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from ...config import get_logger
from ...exceptions import AuthenticationFailedError
from ...models import User, UserRole
from .interface import AuthProviderInterface

logger = get_logger("auth.mock")

MOCK_VALID_TOKEN = "valid-token"
DEFAULT_USER_ID = "1"


class MockAuthProvider(AuthProviderInterface):
    """
    Canned-response auth provider with three seeded principals
    (candidate, admin, referee).
    """

    def __init__(self):
        self._current_user: Optional[User] = None
        self._users: Dict[str, User] = {}
        for user in (
            User(
                id="1",
                email="candidate@example.com",
                full_name="John Doe",
                role=UserRole.CANDIDATE,
                linkedin_id="linkedin-123",
            ),
            User(
                id="2",
                email="admin@example.com",
                full_name="Admin User",
                role=UserRole.ADMIN,
            ),
            User(
                id="3",
                email="referee@example.com",
                full_name="Jane Smith",
                role=UserRole.REFEREE,
            ),
        ):
            self._users[user.id] = user

    async def authenticate(self, credentials: Any) -> User:
        # Credentials are ignored; every login becomes the seeded candidate.
        user = self._users.get(DEFAULT_USER_ID)
        if user is None:
            raise AuthenticationFailedError(details="Default mock user is not registered")
        self._current_user = user
        logger.info("Mock login as user %s (%s)", user.id, user.role.value)
        return user

    async def verify_token(self, token: str) -> Optional[User]:
        if token == MOCK_VALID_TOKEN:
            return self._users.get(DEFAULT_USER_ID)
        return None

    async def logout(self) -> None:
        self._current_user = None

    async def get_current_user(self) -> Optional[User]:
        return self._current_user

    async def is_authenticated(self) -> bool:
        return self._current_user is not None

    def get_auth_url(self, provider: str) -> str:
        return f"/auth/{provider}?mock=true"

    # =========================================================================
    # Mock-specific helpers
    # =========================================================================

    def set_current_user(self, user: Optional[User]) -> None:
        self._current_user = user

    def add_user(self, user: User) -> None:
        self._users[user.id] = user

    def remove_user(self, user_id: str) -> None:
        self._users.pop(user_id, None)

    def list_users(self) -> List[User]:
        return list(self._users.values())

    def get_provider_name(self) -> str:
        return "mock"

    def is_available(self) -> bool:
        return True
