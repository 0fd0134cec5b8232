"""
FastAPI dependencies for dependency injection.

Handlers receive providers resolved from the registry on AppState; no
handler constructs or imports a concrete provider class.

Usage:
    from refvalidator.dependencies import DatabaseDep

    @router.get("/endpoint")
    async def endpoint(database: DatabaseDep):
        ...
"""
from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, Request, status
from slowapi import Limiter

from .config import get_logger, settings
from .models import User
from .providers.auth.interface import AuthProviderInterface
from .providers.database.interface import DatabaseProviderInterface
from .providers.email.interface import EmailProviderInterface
from .providers.nlp.interface import NLPProviderInterface
from .registry import ProviderRegistry
from .state import AppState, get_app_state

logger = get_logger("dependencies")


# =============================================================================
# Client Information
# =============================================================================

def get_client_ip(request: Request) -> str:
    """
    Get the real client IP address.

    Checks X-Forwarded-For and X-Real-IP headers before falling
    back to the direct client IP.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    if request.client:
        return request.client.host

    return "unknown"


limiter = Limiter(key_func=get_client_ip, enabled=settings.RATE_LIMIT_ENABLED)


# =============================================================================
# Providers
# =============================================================================

def get_registry(state: AppState = Depends(get_app_state)) -> ProviderRegistry:
    return state.registry


def get_auth_provider(
    registry: ProviderRegistry = Depends(get_registry),
) -> AuthProviderInterface:
    return registry.auth()


def get_database_provider(
    registry: ProviderRegistry = Depends(get_registry),
) -> DatabaseProviderInterface:
    return registry.database()


def get_email_provider(
    registry: ProviderRegistry = Depends(get_registry),
) -> EmailProviderInterface:
    return registry.email()


def get_nlp_provider(
    registry: ProviderRegistry = Depends(get_registry),
) -> NLPProviderInterface:
    return registry.nlp()


# =============================================================================
# Authentication
# =============================================================================

async def get_current_principal(
    authorization: Optional[str] = Header(None),
    auth: AuthProviderInterface = Depends(get_auth_provider),
) -> User:
    """
    Resolve the bearer token to a principal through the auth provider.

    Raises:
        HTTPException: 401 when the token is missing or not recognized
    """
    token = authorization[7:].strip() if authorization and authorization.startswith("Bearer ") else None
    if not token:
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED,
            "Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await auth.verify_token(token)
    if user is None:
        logger.debug("Token rejected by %s auth provider", auth.get_provider_name())
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED,
            "Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


# =============================================================================
# Type Aliases for Common Dependencies
# =============================================================================

AppStateDep = Annotated[AppState, Depends(get_app_state)]
RegistryDep = Annotated[ProviderRegistry, Depends(get_registry)]
AuthDep = Annotated[AuthProviderInterface, Depends(get_auth_provider)]
DatabaseDep = Annotated[DatabaseProviderInterface, Depends(get_database_provider)]
EmailDep = Annotated[EmailProviderInterface, Depends(get_email_provider)]
NLPDep = Annotated[NLPProviderInterface, Depends(get_nlp_provider)]
PrincipalDep = Annotated[User, Depends(get_current_principal)]
