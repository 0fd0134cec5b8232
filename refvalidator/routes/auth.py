"""
Authentication endpoints backed by the configured auth provider.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body

from ..config import get_logger
from ..dependencies import AuthDep, PrincipalDep
from ..models import ApiResponse

logger = get_logger("routes.auth")

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", summary="Authenticate with provider-specific credentials")
async def login(auth: AuthDep, credentials: Optional[Dict[str, Any]] = Body(default=None)):
    user = await auth.authenticate(credentials or {})
    logger.info("Login | user=%s | provider=%s", user.id, auth.get_provider_name())
    return ApiResponse(data=user.model_dump(mode="json"), message="Authenticated")


@router.post("/logout", summary="End the current session")
async def logout(auth: AuthDep):
    await auth.logout()
    return ApiResponse(message="Logged out")


@router.get("/session", summary="Current session state")
async def session(auth: AuthDep):
    user = await auth.get_current_user()
    return ApiResponse(
        data={
            "authenticated": await auth.is_authenticated(),
            "user": user.model_dump(mode="json") if user else None,
        }
    )


@router.get("/me", summary="Principal for the bearer token")
async def me(user: PrincipalDep):
    return ApiResponse(data=user.model_dump(mode="json"))


@router.get("/oauth/{provider}", summary="OAuth redirect URL")
async def oauth_url(provider: str, auth: AuthDep):
    return ApiResponse(data={"provider": provider, "url": auth.get_auth_url(provider)})
