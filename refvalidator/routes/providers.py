"""
Provider diagnostics endpoint.

GET reports which providers are registered, which are the configured
defaults, and a snapshot of persistence statistics. POST dispatches a
small set of actions to the database provider so a deployment can be
smoke-tested without a frontend.

Usage:
    GET  /api/providers
    POST /api/providers
    {
        "action": "create-candidate",
        "data": {"email": "ada@example.com", "full_name": "Ada Lovelace"}
    }
"""
from typing import Any, Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PayloadValidationError

from ..config import get_logger
from ..dependencies import RegistryDep
from ..exceptions import RefCheckException, ValidationError
from ..models import ApiResponse, CandidateCreate, ErrorResponse, ProviderActionRequest

logger = get_logger("routes.providers")

router = APIRouter(prefix="/api/providers", tags=["Providers"])

SUPPORTED_ACTIONS = ("create-candidate", "get-candidate", "get-stats")


def _failure(exc: Exception, message: str) -> JSONResponse:
    if isinstance(exc, RefCheckException):
        status_code = exc.status_code
        error = exc.message
    elif isinstance(exc, PayloadValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
        error = str(exc)
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        error = str(exc) or "Unknown error occurred"

    body = ErrorResponse(error=error, message=message, error_type=type(exc).__name__)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.get(
    "",
    summary="Provider status",
    description="Registered providers, configured defaults and persistence statistics.",
)
async def get_provider_status(registry: RegistryDep):
    try:
        database = registry.database()
        stats = await database.get_dashboard_stats()
        sample = await database.list_candidates(limit=1)

        data: Dict[str, Any] = {
            "available_providers": registry.list_available(),
            "default_providers": registry.default_providers(),
            "system_stats": stats.model_dump(mode="json"),
            "sample_data": {
                "candidate": sample[0].model_dump(mode="json") if sample else None,
                "total_candidates": stats.total_candidates,
                "pending_references": stats.pending_references,
                "completed_references": stats.completed_references,
            },
        }
        return ApiResponse(data=data, message="Provider system is working correctly")
    except Exception as exc:
        logger.error("Provider status failed: %s", exc, exc_info=True)
        return _failure(exc, "Failed to get provider information")


@router.post(
    "",
    summary="Run a provider action",
    description=f"Dispatch one of {', '.join(SUPPORTED_ACTIONS)} to the database provider.",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def run_provider_action(body: ProviderActionRequest, registry: RegistryDep):
    try:
        database = registry.database(body.provider)

        if body.action == "create-candidate":
            candidate = await database.create_candidate(CandidateCreate.model_validate(body.data))
            logger.info("Diagnostic action created candidate %s", candidate.id)
            return ApiResponse(
                data=candidate.model_dump(mode="json"),
                message="Candidate created successfully",
            )

        if body.action == "get-candidate":
            candidate_id = body.data.get("id")
            if not candidate_id:
                raise ValidationError("data.id is required for get-candidate")
            candidate = await database.get_candidate(str(candidate_id))
            return ApiResponse(
                data=candidate.model_dump(mode="json") if candidate else None,
                message="Candidate retrieved successfully",
            )

        if body.action == "get-stats":
            stats = await database.get_dashboard_stats()
            return ApiResponse(
                data=stats.model_dump(mode="json"),
                message="Stats retrieved successfully",
            )

        logger.warning("Unknown provider action: %s", body.action)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(
                error="Invalid action",
                message=f"Please provide a valid action: {', '.join(SUPPORTED_ACTIONS)}",
            ).model_dump(),
        )
    except Exception as exc:
        logger.error("Provider action '%s' failed: %s", body.action, exc)
        return _failure(exc, "Failed to process request")
