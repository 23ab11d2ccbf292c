"""Liveness endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from speech_coach.dependencies import ConfigDep
from speech_coach.response_models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health(config: ConfigDep) -> HealthResponse:
    """Reports that the service is up and whether the API key is configured."""
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat(),
        api_key="Set" if config.assemblyai.api_key else "Not set",
    )
