"""
Health check endpoint.

Always answers 200; the integrations block reports which optional
credentials are configured so the UI can explain missing features.
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_app_settings
from src.api.models import HealthResponse, IntegrationStatus
from src.config.settings import Settings

router = APIRouter()

SERVICE_NAME = "socialtrend"
SERVICE_VERSION = "0.1.0"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Report service status and which integrations are configured.",
)
async def health_check(
    settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        environment=settings.environment,
        integrations=IntegrationStatus(
            ai=settings.ai_configured,
            youtube=settings.youtube_configured,
        ),
    )
