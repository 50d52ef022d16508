"""Trend analysis endpoints."""

import structlog
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_trend_service
from src.api.models import ErrorResponse, TrendsRequest, TrendsResponse
from src.enrichment.errors import ConfigurationError
from src.trends.service import TrendService, normalize_sources

router = APIRouter()
logger = structlog.get_logger(__name__)

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Unknown platform"},
    422: {"model": ErrorResponse, "description": "AI service not configured"},
    500: {"model": ErrorResponse, "description": "Trend analysis failed"},
}


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=error, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def _analyze(platforms: list[str] | None, service: TrendService):
    try:
        requested = normalize_sources(platforms)
    except ValueError as e:
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid platforms", str(e))

    try:
        snapshot = await service.get_trends(requested)
    except ConfigurationError as e:
        logger.warning("Trend analysis needs AI configuration", error=str(e))
        return _error(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "AI service configuration error",
            str(e),
        )
    except Exception as e:
        logger.error(
            "Trend analysis failed",
            platforms=[p.value for p in requested],
            error_type=type(e).__name__,
            error=str(e),
        )
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to analyze trends",
            str(e),
        )

    return TrendsResponse(trends=snapshot)


@router.get(
    "/trends",
    response_model=TrendsResponse,
    responses=_ERROR_RESPONSES,
    summary="Analyze trends",
    description="Aggregate hashtags and themes from the comma-separated platforms.",
)
async def get_trends(
    platforms: str | None = Query(
        default=None,
        description="Comma-separated sources, e.g. reddit,hackernews",
    ),
    service: TrendService = Depends(get_trend_service),
):
    requested = [p for p in platforms.split(",") if p.strip()] if platforms else None
    return await _analyze(requested, service)


@router.post(
    "/trends",
    response_model=TrendsResponse,
    responses=_ERROR_RESPONSES,
    summary="Analyze trends",
    description="Aggregate hashtags and themes from the platforms in the body.",
)
async def post_trends(
    body: TrendsRequest | None = None,
    service: TrendService = Depends(get_trend_service),
):
    return await _analyze(body.platforms if body else None, service)
