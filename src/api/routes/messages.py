"""Message generation endpoint."""

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_message_service
from src.api.models import ErrorResponse, GenerateMessageRequest, GenerateMessageResponse
from src.enrichment.errors import ConfigurationError
from src.messaging.errors import MessageGenerationError, NoTrendsSelectedError
from src.messaging.schemas import BusinessProfile
from src.messaging.service import MessageService

router = APIRouter()
logger = structlog.get_logger(__name__)

REQUIRED_FIELDS = ["businessName", "tone", "selectedTrends"]


def _error(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/generate-message",
    response_model=GenerateMessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing fields or no trends selected"},
        422: {"model": ErrorResponse, "description": "AI service not configured"},
        500: {"model": ErrorResponse, "description": "AI text generation failed"},
    },
    summary="Draft social posts",
    description="Draft one post per platform (Twitter, Instagram, LinkedIn, Facebook).",
)
async def generate_message(
    body: GenerateMessageRequest,
    service: MessageService = Depends(get_message_service),
):
    business = BusinessProfile(
        name=body.business_name,
        type=body.business_type or "other",
        tone=body.tone,
    )

    try:
        messages = await service.generate(business, body.selected_trends)
    except NoTrendsSelectedError as e:
        return _error(
            status.HTTP_400_BAD_REQUEST,
            ErrorResponse(error="No trends selected", message=str(e)),
        )
    except ConfigurationError as e:
        return _error(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            ErrorResponse(
                error="AI service configuration error",
                message="AI text generation service is not properly configured",
                details=str(e),
            ),
        )
    except MessageGenerationError as e:
        logger.error("AI text generation failed", platform=e.platform, error=str(e))
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(error="AI text generation failed", message=str(e)),
        )
    except Exception as e:
        logger.error("Message generation failed", error_type=type(e).__name__, error=str(e))
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(error="Failed to generate messages", message=str(e)),
        )

    logger.info("Messages generated", business=business.name, count=len(messages))
    return GenerateMessageResponse(messages=messages)
