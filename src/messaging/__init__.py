"""Platform-specific post drafting from selected trends."""

from src.messaging.business import classify_business
from src.messaging.errors import MessageGenerationError, NoTrendsSelectedError
from src.messaging.platforms import PLATFORM_SPECS, TARGET_PLATFORMS, PlatformSpec, TargetPlatform
from src.messaging.schemas import BusinessProfile, GeneratedMessage, SelectedTrends
from src.messaging.scoring import engagement_potential, score_hashtag, select_hashtags
from src.messaging.service import MessageService
from src.messaging.text import clean_generated_text

__all__ = [
    "MessageService",
    "BusinessProfile",
    "SelectedTrends",
    "GeneratedMessage",
    "TargetPlatform",
    "PlatformSpec",
    "PLATFORM_SPECS",
    "TARGET_PLATFORMS",
    "MessageGenerationError",
    "NoTrendsSelectedError",
    "classify_business",
    "clean_generated_text",
    "engagement_potential",
    "score_hashtag",
    "select_hashtags",
]
