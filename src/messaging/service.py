"""
Drafting platform-specific posts from selected trends.

For each target platform, in order: pick the best-fitting hashtags,
prompt the LLM, clean the answer into the platform's length budget and
score it. Generation is all-or-nothing: the first failed platform aborts
the request and no partial list is returned.
"""

import logging

from src.config.settings import Settings, get_settings
from src.enrichment.errors import ConfigurationError, LLMError
from src.enrichment.llm_client import LLMClient
from src.enrichment.schemas import ChatMessage
from src.ingestion.schemas import Theme
from src.messaging.business import classify_business
from src.messaging.errors import MessageGenerationError, NoTrendsSelectedError
from src.messaging.platforms import (
    CREATIVE_TONES,
    PLATFORM_SPECS,
    TARGET_PLATFORMS,
    PlatformSpec,
    TargetPlatform,
    tone_description,
)
from src.messaging.schemas import BusinessProfile, GeneratedMessage, SelectedTrends
from src.messaging.scoring import engagement_potential, select_hashtags
from src.messaging.text import clean_generated_text
from src.observability.metrics import get_metrics

logger = logging.getLogger(__name__)

DEFAULT_THEME = "general"

# Sampling parameters shared by every platform
SAMPLING = {"top_p": 0.9, "frequency_penalty": 0.2, "presence_penalty": 0.1}
MAX_COMPLETION_TOKENS = 400


def top_theme(themes: list[Theme]) -> str:
    """Name of the highest-weight theme; first wins ties."""
    if not themes:
        return DEFAULT_THEME
    return max(themes, key=lambda t: t.weight).name


def build_message_prompt(
    business: BusinessProfile,
    business_category: str,
    spec: PlatformSpec,
    theme: str,
    hashtags: list[str],
) -> str:
    hashtag_list = ", ".join(hashtags) if hashtags else "none"
    return (
        f"Create a {business.tone} social media post for {spec.platform.value} "
        f"about {business.name}, a {business_category} business.\n\n"
        "Context:\n"
        f"- Business: {business.name} ({business_category})\n"
        f"- Theme: {theme}\n"
        f"- Tone: {tone_description(business.tone)}\n"
        f"- Platform: {spec.platform.value} ({spec.description})\n"
        f"- Trending topics: {hashtag_list}\n\n"
        "Requirements:\n"
        f"- {spec.features}\n"
        f"- Include relevant hashtags from: {hashtag_list}\n"
        f"- Match the {business.tone} tone exactly\n"
        f"- Connect {business.name} to the {theme} theme naturally\n"
        f"- Maximum length: {spec.max_length} characters\n\n"
        "Generate only the social media post content:"
    )


class MessageService:
    """
    Drafts one post per target platform.

    Usage:
        service = MessageService(LLMClient.from_settings())
        messages = await service.generate(business, selected)
    """

    def __init__(
        self,
        llm: LLMClient,
        default_model: str = "llama3-8b-8192",
        creative_model: str = "llama3-70b-8192",
        platforms: tuple[TargetPlatform, ...] = TARGET_PLATFORMS,
    ):
        self._llm = llm
        self.default_model = default_model
        self.creative_model = creative_model
        self.platforms = platforms

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        llm: LLMClient | None = None,
    ) -> "MessageService":
        settings = settings or get_settings()
        return cls(
            llm or LLMClient.from_settings(settings),
            default_model=settings.llm_default_model,
            creative_model=settings.llm_creative_model,
        )

    def model_for(self, tone: str) -> str:
        """Larger model for playful tones, default model otherwise."""
        return self.creative_model if tone.lower() in CREATIVE_TONES else self.default_model

    @staticmethod
    def temperature_for(tone: str) -> float:
        return 0.3 if tone.lower() == "professional" else 0.8

    async def generate(
        self,
        business: BusinessProfile,
        selected: SelectedTrends,
    ) -> list[GeneratedMessage]:
        """
        Draft a message for every target platform.

        Raises:
            NoTrendsSelectedError: Neither hashtags nor themes were given.
            ConfigurationError: The LLM client has no API key.
            MessageGenerationError: Any platform's LLM call failed.
        """
        if selected.is_empty:
            raise NoTrendsSelectedError()

        category = classify_business(business.type)
        theme = top_theme(selected.themes)
        trending_tags = [h.tag for h in selected.hashtags]
        metrics = get_metrics()

        logger.info(
            f"Generating messages for {business.name}: category={category}, "
            f"tone={business.tone}, hashtags={len(selected.hashtags)}, "
            f"themes={len(selected.themes)}"
        )

        messages: list[GeneratedMessage] = []
        for platform in self.platforms:
            spec = PLATFORM_SPECS[platform]
            chosen = select_hashtags(
                selected.hashtags, platform, theme, category, spec.hashtag_limit
            )
            tags = [h.tag for h in chosen]
            model = self.model_for(business.tone)

            content = await self._draft(business, category, spec, theme, tags, model)

            messages.append(
                GeneratedMessage(
                    platform=platform,
                    content=content,
                    hashtags=tags,
                    engagement_potential=engagement_potential(content, platform, trending_tags),
                    theme=theme,
                    model=model,
                )
            )
            metrics.record_message(platform.value)

        return messages

    async def _draft(
        self,
        business: BusinessProfile,
        category: str,
        spec: PlatformSpec,
        theme: str,
        tags: list[str],
        model: str,
    ) -> str:
        system = (
            f"You are an expert social media content creator specializing in "
            f"{business.tone} content. Write engaging, original, platform-specific "
            f"posts that include trending hashtags naturally."
        )
        messages = [
            ChatMessage(role="system", content=system),
            ChatMessage(
                role="user",
                content=build_message_prompt(business, category, spec, theme, tags),
            ),
        ]

        try:
            raw = await self._llm.complete(
                messages,
                model=model,
                max_tokens=min(spec.max_length * 2, MAX_COMPLETION_TOKENS),
                temperature=self.temperature_for(business.tone),
                **SAMPLING,
            )
        except ConfigurationError:
            raise
        except LLMError as e:
            logger.error(f"Message generation failed for {spec.platform.value}: {e}")
            raise MessageGenerationError(
                f"AI text generation failed for {spec.platform.value}: {e}",
                platform=spec.platform.value,
            ) from e

        return clean_generated_text(raw, spec.max_length)
