"""
AI enrichment of trending hashtags.

Each hashtag gets a short explanation of why it is trending and how a
business could use it. Calls are strictly sequential with a fixed pause
between them to stay under the provider's rate limits.

Postures:
- strict: a hashtag whose analysis fails is dropped; a missing API key
  raises ConfigurationError and aborts the caller
- graceful: any failure produces a templated insight and the hashtag
  is kept
"""

import asyncio
import logging
import re
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Literal

from src.enrichment.errors import ConfigurationError, EnrichmentError, LLMError
from src.enrichment.llm_client import LLMClient
from src.enrichment.schemas import ChatMessage, HashtagInsight
from src.ingestion.schemas import Hashtag
from src.observability.metrics import get_metrics
from src.resilience.retry import SleepFunc

logger = logging.getLogger(__name__)

EnrichmentPosture = Literal["strict", "graceful"]

ANALYSIS_MAX_TOKENS = 250
ANALYSIS_TEMPERATURE = 0.8

SYSTEM_PROMPT = (
    "You are a real-time social media trend analyst. Explain why hashtags "
    "are trending right now, focusing on recent events, breaking news and "
    "viral content. Be specific about timing and current context."
)

_SECTION_RE = re.compile(
    r"^\s*\**\s*(CONTEXT|USAGE|CATEGORY)\s*\**\s*:\s*\**\s*(.*)$",
    re.IGNORECASE,
)


def _today() -> datetime:
    return datetime.now(timezone.utc)


def build_analysis_prompt(tag: str, platform_label: str, today: datetime) -> str:
    date_text = f"{today:%B} {today.day}, {today.year}"
    return (
        f"Current date: {date_text}\n\n"
        f'Analyze the hashtag "#{tag}", which is currently trending on {platform_label}.\n\n'
        f'1. Why is "#{tag}" trending right now? What events or topics are driving it?\n'
        "2. How should businesses use this hashtag in their social media content?\n"
        "3. Which short category label describes it?\n\n"
        "Focus on the past 24-48 hours. Answer in exactly this format:\n"
        "CONTEXT: <one or two sentences>\n"
        "USAGE: <one sentence>\n"
        "CATEGORY: <two to four words>"
    )


def template_insight(tag: str, platform_label: str) -> HashtagInsight:
    """Deterministic insight used for missing sections and graceful fallback."""
    return HashtagInsight(
        context=f"#{tag} is currently trending on {platform_label}.",
        usage=(
            f"Use #{tag} when your content relates to current trending topics. "
            "Perfect for engagement during peak discussion periods."
        ),
        description=f"Currently trending on {platform_label}",
    )


def parse_insight(text: str, tag: str, platform_label: str) -> HashtagInsight:
    """
    Split a CONTEXT/USAGE/CATEGORY answer into an insight.

    Lines that follow a section header continue that section. When the
    model ignores the format, the whole answer becomes the context.
    """
    sections: dict[str, list[str]] = {}
    current: str | None = None
    for line in text.splitlines():
        match = _SECTION_RE.match(line)
        if match:
            current = match.group(1).lower()
            sections[current] = [match.group(2).strip()]
        elif current is not None and line.strip():
            sections[current].append(line.strip())

    fallback = template_insight(tag, platform_label)
    joined = {key: " ".join(p for p in parts if p).strip("* ") for key, parts in sections.items()}

    return HashtagInsight(
        context=joined.get("context") or (text.strip() if not sections else fallback.context),
        usage=joined.get("usage") or fallback.usage,
        description=joined.get("category") or fallback.description,
    )


class EnrichmentService:
    """
    Sequential hashtag analysis through the LLM client.

    Usage:
        service = EnrichmentService(LLMClient.from_settings())
        hashtags = await service.enrich(hashtags, "Reddit")
    """

    def __init__(
        self,
        llm: LLMClient,
        posture: EnrichmentPosture = "strict",
        delay_seconds: float = 2.0,
        sleep: SleepFunc = asyncio.sleep,
        clock: Callable[[], datetime] = _today,
    ):
        """
        Initialize enrichment service.

        Args:
            llm: Chat-completion client.
            posture: "strict" drops failed hashtags, "graceful" templates them.
            delay_seconds: Pause between consecutive analysis calls.
            sleep: Awaitable sleep (injectable for tests).
            clock: Current date source for the prompt.
        """
        if posture not in ("strict", "graceful"):
            raise ValueError(f"Unknown enrichment posture: {posture}")
        self._llm = llm
        self.posture = posture
        self.delay_seconds = delay_seconds
        self._sleep = sleep
        self._clock = clock

    async def analyze(self, tag: str, platform_label: str) -> HashtagInsight:
        """
        Ask the LLM why `tag` is trending on `platform_label`.

        Raises:
            ConfigurationError: The LLM client has no API key.
            EnrichmentError: The call failed for any other provider reason.
        """
        messages = [
            ChatMessage(role="system", content=SYSTEM_PROMPT),
            ChatMessage(
                role="user",
                content=build_analysis_prompt(tag, platform_label, self._clock()),
            ),
        ]
        try:
            text = await self._llm.complete(
                messages,
                max_tokens=ANALYSIS_MAX_TOKENS,
                temperature=ANALYSIS_TEMPERATURE,
            )
        except ConfigurationError:
            raise
        except LLMError as e:
            raise EnrichmentError(tag, e) from e

        return parse_insight(text, tag, platform_label)

    async def enrich(self, hashtags: list[Hashtag], platform_label: str) -> list[Hashtag]:
        """
        Analyze each hashtag in order, one call at a time.

        Returns:
            New Hashtag instances with context/usage/description set. In
            strict posture, hashtags whose analysis failed are omitted.
        """
        metrics = get_metrics()
        results: list[Hashtag] = []

        logger.info(f"Enriching {len(hashtags)} {platform_label} hashtags ({self.posture})")

        for index, hashtag in enumerate(hashtags):
            if index > 0 and self.delay_seconds > 0:
                await self._sleep(self.delay_seconds)

            try:
                insight = await self.analyze(hashtag.tag, platform_label)
                metrics.record_enrichment("success")
            except LLMError as e:
                if self.posture == "strict":
                    metrics.record_enrichment("error")
                    if isinstance(e, ConfigurationError):
                        raise
                    logger.warning(f"Dropping #{hashtag.tag}: {e}")
                    continue
                metrics.record_enrichment("fallback")
                logger.warning(f"Using templated insight for #{hashtag.tag}: {e}")
                insight = template_insight(hashtag.tag, platform_label)

            results.append(hashtag.model_copy(update=insight.model_dump()))

        return results
