"""
Hacker News adapter.

Uses the public Firebase API: one call for the top story ids, then one
call per story. Only fixed tech vocabulary becomes a hashtag.
"""

import logging

from pydantic import TypeAdapter, ValidationError

from src.ingestion.base_adapter import BaseAdapter, HashtagEnricher
from src.ingestion.http_client import HTTPClient, HTTPClientError
from src.ingestion.payloads import HackerNewsItem
from src.ingestion.schemas import Hashtag, Platform
from src.keywords import TECH_RULES

logger = logging.getLogger(__name__)

HN_API_BASE = "https://hacker-news.firebaseio.com/v0"

_STORY_IDS = TypeAdapter(list[int])


class HackerNewsAdapter(BaseAdapter):
    """
    Hacker News adapter reading the first few top stories.

    A story that fails to load or validate is skipped. Failure to load
    the top story list fails the run.
    """

    enrichment_label = "Hacker News"
    category = "Technology"

    def __init__(
        self,
        enricher: HashtagEnricher | None = None,
        hashtag_limit: int = 12,
        story_count: int = 5,
        timeout: float = 10.0,
        item_timeout: float = 5.0,
        api_base: str = HN_API_BASE,
    ):
        super().__init__(enricher=enricher, hashtag_limit=hashtag_limit, timeout=timeout)
        self._story_count = story_count
        self._item_timeout = item_timeout
        self._api_base = api_base.rstrip("/")

    @property
    def platform(self) -> Platform:
        return Platform.HACKERNEWS

    async def _collect(self, client: HTTPClient) -> list[Hashtag]:
        data = await client.get_json(f"{self._api_base}/topstories.json")
        story_ids = _STORY_IDS.validate_python(data)

        hashtags: list[Hashtag] = []
        for story_id in story_ids[: self._story_count]:
            item = await self._fetch_item(client, story_id)
            if item is None or not item.title:
                continue
            hashtags.extend(self._hashtags_from_title(item.title, item.score, TECH_RULES))

        return hashtags

    async def _fetch_item(self, client: HTTPClient, story_id: int) -> HackerNewsItem | None:
        try:
            data = await client.get_json(
                f"{self._api_base}/item/{story_id}.json",
                timeout=self._item_timeout,
            )
            if data is None:
                return None
            return HackerNewsItem.model_validate(data)
        except (HTTPClientError, ValidationError, ValueError) as e:
            logger.warning(f"Skipping Hacker News item {story_id}: {e}")
            return None
