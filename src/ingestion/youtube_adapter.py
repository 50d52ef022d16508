"""
YouTube Data API adapter for most-popular videos.

Requires YOUTUBE_API_KEY. Without a key the adapter returns an empty
result instead of failing, so requesting YouTube never breaks a trend
fetch on an unconfigured deployment.
"""

import logging

from src.config.settings import get_settings
from src.ingestion.base_adapter import BaseAdapter, HashtagEnricher
from src.ingestion.http_client import HTTPClient
from src.ingestion.payloads import YouTubeVideoList
from src.ingestion.schemas import Hashtag, Platform, SourceTrends
from src.keywords import GENERIC_RULES

logger = logging.getLogger(__name__)

YOUTUBE_VIDEOS_URL = "https://www.googleapis.com/youtube/v3/videos"


class YouTubeAdapter(BaseAdapter):
    """
    YouTube adapter: chart=mostPopular for one region.

    Engagement is views in thousands.
    """

    enrichment_label = "YouTube"
    category = "Entertainment"

    def __init__(
        self,
        enricher: HashtagEnricher | None = None,
        hashtag_limit: int = 12,
        api_key: str | None = None,
        region_code: str | None = None,
        max_results: int = 10,
        timeout: float = 10.0,
    ):
        super().__init__(enricher=enricher, hashtag_limit=hashtag_limit, timeout=timeout)

        settings = get_settings()
        self._api_key = api_key if api_key is not None else settings.youtube_api_key
        self._region_code = region_code or settings.youtube_region_code
        self._max_results = max_results

        if not self._api_key:
            logger.warning("YouTube API key not configured. Adapter will return no trends.")

    @property
    def platform(self) -> Platform:
        return Platform.YOUTUBE

    async def fetch_trends(self) -> SourceTrends:
        if not self._api_key:
            return SourceTrends()
        return await super().fetch_trends()

    async def _collect(self, client: HTTPClient) -> list[Hashtag]:
        data = await client.get_json(
            YOUTUBE_VIDEOS_URL,
            params={
                "part": "snippet,statistics",
                "chart": "mostPopular",
                "regionCode": self._region_code,
                "maxResults": self._max_results,
                "key": self._api_key,
            },
        )
        videos = YouTubeVideoList.model_validate(data)

        hashtags: list[Hashtag] = []
        for video in videos.items:
            engagement = video.statistics.view_count // 1000
            hashtags.extend(
                self._hashtags_from_title(video.snippet.title, engagement, GENERIC_RULES)
            )
        return hashtags
