"""
Reddit adapter for trending post titles.

Reads the public JSON listings (no OAuth). Handles:
- Mirror fallback: each subreddit is tried against several base URLs
- Stickied post filtering
- Generic keyword extraction from titles, engagement = post score
"""

import logging

from pydantic import ValidationError

from src.config.settings import get_settings
from src.ingestion.base_adapter import BaseAdapter, HashtagEnricher
from src.ingestion.http_client import HTTPClient, HTTPClientError
from src.ingestion.payloads import RedditListing
from src.ingestion.schemas import Hashtag, Platform
from src.keywords import GENERIC_RULES

logger = logging.getLogger(__name__)


class RedditAdapter(BaseAdapter):
    """
    Reddit adapter fetching hot posts from the first configured subreddits.

    A subreddit is skipped only when every mirror fails for it. When every
    subreddit is skipped the run fails with HTTPClientError.
    """

    enrichment_label = "Reddit"
    category = "General"

    def __init__(
        self,
        enricher: HashtagEnricher | None = None,
        hashtag_limit: int = 12,
        subreddits: list[str] | None = None,
        mirrors: list[str] | None = None,
        user_agent: str | None = None,
        subreddit_count: int = 2,
        posts_per_subreddit: int = 10,
        timeout: float = 10.0,
    ):
        """
        Initialize Reddit adapter.

        Args:
            enricher: Optional enrichment service
            hashtag_limit: Hashtags kept after consolidation
            subreddits: Subreddits to read (first `subreddit_count` are used)
            mirrors: Base URLs tried in order for each subreddit
            user_agent: User agent string
            subreddit_count: How many subreddits to read per run
            posts_per_subreddit: Listing size
            timeout: Request timeout in seconds
        """
        super().__init__(enricher=enricher, hashtag_limit=hashtag_limit, timeout=timeout)

        settings = get_settings()
        self._subreddits = subreddits if subreddits is not None else settings.reddit_subreddits
        self._mirrors = mirrors if mirrors is not None else settings.reddit_mirrors
        self._user_agent = user_agent or settings.reddit_user_agent
        self._subreddit_count = subreddit_count
        self._posts_per_subreddit = posts_per_subreddit

    @property
    def platform(self) -> Platform:
        return Platform.REDDIT

    def _http_client(self) -> HTTPClient:
        return HTTPClient(timeout=self.timeout, headers={"User-Agent": self._user_agent})

    async def _collect(self, client: HTTPClient) -> list[Hashtag]:
        subreddits = self._subreddits[: self._subreddit_count]
        hashtags: list[Hashtag] = []
        failed: list[str] = []

        for subreddit in subreddits:
            listing = await self._fetch_listing(client, subreddit)
            if listing is None:
                failed.append(subreddit)
                continue

            for child in listing.data.children:
                post = child.data
                if post.stickied or not post.title:
                    continue
                hashtags.extend(self._hashtags_from_title(post.title, post.score, GENERIC_RULES))

            logger.debug(f"Fetched {len(listing.data.children)} posts from r/{subreddit}")

        if subreddits and len(failed) == len(subreddits):
            raise HTTPClientError(f"All Reddit mirrors failed for r/{', r/'.join(failed)}")

        return hashtags

    async def _fetch_listing(self, client: HTTPClient, subreddit: str) -> RedditListing | None:
        """Try each mirror in order; the first valid listing wins."""
        for mirror in self._mirrors:
            url = f"{mirror.rstrip('/')}/r/{subreddit}/hot.json"
            try:
                data = await client.get_json(url, params={"limit": self._posts_per_subreddit})
                return RedditListing.model_validate(data)
            except (HTTPClientError, ValidationError, ValueError) as e:
                logger.warning(f"Reddit mirror {mirror} failed for r/{subreddit}: {e}")
        return None
