"""
RSS news adapter for Indian headline feeds.

Scrapes `<item>` blocks with regular expressions instead of an XML
parser, so a malformed feed still yields whatever items are readable.
Handles:
- CDATA unwrapping, HTML tag stripping and entity decoding in titles
- Recency-based engagement from pubDate (RFC 2822 or ISO 8601)
- A politeness delay between feeds

Only fixed news vocabulary becomes a hashtag, so most headlines yield
nothing. A run where no feed produced a parseable item returns an empty
result without raising.
"""

import asyncio
import html
import logging
import math
import re
from collections.abc import Callable
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

from bs4 import BeautifulSoup
from pydantic import ValidationError

from src.config.settings import get_settings
from src.ingestion.base_adapter import BaseAdapter, HashtagEnricher
from src.ingestion.http_client import HTTPClient, HTTPClientError
from src.ingestion.payloads import FeedItem
from src.ingestion.schemas import Hashtag, Platform
from src.keywords import NEWS_RULES
from src.resilience.retry import SleepFunc

logger = logging.getLogger(__name__)

NEWS_USER_AGENT = "Mozilla/5.0 (compatible; TrendAnalyzer/1.0)"

_ITEM_RE = re.compile(r"<item[\s\S]*?</item>", re.IGNORECASE)
_CDATA_RE = re.compile(r"<!\[CDATA\[|\]\]>")

# Floor for recency engagement; a fresh article scores 200
MIN_NEWS_ENGAGEMENT = 50
FRESH_NEWS_ENGAGEMENT = 200


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _tag_content(block: str, tag: str) -> str:
    match = re.search(rf"<{tag}[^>]*>([\s\S]*?)</{tag}>", block, re.IGNORECASE)
    return match.group(1).strip() if match else ""


def clean_title(raw: str) -> str:
    """Unwrap CDATA, strip HTML tags, decode entities and collapse whitespace."""
    text = _CDATA_RE.sub("", raw)
    if "<" in text:
        text = BeautifulSoup(text, "html.parser").get_text(separator=" ")
    text = html.unescape(text)
    return re.sub(r"\s+", " ", text).strip()


def parse_feed(xml: str, max_items: int = 5) -> list[FeedItem]:
    """
    Scrape up to `max_items` items from an RSS document.

    Items without a usable title are skipped.
    """
    items: list[FeedItem] = []
    for block in _ITEM_RE.findall(xml or "")[:max_items]:
        title = clean_title(_tag_content(block, "title"))
        pub_date = _tag_content(block, "pubDate") or None
        try:
            items.append(FeedItem(title=title, pub_date=pub_date))
        except ValidationError:
            logger.debug("Skipping RSS item without title")
    return items


def parse_pub_date(value: str | None) -> datetime | None:
    """Parse an RFC 2822 or ISO 8601 date. Naive results are taken as UTC."""
    if not value:
        return None

    parsed: datetime | None = None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        pass
    if parsed is None:
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def recency_engagement(pub_date: str | None, now: datetime) -> int:
    """
    max(50, floor(200 / max(1, age_hours))).

    age_hours defaults to 1 when the date is missing or unparseable, so
    undated items score as fresh.
    """
    published = parse_pub_date(pub_date)
    age_hours = 1.0
    if published is not None:
        age_hours = (now - published).total_seconds() / 3600.0
    return max(MIN_NEWS_ENGAGEMENT, math.floor(FRESH_NEWS_ENGAGEMENT / max(1.0, age_hours)))


class NewsAdapter(BaseAdapter):
    """
    RSS adapter reading the first configured feeds sequentially.

    A failing feed is logged and skipped; the run never fails because of
    a single feed.
    """

    enrichment_label = "Indian News"
    category = "News"

    def __init__(
        self,
        enricher: HashtagEnricher | None = None,
        hashtag_limit: int = 12,
        feeds: list[str] | None = None,
        feed_count: int = 2,
        items_per_feed: int = 3,
        feed_delay_seconds: float = 0.5,
        timeout: float = 8.0,
        clock: Callable[[], datetime] = _utcnow,
        sleep: SleepFunc = asyncio.sleep,
    ):
        """
        Initialize news adapter.

        Args:
            enricher: Optional enrichment service
            hashtag_limit: Hashtags kept after consolidation
            feeds: RSS feed URLs (first `feed_count` are used)
            feed_count: Feeds read per run
            items_per_feed: Items used from each feed
            feed_delay_seconds: Pause between feed requests
            timeout: Request timeout in seconds
            clock: Returns the current aware datetime (injectable for tests)
            sleep: Awaitable sleep (injectable for tests)
        """
        super().__init__(enricher=enricher, hashtag_limit=hashtag_limit, timeout=timeout)
        self._feeds = feeds if feeds is not None else get_settings().news_feeds
        self._feed_count = feed_count
        self._items_per_feed = items_per_feed
        self._feed_delay = feed_delay_seconds
        self._clock = clock
        self._sleep = sleep

    @property
    def platform(self) -> Platform:
        return Platform.NEWS

    def _http_client(self) -> HTTPClient:
        return HTTPClient(timeout=self.timeout, headers={"User-Agent": NEWS_USER_AGENT})

    async def _collect(self, client: HTTPClient) -> list[Hashtag]:
        items: list[FeedItem] = []
        for index, feed_url in enumerate(self._feeds[: self._feed_count]):
            if index > 0 and self._feed_delay > 0:
                await self._sleep(self._feed_delay)
            try:
                response = await client.get(feed_url)
            except HTTPClientError as e:
                logger.warning(f"News feed error for {feed_url}: {e}")
                continue

            parsed = parse_feed(response.text)
            for item in parsed[: self._items_per_feed]:
                items.append(item.model_copy(update={"source": feed_url}))

        if not items:
            logger.info("No parseable news items")
            return []

        now = self._clock()
        hashtags: list[Hashtag] = []
        for item in items:
            engagement = recency_engagement(item.pub_date, now)
            hashtags.extend(self._hashtags_from_title(item.title, engagement, NEWS_RULES))
        return hashtags
