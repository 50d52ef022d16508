"""Tests for trend source adapters."""

from datetime import datetime, timezone

import httpx
import pytest
import respx

from src.ingestion.hackernews_adapter import HackerNewsAdapter
from src.ingestion.http_client import HTTPClientError
from src.ingestion.news_adapter import NewsAdapter
from src.ingestion.reddit_adapter import RedditAdapter
from src.ingestion.schemas import Hashtag, Platform
from src.ingestion.youtube_adapter import YOUTUBE_VIDEOS_URL, YouTubeAdapter

HN = "https://hn.example.com/v0"
MIRRORS = ["https://www.reddit.com", "https://old.reddit.com"]
NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def _listing(*posts: dict) -> dict:
    return {"kind": "Listing", "data": {"children": [{"kind": "t3", "data": p} for p in posts]}}


class StubEnricher:
    """Enricher that annotates every hashtag and records its calls."""

    def __init__(self, drop: set[str] | None = None, error: Exception | None = None):
        self.drop = drop or set()
        self.error = error
        self.calls: list[tuple[list[str], str]] = []

    async def enrich(self, hashtags: list[Hashtag], platform_label: str) -> list[Hashtag]:
        self.calls.append(([h.tag for h in hashtags], platform_label))
        if self.error is not None:
            raise self.error
        return [
            h.model_copy(update={"context": f"{h.tag} context"})
            for h in hashtags
            if h.tag not in self.drop
        ]


class TestRedditAdapter:
    """Tests for RedditAdapter."""

    def _adapter(self, **kwargs) -> RedditAdapter:
        defaults = dict(
            subreddits=["all", "popular"],
            mirrors=MIRRORS,
            user_agent="socialtrend-test",
            subreddit_count=1,
        )
        defaults.update(kwargs)
        return RedditAdapter(**defaults)

    @pytest.mark.asyncio
    @respx.mock
    async def test_keywords_from_titles(self):
        """Two hot posts yield their first two long keywords, scored by post score."""
        route = respx.get("https://www.reddit.com/r/all/hot.json").mock(
            return_value=httpx.Response(200, json=_listing(
                {"title": "Massive breakthrough announced today", "score": 100},
                {"title": "breaking news update", "score": 50},
            ))
        )

        result = await self._adapter().fetch_trends()

        assert [(h.tag, h.engagement) for h in result.hashtags] == [
            ("massive", 100),
            ("breakthrough", 100),
            ("breaking", 50),
            ("news", 50),
        ]
        assert all(h.platform == Platform.REDDIT for h in result.hashtags)
        assert result.themes[0].name == "General"
        assert result.themes[0].weight == pytest.approx(0.3)

        request = route.calls.last.request
        assert request.headers["User-Agent"] == "socialtrend-test"
        assert request.url.params["limit"] == "10"

    @pytest.mark.asyncio
    @respx.mock
    async def test_stickied_posts_skipped(self):
        """Stickied posts never contribute hashtags."""
        respx.get("https://www.reddit.com/r/all/hot.json").mock(
            return_value=httpx.Response(200, json=_listing(
                {"title": "Moderator announcement rules", "score": 9999, "stickied": True},
                {"title": "Volcano eruption footage", "score": 10},
            ))
        )

        result = await self._adapter().fetch_trends()

        assert [h.tag for h in result.hashtags] == ["volcano", "eruption"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_mirror_fallback(self):
        """A failing mirror falls through to the next one."""
        primary = respx.get("https://www.reddit.com/r/all/hot.json").mock(
            return_value=httpx.Response(503)
        )
        fallback = respx.get("https://old.reddit.com/r/all/hot.json").mock(
            return_value=httpx.Response(200, json=_listing({"title": "Quantum computing milestone", "score": 7}))
        )

        result = await self._adapter().fetch_trends()

        assert primary.call_count == 1
        assert fallback.call_count == 1
        assert [h.tag for h in result.hashtags] == ["quantum", "computing"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_listing_tries_next_mirror(self):
        """A 200 with an unexpected body counts as a mirror failure."""
        respx.get("https://www.reddit.com/r/all/hot.json").mock(
            return_value=httpx.Response(200, json={"error": "blocked"})
        )
        respx.get("https://old.reddit.com/r/all/hot.json").mock(
            return_value=httpx.Response(200, json=_listing({"title": "Election results tonight", "score": 3}))
        )

        result = await self._adapter().fetch_trends()

        assert [h.tag for h in result.hashtags] == ["election", "results"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_all_mirrors_failing_raises(self):
        """The run fails when no subreddit could be read."""
        respx.get(url__regex=r"https://(www|old)\.reddit\.com/r/all/hot\.json").mock(
            return_value=httpx.Response(500)
        )

        with pytest.raises(HTTPClientError):
            await self._adapter().fetch_trends()

    @pytest.mark.asyncio
    @respx.mock
    async def test_one_subreddit_failing_tolerated(self):
        """A subreddit with no working mirror is skipped when others succeed."""
        respx.get(url__regex=r"https://(www|old)\.reddit\.com/r/all/hot\.json").mock(
            return_value=httpx.Response(500)
        )
        respx.get("https://www.reddit.com/r/popular/hot.json").mock(
            return_value=httpx.Response(200, json=_listing({"title": "Marathon record broken", "score": 40}))
        )

        result = await self._adapter(subreddit_count=2).fetch_trends()

        assert [h.tag for h in result.hashtags] == ["marathon", "record"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_enricher_receives_capped_hashtags(self):
        """Only the capped hashtags are enriched, with the Reddit label."""
        respx.get("https://www.reddit.com/r/all/hot.json").mock(
            return_value=httpx.Response(200, json=_listing(
                {"title": "Massive breakthrough announced today", "score": 100},
                {"title": "breaking news update", "score": 50},
            ))
        )
        enricher = StubEnricher(drop={"breakthrough"})
        adapter = self._adapter(enricher=enricher, hashtag_limit=3)

        result = await adapter.fetch_trends()

        assert enricher.calls == [(["massive", "breakthrough", "breaking"], "Reddit")]
        assert [h.tag for h in result.hashtags] == ["massive", "breaking"]
        assert all(h.context for h in result.hashtags)
        assert adapter.stats.kept == 3
        assert adapter.stats.dropped == 1
        assert adapter.stats.enriched == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_enricher_failure_propagates(self):
        """Enrichment errors fail the adapter run."""
        respx.get("https://www.reddit.com/r/all/hot.json").mock(
            return_value=httpx.Response(200, json=_listing({"title": "Volcano eruption", "score": 1}))
        )
        adapter = self._adapter(enricher=StubEnricher(error=RuntimeError("llm down")))

        with pytest.raises(RuntimeError):
            await adapter.fetch_trends()


class TestHackerNewsAdapter:
    """Tests for HackerNewsAdapter."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_tech_vocabulary_only(self):
        """Only the first tech vocabulary word of each story becomes a hashtag."""
        respx.get(f"{HN}/topstories.json").mock(return_value=httpx.Response(200, json=[1, 2]))
        respx.get(f"{HN}/item/1.json").mock(
            return_value=httpx.Response(200, json={"id": 1, "title": "New AI model and API", "score": 300})
        )
        respx.get(f"{HN}/item/2.json").mock(
            return_value=httpx.Response(200, json={"id": 2, "title": "A history of typography", "score": 80})
        )

        result = await HackerNewsAdapter(api_base=HN).fetch_trends()

        assert [(h.tag, h.engagement, h.category) for h in result.hashtags] == [
            ("ai", 300, "Technology"),
        ]
        assert result.themes[0].name == "Technology"
        assert result.themes[0].weight == pytest.approx(0.3)

    @pytest.mark.asyncio
    @respx.mock
    async def test_bad_items_skipped(self):
        """Failed, null and deleted items are skipped."""
        respx.get(f"{HN}/topstories.json").mock(return_value=httpx.Response(200, json=[1, 2, 3, 4]))
        respx.get(f"{HN}/item/1.json").mock(return_value=httpx.Response(500))
        respx.get(f"{HN}/item/2.json").mock(return_value=httpx.Response(200, json=None))
        respx.get(f"{HN}/item/3.json").mock(return_value=httpx.Response(200, json={"id": 3, "score": 5}))
        respx.get(f"{HN}/item/4.json").mock(
            return_value=httpx.Response(200, json={"id": 4, "title": "Crypto exchange collapses", "score": 42})
        )

        result = await HackerNewsAdapter(api_base=HN).fetch_trends()

        assert [h.tag for h in result.hashtags] == ["crypto"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_story_count_limits_requests(self):
        """Only the first story_count items are fetched."""
        respx.get(f"{HN}/topstories.json").mock(return_value=httpx.Response(200, json=list(range(1, 20))))
        items = respx.get(url__regex=rf"{HN}/item/\d+\.json").mock(
            return_value=httpx.Response(200, json={"id": 1, "title": "Web dev tips", "score": 1})
        )

        await HackerNewsAdapter(api_base=HN, story_count=5).fetch_trends()

        assert items.call_count == 5

    @pytest.mark.asyncio
    @respx.mock
    async def test_top_stories_failure_raises(self):
        """Failure to load the story list fails the run."""
        respx.get(f"{HN}/topstories.json").mock(return_value=httpx.Response(503))

        with pytest.raises(HTTPClientError):
            await HackerNewsAdapter(api_base=HN).fetch_trends()


class TestYouTubeAdapter:
    """Tests for YouTubeAdapter."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_no_api_key_returns_empty(self):
        """Without a key there are no trends and no network calls."""
        result = await YouTubeAdapter(api_key="").fetch_trends()

        assert result.hashtags == []
        assert result.themes == []
        assert respx.calls.call_count == 0

    @pytest.mark.asyncio
    @respx.mock
    async def test_views_in_thousands(self):
        """Engagement is the view count divided by 1000."""
        route = respx.get(YOUTUBE_VIDEOS_URL).mock(
            return_value=httpx.Response(200, json={
                "items": [
                    {
                        "id": "v1",
                        "snippet": {"title": "Spectacular volcano eruption footage"},
                        "statistics": {"viewCount": "2500000"},
                    },
                ]
            })
        )

        result = await YouTubeAdapter(api_key="yt-key", region_code="IN").fetch_trends()

        assert [(h.tag, h.engagement) for h in result.hashtags] == [
            ("spectacular", 2500),
            ("volcano", 2500),
        ]
        assert result.themes[0].name == "Entertainment"
        assert result.themes[0].weight == 1.0

        params = route.calls.last.request.url.params
        assert params["chart"] == "mostPopular"
        assert params["regionCode"] == "IN"
        assert params["key"] == "yt-key"

    @pytest.mark.asyncio
    @respx.mock
    async def test_api_error_raises(self):
        """A failing API call fails the run."""
        respx.get(YOUTUBE_VIDEOS_URL).mock(return_value=httpx.Response(403))

        with pytest.raises(HTTPClientError):
            await YouTubeAdapter(api_key="yt-key").fetch_trends()


class TestNewsAdapter:
    """Tests for NewsAdapter."""

    FEEDS = ["https://news.example.com/a.rss", "https://news.example.com/b.rss"]

    def _adapter(self, recording_sleep, **kwargs) -> NewsAdapter:
        return NewsAdapter(feeds=self.FEEDS, clock=lambda: NOW, sleep=recording_sleep, **kwargs)

    @pytest.mark.asyncio
    @respx.mock
    async def test_vocabulary_hashtags_with_recency(self, recording_sleep):
        """Headline vocabulary becomes hashtags scored by article age."""
        respx.get(self.FEEDS[0]).mock(return_value=httpx.Response(200, text="""
            <rss><channel>
            <item><title>Delhi and Mumbai brace for rain</title>
            <pubDate>Sun, 18 Oct 2026 10:00:00 GMT</pubDate></item>
            <item><title>Cricket: India win</title></item>
            </channel></rss>
        """))
        respx.get(self.FEEDS[1]).mock(return_value=httpx.Response(500))

        result = await self._adapter(recording_sleep).fetch_trends()

        assert [(h.tag, h.engagement) for h in result.hashtags] == [
            ("cricket", 200),
            ("india", 200),
            ("delhi", 100),
            ("mumbai", 100),
        ]
        assert result.themes[0].name == "News"
        assert result.themes[0].weight == pytest.approx(0.6)
        assert recording_sleep.calls == [0.5]

    @pytest.mark.asyncio
    @respx.mock
    async def test_no_parseable_items_returns_empty(self, recording_sleep):
        """Feeds without items yield an empty result instead of failing."""
        respx.get(self.FEEDS[0]).mock(return_value=httpx.Response(200, text="<rss></rss>"))
        respx.get(self.FEEDS[1]).mock(return_value=httpx.Response(200, text="not xml at all"))
        enricher = StubEnricher()

        result = await self._adapter(recording_sleep, enricher=enricher).fetch_trends()

        assert result.hashtags == []
        assert result.themes == []
        assert enricher.calls == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_all_feeds_failing_returns_empty(self, recording_sleep):
        """Feed errors are skipped, never raised."""
        respx.get(self.FEEDS[0]).mock(side_effect=httpx.ConnectError("refused"))
        respx.get(self.FEEDS[1]).mock(return_value=httpx.Response(404))

        result = await self._adapter(recording_sleep).fetch_trends()

        assert result.is_empty

    @pytest.mark.asyncio
    @respx.mock
    async def test_items_per_feed_limit(self, recording_sleep):
        """Only the first items of each feed are used."""
        items = "".join(
            f"<item><title>{word} update</title></item>"
            for word in ["Delhi", "Mumbai", "Chennai", "Kolkata"]
        )
        respx.get(self.FEEDS[0]).mock(return_value=httpx.Response(200, text=f"<rss>{items}</rss>"))

        result = await self._adapter(recording_sleep, feed_count=1).fetch_trends()

        assert sorted(h.tag for h in result.hashtags) == ["chennai", "delhi", "mumbai"]
        assert recording_sleep.calls == []
