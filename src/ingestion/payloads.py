"""
Upstream response schemas.

Each external API response is validated here at the adapter boundary, so a
malformed payload fails inside the adapter with a pydantic ValidationError
instead of leaking missing fields deeper into the pipeline. Unknown fields
are ignored; only what the adapters read is modeled.
"""

from pydantic import BaseModel, Field


class RedditPost(BaseModel):
    """Fields read from a Reddit listing child's `data` object."""

    id: str = ""
    title: str = ""
    score: int = 0
    subreddit: str = ""
    stickied: bool = False


class RedditChild(BaseModel):
    kind: str = ""
    data: RedditPost


class RedditListingData(BaseModel):
    children: list[RedditChild] = Field(default_factory=list)


class RedditListing(BaseModel):
    """`/r/{subreddit}/hot.json` response."""

    data: RedditListingData


class HackerNewsItem(BaseModel):
    """`/v0/item/{id}.json` response. Deleted items come back without a title."""

    id: int
    type: str | None = None
    title: str | None = None
    score: int = 0
    time: int | None = None


class YouTubeSnippet(BaseModel):
    title: str = ""
    channel_title: str | None = Field(default=None, alias="channelTitle")


class YouTubeStatistics(BaseModel):
    # The API returns counts as strings; pydantic coerces them.
    view_count: int = Field(default=0, alias="viewCount")


class YouTubeVideo(BaseModel):
    id: str = ""
    snippet: YouTubeSnippet = Field(default_factory=YouTubeSnippet)
    statistics: YouTubeStatistics = Field(default_factory=YouTubeStatistics)


class YouTubeVideoList(BaseModel):
    """`/youtube/v3/videos?chart=mostPopular` response."""

    items: list[YouTubeVideo] = Field(default_factory=list)


class FeedItem(BaseModel):
    """One `<item>` scraped from an RSS feed."""

    title: str = Field(..., min_length=1)
    pub_date: str | None = None
    source: str | None = None
