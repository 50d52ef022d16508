"""
Hashtag consolidation and theme extraction.

Both functions are pure: they build new model instances and never mutate
their inputs, so adapters and the trend orchestrator can call them on
shared lists.
"""

from collections.abc import Iterable

from src.ingestion.schemas import Hashtag, Platform, Theme

MAX_HASHTAGS = 12
MAX_THEMES = 5
THEME_WEIGHT_SCALE = 1000.0


def consolidate_hashtags(
    hashtags: Iterable[Hashtag],
    limit: int = MAX_HASHTAGS,
) -> list[Hashtag]:
    """
    Merge hashtags that differ only by case and rank them.

    Engagement is summed per lowercase tag; tag casing, platform and
    category come from the first occurrence. The sort is stable, so ties
    keep encounter order.

    Args:
        hashtags: Raw hashtags in encounter order.
        limit: Maximum hashtags returned.

    Returns:
        At most `limit` hashtags, highest engagement first.

    Example:
        >>> merged = consolidate_hashtags([
        ...     Hashtag(tag="AI", engagement=10, platform=Platform.REDDIT),
        ...     Hashtag(tag="ai", engagement=5, platform=Platform.REDDIT),
        ... ])
        >>> (merged[0].tag, merged[0].engagement)
        ('AI', 15)
    """
    merged: dict[str, Hashtag] = {}
    for hashtag in hashtags:
        existing = merged.get(hashtag.key)
        if existing is None:
            merged[hashtag.key] = hashtag.model_copy()
        else:
            merged[hashtag.key] = existing.model_copy(
                update={"engagement": existing.engagement + hashtag.engagement}
            )

    ranked = sorted(merged.values(), key=lambda h: h.engagement, reverse=True)
    return ranked[:max(0, limit)]


def extract_themes(
    hashtags: Iterable[Hashtag],
    platform: Platform,
    limit: int = MAX_THEMES,
) -> list[Theme]:
    """
    Group hashtags by category into weighted themes.

    weight = min(sum(engagement) / 1000, 1.0), so it always lies in [0, 1].
    """
    totals: dict[str, int] = {}
    for hashtag in hashtags:
        category = hashtag.category or "General"
        totals[category] = totals.get(category, 0) + hashtag.engagement

    themes = [
        Theme(
            name=category,
            weight=min(total / THEME_WEIGHT_SCALE, 1.0),
            platforms=[platform],
        )
        for category, total in totals.items()
    ]
    themes.sort(key=lambda t: t.weight, reverse=True)
    return themes[:max(0, limit)]


def rank_themes(themes: Iterable[Theme], limit: int = MAX_THEMES) -> list[Theme]:
    """Stable descending sort by weight, capped at `limit`."""
    return sorted(themes, key=lambda t: t.weight, reverse=True)[:max(0, limit)]


def rank_hashtags(hashtags: Iterable[Hashtag], limit: int = MAX_HASHTAGS) -> list[Hashtag]:
    """Stable descending sort by engagement, capped at `limit`. No merging."""
    return sorted(hashtags, key=lambda h: h.engagement, reverse=True)[:max(0, limit)]
