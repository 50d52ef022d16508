"""
Heuristic scoring for message drafting.

- score_hashtag / select_hashtags: which trending hashtags fit a platform
- engagement_potential: a bounded 40-98 estimate for a drafted message
"""

import re
from collections.abc import Iterable

from src.ingestion.schemas import Hashtag
from src.messaging.business import business_keywords
from src.messaging.platforms import TargetPlatform

MIN_ENGAGEMENT_POTENTIAL = 40
MAX_ENGAGEMENT_POTENTIAL = 98
BASE_ENGAGEMENT_POTENTIAL = 70

_HASHTAG_RE = re.compile(r"#\w+")
_BOOST_EMOJI = ("💰", "🚀", "🎉", "✨", "🔥", "💡")
_INSTAGRAM_CATEGORIES = frozenset({"lifestyle", "fashion", "food"})


def score_hashtag(
    hashtag: Hashtag,
    platform: TargetPlatform,
    theme: str,
    business_category: str,
) -> float:
    """Platform-affinity score; higher is a better fit."""
    category = hashtag.category or "General"
    score = hashtag.engagement / 1000

    if category.lower() == theme.lower():
        score += 25
    if platform == TargetPlatform.LINKEDIN and category == "Business":
        score += 20
    if platform == TargetPlatform.INSTAGRAM and category.lower() in _INSTAGRAM_CATEGORIES:
        score += 15
    if platform == TargetPlatform.TWITTER and len(hashtag.tag) <= 15:
        score += 10

    tag = hashtag.key
    if any(keyword in tag for keyword in business_keywords(business_category)):
        score += 15

    return score


def select_hashtags(
    hashtags: Iterable[Hashtag],
    platform: TargetPlatform,
    theme: str,
    business_category: str,
    limit: int,
) -> list[Hashtag]:
    """
    Top `limit` distinct hashtags by score; ties keep input order.

    A tag trending on several sources is chosen once, at its best score.
    """
    ranked = sorted(
        hashtags,
        key=lambda h: score_hashtag(h, platform, theme, business_category),
        reverse=True,
    )
    chosen: list[Hashtag] = []
    seen: set[str] = set()
    for hashtag in ranked:
        if len(chosen) >= limit:
            break
        if hashtag.key not in seen:
            seen.add(hashtag.key)
            chosen.append(hashtag)
    return chosen


def engagement_potential(
    text: str,
    platform: TargetPlatform,
    trending_tags: Iterable[str],
) -> int:
    """
    Estimate how engaging a drafted message is.

    70 base, plus hashtags in the text (5 each, max 15), 5 for a question,
    5 for an exclamation, 8 for a boost emoji, 3 per selected trending
    hashtag mentioned (a tag trending on two sources counts twice),
    and a platform length bonus. Clamped to [40, 98].
    """
    score = BASE_ENGAGEMENT_POTENTIAL
    score += min(len(_HASHTAG_RE.findall(text)) * 5, 15)

    if "?" in text:
        score += 5
    if "!" in text:
        score += 5
    if any(emoji in text for emoji in _BOOST_EMOJI):
        score += 8

    lowered = text.lower()
    score += 3 * sum(1 for tag in trending_tags if tag and tag.lower() in lowered)

    length = len(text)
    if platform == TargetPlatform.TWITTER:
        score += 5 if length <= 240 else -5
    elif platform == TargetPlatform.INSTAGRAM and length > 100:
        score += 5
    elif platform == TargetPlatform.LINKEDIN and length > 200:
        score += 5
    elif platform == TargetPlatform.FACEBOOK and "?" in text:
        score += 8

    return max(MIN_ENGAGEMENT_POTENTIAL, min(score, MAX_ENGAGEMENT_POTENTIAL))
