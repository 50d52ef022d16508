"""
Target social platforms and the wording used to describe them.

PlatformSpec carries the hard limits (max_length, hashtag_limit) that
generated messages must respect, plus the descriptive strings embedded in
prompts.
"""

from dataclasses import dataclass
from enum import Enum


class TargetPlatform(str, Enum):
    """Platforms messages are drafted for, in generation order."""

    TWITTER = "Twitter"
    INSTAGRAM = "Instagram"
    LINKEDIN = "LinkedIn"
    FACEBOOK = "Facebook"


@dataclass(frozen=True)
class PlatformSpec:
    platform: TargetPlatform
    max_length: int
    hashtag_limit: int
    features: str
    description: str


PLATFORM_SPECS: dict[TargetPlatform, PlatformSpec] = {
    TargetPlatform.TWITTER: PlatformSpec(
        platform=TargetPlatform.TWITTER,
        max_length=280,
        hashtag_limit=4,
        features="hashtag-heavy, trending",
        description="concise, trending hashtags, viral potential",
    ),
    TargetPlatform.INSTAGRAM: PlatformSpec(
        platform=TargetPlatform.INSTAGRAM,
        max_length=2200,
        hashtag_limit=5,
        features="storytelling, emotive",
        description="visual-friendly, storytelling, lifestyle-focused",
    ),
    TargetPlatform.LINKEDIN: PlatformSpec(
        platform=TargetPlatform.LINKEDIN,
        max_length=3000,
        hashtag_limit=3,
        features="thought-leadership, business",
        description="professional, thought-leadership, business-focused",
    ),
    TargetPlatform.FACEBOOK: PlatformSpec(
        platform=TargetPlatform.FACEBOOK,
        max_length=1000,
        hashtag_limit=4,
        features="discussion-starting, relatable",
        description="community-focused, conversational, shareable",
    ),
}

TARGET_PLATFORMS: tuple[TargetPlatform, ...] = tuple(PLATFORM_SPECS)

TONE_DESCRIPTIONS: dict[str, str] = {
    "professional": "polished, authoritative, business-appropriate",
    "quirky": "creative, unexpected, attention-grabbing",
    "humorous": "funny, entertaining, meme-inspired",
    "inspirational": "motivational, uplifting, empowering",
    "casual": "relatable, conversational, friendly",
    "playful": "lighthearted, fun, energetic",
}

# Tones drafted with the larger creative model
CREATIVE_TONES: frozenset[str] = frozenset({"quirky", "humorous", "creative", "playful"})


def tone_description(tone: str) -> str:
    """Prompt wording for a tone; unknown tones are used verbatim."""
    return TONE_DESCRIPTIONS.get(tone.lower(), tone)
