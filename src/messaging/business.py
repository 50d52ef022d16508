"""Business type classification by keyword lookup."""

OTHER = "other"

# Checked in order; the first category with a matching substring wins.
_CATEGORY_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("dating-matrimony", ("dating", "matrimony", "relationship")),
    ("technology", ("tech", "software", "app")),
    ("food-beverage", ("food", "restaurant", "cafe")),
    ("fashion-lifestyle", ("fashion", "clothing", "style")),
    ("health-wellness", ("health", "fitness", "wellness")),
    ("education", ("education", "learning", "course")),
    ("finance", ("finance", "banking", "investment")),
)

# Hashtags containing one of these words get a relevance bonus
BUSINESS_KEYWORDS: dict[str, tuple[str, ...]] = {
    "dating-matrimony": ("love", "relationship", "connection", "soulmate", "partner", "wedding"),
    "technology": ("innovative", "digital", "smart", "tech", "software", "data"),
    "food-beverage": ("food", "delicious", "tasty", "flavor", "culinary", "dining"),
    "fashion-lifestyle": ("style", "trendy", "fashion", "elegant", "chic"),
    "health-wellness": ("wellness", "health", "care", "healing", "fitness"),
    "education": ("learning", "education", "course", "skills", "knowledge"),
    "finance": ("finance", "money", "investment", "banking", "savings", "economy"),
    OTHER: ("innovative", "quality", "customer"),
}

BUSINESS_CATEGORIES: tuple[str, ...] = tuple(name for name, _ in _CATEGORY_RULES) + (OTHER,)


def classify_business(business_type: str | None) -> str:
    """
    Map a free-text business type to a fixed category.

    Example:
        >>> classify_business("Mobile App Studio")
        'technology'
        >>> classify_business(None)
        'other'
    """
    if not business_type:
        return OTHER

    text = business_type.lower()
    for category, needles in _CATEGORY_RULES:
        if any(needle in text for needle in needles):
            return category
    return OTHER


def business_keywords(category: str) -> tuple[str, ...]:
    return BUSINESS_KEYWORDS.get(category, BUSINESS_KEYWORDS[OTHER])
