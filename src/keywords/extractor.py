"""
Keyword extraction from short titles.

Candidate hashtags are plain tokens pulled from post/video/article titles.
Two rule shapes are supported:

- generic: any reasonably long, non-numeric, non-stopword token
- fixed vocabulary: only tokens that appear in a curated list

There is no stemming and no phrase detection; tokenization is word-boundary
only, so the same title always yields the same keywords.
"""

import re
from dataclasses import dataclass, field

_TOKEN_RE = re.compile(r"[a-z0-9]+(?:'[a-z0-9]+)*")
_DIGITS_RE = re.compile(r"^\d+$")

STOPWORDS: frozenset[str] = frozenset({
    "this", "that", "with", "from", "they", "have", "will", "been", "said",
    "what", "when", "where", "which", "while", "about", "after", "before",
    "their", "there", "these", "those", "would", "could", "should", "into",
    "over", "just", "than", "then", "them", "were", "your", "yours", "does",
})

TECH_VOCABULARY: frozenset[str] = frozenset({
    "ai", "data", "tech", "app", "web", "code", "dev", "api", "ml",
    "crypto", "blockchain",
})

NEWS_VOCABULARY: frozenset[str] = frozenset({
    "india", "delhi", "mumbai", "bangalore", "chennai", "kolkata", "modi",
    "bjp", "congress", "bollywood", "cricket", "ipl", "startup", "tech",
    "election", "government", "health", "education", "economy", "business",
    "finance",
})


@dataclass(frozen=True)
class KeywordRules:
    """
    Inclusion rules for extract_keywords().

    Attributes:
        min_length: Tokens must be strictly longer than this.
        limit: Maximum keywords returned per text.
        vocabulary: When set, only tokens in this set are kept and the
            length/stopword checks are skipped.
        stopwords: Tokens never returned in generic mode.
    """

    min_length: int = 3
    limit: int = 2
    vocabulary: frozenset[str] | None = None
    stopwords: frozenset[str] = field(default=STOPWORDS)

    def accepts(self, token: str) -> bool:
        if self.vocabulary is not None:
            return token in self.vocabulary
        if len(token) <= self.min_length:
            return False
        if _DIGITS_RE.match(token):
            return False
        return token not in self.stopwords


GENERIC_RULES = KeywordRules()
TECH_RULES = KeywordRules(limit=1, vocabulary=TECH_VOCABULARY)
NEWS_RULES = KeywordRules(limit=2, vocabulary=NEWS_VOCABULARY)


def tokenize(text: str) -> list[str]:
    """Lowercase word-boundary tokenization. Apostrophes are dropped."""
    return [t.replace("'", "") for t in _TOKEN_RE.findall(text.lower())]


def extract_keywords(text: str, rules: KeywordRules = GENERIC_RULES) -> list[str]:
    """
    Extract candidate keywords from a title.

    Args:
        text: Raw title text.
        rules: Inclusion rules.

    Returns:
        Up to rules.limit lowercase tokens in encounter order, each once.

    Example:
        >>> extract_keywords("Massive breakthrough announced today")
        ['massive', 'breakthrough']
    """
    if not text or rules.limit <= 0:
        return []

    keywords: list[str] = []
    for token in tokenize(text):
        if token in keywords or not rules.accepts(token):
            continue
        keywords.append(token)
        if len(keywords) >= rules.limit:
            break
    return keywords
