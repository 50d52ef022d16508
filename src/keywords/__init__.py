"""Keyword extraction for candidate hashtags."""

from src.keywords.extractor import (
    GENERIC_RULES,
    NEWS_RULES,
    TECH_RULES,
    KeywordRules,
    extract_keywords,
    tokenize,
)

__all__ = [
    "KeywordRules",
    "GENERIC_RULES",
    "TECH_RULES",
    "NEWS_RULES",
    "extract_keywords",
    "tokenize",
]
