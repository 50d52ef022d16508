"""Tests for keyword extraction."""

from src.keywords.extractor import (
    GENERIC_RULES,
    NEWS_RULES,
    TECH_RULES,
    KeywordRules,
    extract_keywords,
    tokenize,
)


class TestTokenize:
    """Tests for word-boundary tokenization."""

    def test_lowercases_and_splits(self):
        """Punctuation separates tokens and case is folded."""
        assert tokenize("Hello, World! Cricket-fever") == ["hello", "world", "cricket", "fever"]

    def test_apostrophes_dropped(self):
        """Contractions collapse into a single token."""
        assert tokenize("India's budget") == ["indias", "budget"]


class TestGenericRules:
    """Tests for the length/stopword rule set."""

    def test_first_two_qualifying_tokens(self):
        """Returns at most two tokens in encounter order."""
        assert extract_keywords("Massive breakthrough announced today") == [
            "massive",
            "breakthrough",
        ]

    def test_short_tokens_skipped(self):
        """Tokens of three characters or fewer are dropped."""
        assert extract_keywords("The cat sat on quantum computers") == ["quantum", "computers"]

    def test_stopwords_and_digits_skipped(self):
        """Stopwords and purely numeric tokens never qualify."""
        assert extract_keywords("About 2024 elections there") == ["elections"]

    def test_duplicates_returned_once(self):
        """The same keyword is only returned once per text."""
        assert extract_keywords("Rocket rocket launch") == ["rocket", "launch"]

    def test_empty_text(self):
        """Empty input yields no keywords."""
        assert extract_keywords("") == []

    def test_zero_limit(self):
        """A zero limit yields no keywords."""
        assert extract_keywords("Massive breakthrough", KeywordRules(limit=0)) == []


class TestVocabularyRules:
    """Tests for fixed-vocabulary rule sets."""

    def test_tech_vocabulary_single_match(self):
        """Tech rules keep only the first vocabulary token."""
        assert extract_keywords("New AI model ships with API access", TECH_RULES) == ["ai"]

    def test_tech_vocabulary_short_tokens_allowed(self):
        """Vocabulary mode skips the length check."""
        assert extract_keywords("Show HN: my ML notebook", TECH_RULES) == ["ml"]

    def test_no_vocabulary_match(self):
        """Titles without vocabulary words yield nothing."""
        assert extract_keywords("Gardening tips for spring", TECH_RULES) == []

    def test_news_vocabulary(self):
        """News rules keep up to two vocabulary tokens."""
        assert extract_keywords(
            "Delhi hosts IPL final as cricket fans gather", NEWS_RULES
        ) == ["delhi", "ipl"]

    def test_generic_rules_default(self):
        """GENERIC_RULES is the default rule set."""
        title = "Spectacular volcano eruption"
        assert extract_keywords(title) == extract_keywords(title, GENERIC_RULES)
