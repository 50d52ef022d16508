"""Tests for drafted text cleanup."""

from src.messaging.text import clean_generated_text


class TestCleanGeneratedText:
    """Tests for clean_generated_text()."""

    def test_strips_wrapping_quotes(self):
        """One quote at each end is removed."""
        assert clean_generated_text('"Hello world"', 280) == "Hello world"

    def test_collapses_whitespace(self):
        """Whitespace runs, including newlines, become single spaces."""
        assert clean_generated_text("Big\n\nnews   today", 280) == "Big news today"

    def test_short_text_untouched(self):
        """Text within the limit is not truncated."""
        assert clean_generated_text("exactly ten", 11) == "exactly ten"

    def test_truncates_at_word_boundary(self):
        """Long text is cut at the last space and gets an ellipsis."""
        result = clean_generated_text("one two three four five", 15)

        assert result == "one two..."
        assert len(result) <= 15

    def test_hard_cut_without_spaces(self):
        """A single long word is cut hard."""
        result = clean_generated_text("x" * 50, 10)

        assert result == "xxxxxxx..."
        assert len(result) == 10

    def test_never_exceeds_limit(self):
        """Output length never exceeds the limit."""
        text = "word " * 1000
        for limit in (280, 1000, 2200, 3000):
            assert len(clean_generated_text(text, limit)) <= limit
