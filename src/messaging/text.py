"""Post-processing of LLM-drafted post text."""

import re

ELLIPSIS = "..."

_WRAPPING_QUOTES_RE = re.compile(r"^[\"']|[\"']$")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_generated_text(text: str, max_length: int) -> str:
    """
    Normalize a drafted post and fit it into `max_length` characters.

    Strips one wrapping quote at each end and collapses all whitespace
    runs to single spaces. Over-long text is cut to max_length - 3 at the
    last space (or hard-cut when there is none) and gets "...".

    Example:
        >>> clean_generated_text('"Hello   world"', 280)
        'Hello world'
    """
    cleaned = _WRAPPING_QUOTES_RE.sub("", text.strip())
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()

    if len(cleaned) <= max_length:
        return cleaned

    budget = max(0, max_length - len(ELLIPSIS))
    truncated = cleaned[:budget]
    last_space = truncated.rfind(" ")
    if last_space > 0:
        truncated = truncated[:last_space]
    return (truncated + ELLIPSIS)[:max_length]
