"""Exceptions raised by the LLM client and the enrichment service."""


class LLMError(Exception):
    """Base exception for LLM provider failures."""


class ConfigurationError(LLMError):
    """The LLM provider cannot be called at all (e.g. missing API key)."""


class LLMRateLimitError(LLMError):
    """The provider kept answering 429 until attempts ran out."""


class LLMResponseError(LLMError):
    """The provider answered, but not with usable completion text."""


class EnrichmentError(LLMError):
    """Analysis of a single hashtag failed."""

    def __init__(self, tag: str, cause: BaseException):
        super().__init__(f"Hashtag analysis failed for #{tag}: {cause}")
        self.tag = tag
        self.cause = cause
