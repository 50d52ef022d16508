"""Exceptions raised by the message service."""


class MessageGenerationError(Exception):
    """Drafting failed; no messages are returned for the request."""

    def __init__(self, message: str, platform: str | None = None):
        super().__init__(message)
        self.platform = platform


class NoTrendsSelectedError(MessageGenerationError):
    """The request selected neither hashtags nor themes."""

    def __init__(self) -> None:
        super().__init__("Select at least one hashtag or theme to generate messages")
