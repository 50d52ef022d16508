"""
Chat-completion wire models and enrichment output.

The request/response shapes follow the OpenAI-compatible chat API that
Groq exposes. Only the fields the client reads are modeled.
"""

from typing import Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatChoiceMessage(BaseModel):
    role: str = "assistant"
    content: str | None = None


class ChatChoice(BaseModel):
    index: int = 0
    message: ChatChoiceMessage
    finish_reason: str | None = None


class ChatCompletion(BaseModel):
    """Response body of POST /chat/completions."""

    id: str | None = None
    model: str | None = None
    choices: list[ChatChoice] = Field(default_factory=list)

    @property
    def text(self) -> str | None:
        """Content of the first choice, or None when absent."""
        if not self.choices:
            return None
        return self.choices[0].message.content


class HashtagInsight(BaseModel):
    """Enrichment output for one hashtag."""

    context: str = Field(..., description="Why the tag is trending")
    usage: str = Field(..., description="How businesses should use it")
    description: str = Field(..., description="Short label")
