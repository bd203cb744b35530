"""
Chat completion types (OpenAI compatible).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from metriqual.types.base import MqlModel

FinishReason = Literal["stop", "length", "function_call", "tool_calls", "content_filter"]


class FunctionCall(MqlModel):
    name: str
    arguments: str


class ToolCall(MqlModel):
    id: str
    type: Literal["function"] = "function"
    function: FunctionCall


class ChatMessage(MqlModel):
    """A single conversation message."""

    role: Literal["system", "user", "assistant", "function", "tool"]
    content: str | None = None
    name: str | None = None
    function_call: FunctionCall | None = None
    tool_calls: list[ToolCall] | None = None
    tool_call_id: str | None = None

    @classmethod
    def system(cls, content: str) -> ChatMessage:
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> ChatMessage:
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> ChatMessage:
        return cls(role="assistant", content=content)


class FunctionDefinition(MqlModel):
    name: str
    description: str | None = None
    parameters: dict[str, Any] | None = None


class ToolDefinition(MqlModel):
    type: Literal["function"] = "function"
    function: FunctionDefinition


class ChatCompletionRequest(MqlModel):
    """Chat completion request.

    ``model`` may be omitted; the proxy key's configured model is used.
    """

    model: str | None = None
    messages: list[ChatMessage]
    stream: bool | None = None
    max_tokens: int | None = None
    temperature: float | None = Field(default=None, ge=0, le=2)
    top_p: float | None = None
    n: int | None = None
    stop: str | list[str] | None = None
    presence_penalty: float | None = Field(default=None, ge=-2, le=2)
    frequency_penalty: float | None = Field(default=None, ge=-2, le=2)
    user: str | None = None
    functions: list[FunctionDefinition] | None = None
    function_call: str | dict[str, Any] | None = None
    tools: list[ToolDefinition] | None = None
    tool_choice: str | dict[str, Any] | None = None


class UsageInfo(MqlModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatCompletionChoice(MqlModel):
    index: int = 0
    message: ChatMessage
    finish_reason: FinishReason | None = None


class ChatCompletionResponse(MqlModel):
    id: str = ""
    object: str = "chat.completion"
    created: int = 0
    model: str = ""
    choices: list[ChatCompletionChoice] = Field(default_factory=list)
    usage: UsageInfo = Field(default_factory=UsageInfo)

    @property
    def content(self) -> str:
        """Text of the first choice, or an empty string."""
        if self.choices and self.choices[0].message.content:
            return self.choices[0].message.content
        return ""


class ChatDelta(MqlModel):
    role: str | None = None
    content: str | None = None
    function_call: dict[str, Any] | None = None
    tool_calls: list[dict[str, Any]] | None = None


class ChatCompletionChunkChoice(MqlModel):
    index: int = 0
    delta: ChatDelta = Field(default_factory=ChatDelta)
    finish_reason: FinishReason | None = None


class ChatCompletionChunk(MqlModel):
    id: str = ""
    object: str = "chat.completion.chunk"
    created: int = 0
    model: str = ""
    choices: list[ChatCompletionChunkChoice] = Field(default_factory=list)

    @property
    def delta_content(self) -> str:
        """Content delta of the first choice, or an empty string."""
        if self.choices and self.choices[0].delta.content:
            return self.choices[0].delta.content
        return ""


class StreamCompletion(MqlModel):
    """All chunks of a streamed completion plus the concatenated text."""

    chunks: list[ChatCompletionChunk] = Field(default_factory=list)
    text: str = ""
