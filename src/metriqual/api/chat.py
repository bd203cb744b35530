"""
Chat completions API.

OpenAI-compatible chat completions with the gateway's provider fallback
and content filtering applied server side.
"""

from __future__ import annotations

import json
import time
from contextlib import aclosing
from typing import TYPE_CHECKING, Any

from metriqual.telemetry import get_logger
from metriqual.types import (
    ChatCompletionChunk,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    StreamCompletion,
    decode,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from metriqual.client.cancel import CancelToken
    from metriqual.transport import HttpTransport

logger = get_logger("metriqual.api.chat")

CHAT_COMPLETIONS_PATH = "/v1/chat/completions"


def _normalize_response(data: Any) -> Any:
    """Convert the gateway's local response shape to the OpenAI shape.

    Local shape: {"id", "model", "message": {...}, "metadata": {...}}
    with no "choices" array. Anything else is returned unchanged.
    """
    if not (
        isinstance(data, dict)
        and "message" in data
        and "metadata" in data
        and "choices" not in data
    ):
        return data

    metadata = data.get("metadata") or {}
    prompt_tokens = metadata.get("prompt_tokens") or 0
    completion_tokens = metadata.get("completion_tokens") or 0

    return {
        "id": data.get("id") or "",
        "object": "chat.completion",
        "created": metadata.get("created") or int(time.time()),
        "model": data.get("model") or "",
        "choices": [
            {
                "index": 0,
                "message": data["message"],
                "finish_reason": metadata.get("finish_reason") or "stop",
            }
        ],
        "usage": {
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "total_tokens": metadata.get("tokens_used") or prompt_tokens + completion_tokens,
        },
    }


class ChatAPI:
    """Chat completions.

    Example:
        >>> response = await mql.chat.create(
        ...     ChatCompletionRequest(messages=[ChatMessage.user("Hello!")])
        ... )
        >>> print(response.content)

        >>> async for chunk in mql.chat.stream(request):
        ...     print(chunk.delta_content, end="")
    """

    def __init__(self, transport: HttpTransport) -> None:
        self._transport = transport

    async def create(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """Create a chat completion."""
        data = await self._transport.post(CHAT_COMPLETIONS_PATH, request.to_payload())
        return decode(ChatCompletionResponse, _normalize_response(data))

    async def stream(
        self,
        request: ChatCompletionRequest,
        *,
        on_chunk: Callable[[ChatCompletionChunk], Any] | None = None,
        cancel_token: CancelToken | None = None,
    ) -> AsyncIterator[ChatCompletionChunk]:
        """Create a streaming chat completion.

        Payloads that are not valid JSON are skipped; payloads that are
        JSON but not a chunk raise ResponseDecodeError.

        Args:
            request: Completion request (``stream`` is forced on)
            on_chunk: Called with every chunk before it is yielded
            cancel_token: Fires to abort the stream

        Yields:
            ChatCompletionChunk for each streamed event
        """
        body = request.model_copy(update={"stream": True}).to_payload()

        async with aclosing(
            self._transport.stream(CHAT_COMPLETIONS_PATH, body, cancel_token=cancel_token)
        ) as payloads:
            async for payload in payloads:
                try:
                    data = json.loads(payload)
                except json.JSONDecodeError:
                    logger.debug("Skipping malformed stream payload", payload=payload[:200])
                    continue

                chunk = decode(ChatCompletionChunk, data)
                if on_chunk:
                    on_chunk(chunk)
                yield chunk

    async def stream_to_completion(
        self,
        request: ChatCompletionRequest,
        *,
        on_chunk: Callable[[ChatCompletionChunk], Any] | None = None,
        cancel_token: CancelToken | None = None,
    ) -> StreamCompletion:
        """Stream a completion and collect every chunk and the full text."""
        chunks: list[ChatCompletionChunk] = []
        parts: list[str] = []

        async with aclosing(
            self.stream(request, on_chunk=on_chunk, cancel_token=cancel_token)
        ) as stream:
            async for chunk in stream:
                chunks.append(chunk)
                parts.append(chunk.delta_content)

        return StreamCompletion(chunks=chunks, text="".join(parts))

    async def complete(self, messages: list[ChatMessage], **options: Any) -> str:
        """Return just the text of a completion.

        Example:
            >>> await mql.chat.complete([ChatMessage.user("What is 2+2?")])
            '4'
        """
        response = await self.create(ChatCompletionRequest(messages=messages, **options))
        return response.content
