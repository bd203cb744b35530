"""
Integration test helper utilities.

Shared fixtures and gateway payload builders for integration tests.
"""

from __future__ import annotations

import json
from typing import Any

import pytest

from metriqual import MQL

GATEWAY_URL = "https://gateway.test"


def mock_chat_response(
    content: str = "Hello from MQL!",
    model: str = "gpt-4o",
    finish_reason: str = "stop",
    usage: dict | None = None,
) -> dict:
    """Create an OpenAI-shaped chat completion."""
    response: dict[str, Any] = {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1699012345,
        "model": model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": finish_reason,
            }
        ],
    }

    if usage:
        response["usage"] = usage

    return response


def mock_local_chat_response(content: str = "Hello from MQL!", model: str = "gpt-4o") -> dict:
    """Create a chat completion in the gateway's local (non-OpenAI) shape."""
    return {
        "id": "local-1",
        "model": model,
        "message": {"role": "assistant", "content": content},
        "metadata": {
            "prompt_tokens": 7,
            "completion_tokens": 3,
            "tokens_used": 10,
            "finish_reason": "stop",
            "created": 1699012345,
        },
    }


def mock_streaming_chunks(content: str, model: str = "gpt-4o") -> list[dict]:
    """Create one chunk per character plus a final finish chunk."""
    chunks = [
        {
            "id": "chatcmpl-123",
            "object": "chat.completion.chunk",
            "created": 1699012345,
            "model": model,
            "choices": [{"index": 0, "delta": {"content": char}, "finish_reason": None}],
        }
        for char in content
    ]

    chunks.append(
        {
            "id": "chatcmpl-123",
            "object": "chat.completion.chunk",
            "created": 1699012345,
            "model": model,
            "choices": [{"index": 0, "delta": {}, "finish_reason": "stop"}],
        }
    )

    return chunks


def sse_body(events: list[dict | str], done: bool = True) -> bytes:
    """Frame events as the gateway's SSE body."""
    lines = [f"data: {e if isinstance(e, str) else json.dumps(e)}\n\n" for e in events]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode()


@pytest.fixture
def gateway_url() -> str:
    return GATEWAY_URL


@pytest.fixture
def mql() -> MQL:
    """Client authenticated with a proxy key, retries disabled."""
    return MQL(base_url=GATEWAY_URL, api_key="mql-test-key", max_retries=0)


@pytest.fixture
def admin(mql: MQL) -> MQL:
    """Client authenticated with a session token."""
    return mql.with_auth(token="session-jwt")
