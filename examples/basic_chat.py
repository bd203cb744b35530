#!/usr/bin/env python3
"""
Basic chat completion example.

This example demonstrates the simplest way to send chat completions
through the MQL gateway with a proxy key.

Usage:
    export MQL_API_KEY="mql-your-proxy-key"
    python examples/basic_chat.py
"""

import asyncio

from metriqual import MQL, ChatCompletionRequest, ChatMessage, MQLAPIError


async def main() -> None:
    """Run basic chat example."""
    # Credentials and base URL come from MQL_* environment variables
    async with MQL() as mql:
        # Method 1: Just the text
        answer = await mql.chat.complete(
            [
                ChatMessage.system("You are a helpful assistant."),
                ChatMessage.user("What is the capital of France?"),
            ],
            temperature=0.7,
        )
        print(f"Response: {answer}")
        print()

        # Method 2: Full response with usage
        response = await mql.chat.create(
            ChatCompletionRequest(
                model="gpt-4o-mini",
                messages=[ChatMessage.user("Write a one-liner to read a file in Python.")],
                max_tokens=100,
            )
        )
        print(f"Python tip: {response.content}")
        print(f"Model: {response.model}")
        print(
            f"Tokens: {response.usage.prompt_tokens} in, "
            f"{response.usage.completion_tokens} out"
        )
        print()

        # Method 3: Handling gateway errors
        try:
            await mql.models.get("no-such-model")
        except MQLAPIError as e:
            print(f"Lookup failed: status={e.status} code={e.code} message={e.message}")


if __name__ == "__main__":
    asyncio.run(main())
