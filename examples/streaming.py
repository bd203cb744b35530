#!/usr/bin/env python3
"""
Streaming response example.

This example demonstrates how to stream responses token by token
for real-time output, and how to stop a stream early.

Usage:
    export MQL_API_KEY="mql-your-proxy-key"
    python examples/streaming.py
"""

import asyncio

from metriqual import MQL, ChatCompletionRequest, ChatMessage, create_cancel_pair


async def main() -> None:
    """Run streaming example."""
    async with MQL() as mql:
        print("Streaming response:\n")
        print("-" * 50)

        request = ChatCompletionRequest(
            messages=[
                ChatMessage.system("You are a creative storyteller."),
                ChatMessage.user("Tell me a very short story about a robot learning to paint."),
            ],
            max_tokens=500,
        )

        # Stream tokens as they arrive
        async for chunk in mql.chat.stream(request):
            print(chunk.delta_content, end="", flush=True)
            finish_reason = chunk.choices[0].finish_reason if chunk.choices else None
            if finish_reason:
                print(f"\n\n[Stream ended: {finish_reason}]")

        print("-" * 50)

        # Collect a whole stream
        print("\n\nCollected stream:")
        print("-" * 50)

        result = await mql.chat.stream_to_completion(
            ChatCompletionRequest(messages=[ChatMessage.user("Count from 1 to 5.")])
        )
        print(result.text)
        print(f"\n[{len(result.chunks)} chunks]")

        # Cancel after two seconds
        print("\n\nCancelled stream:")
        print("-" * 50)

        handle, token = create_cancel_pair(timeout=2.0)
        try:
            async for chunk in mql.chat.stream(
                ChatCompletionRequest(messages=[ChatMessage.user("Write a long essay.")]),
                cancel_token=token,
            ):
                print(chunk.delta_content, end="", flush=True)
        except asyncio.CancelledError:
            print(f"\n\n[Cancelled: {handle.reason.value}]")


if __name__ == "__main__":
    asyncio.run(main())
