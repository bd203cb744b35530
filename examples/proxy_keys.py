#!/usr/bin/env python3
"""
Proxy key management example.

Creates a proxy key that falls back from OpenAI to Anthropic, shows its
usage, and deletes it again. Management calls need a session token.

Usage:
    export MQL_TOKEN="your-session-token"
    export OPENAI_API_KEY="sk-..."
    export ANTHROPIC_API_KEY="sk-ant-..."
    python examples/proxy_keys.py
"""

import asyncio
import os

from metriqual import MQL, ChatMessage, ClientConfig
from metriqual.types import CreateProxyKeyRequest, ProviderConfig


async def main() -> None:
    """Run proxy key example."""
    async with MQL() as mql:
        created = await mql.proxy_keys.create(
            CreateProxyKeyRequest(
                providers=[
                    ProviderConfig(
                        provider="openai",
                        model="gpt-4o-mini",
                        api_key=os.environ["OPENAI_API_KEY"],
                        usage_limit=100,
                    ),
                    ProviderConfig(
                        provider="anthropic",
                        model="claude-3-haiku-20240307",
                        api_key=os.environ["ANTHROPIC_API_KEY"],
                        usage_limit=100,
                    ),
                ]
            )
        )
        print(f"Created key: {created.proxy_key[:12]}...")

        keys = await mql.proxy_keys.list()
        for key in keys.keys:
            print(f"  {key.id}  {key.key_preview}  active={key.active_provider}")

        # Chat with the new key; fallback happens inside the gateway.
        # A fresh config is used because a session token would win over the key.
        config = ClientConfig(base_url=mql.base_url, api_key=created.proxy_key)
        async with MQL(config=config) as user:
            print(await user.chat.complete([ChatMessage.user("Say hi in one word.")]))

        key_id = keys.keys[-1].id
        usage = await mql.proxy_keys.get_usage(key_id)
        for provider in usage.providers:
            print(f"  {provider.provider}: {provider.usage_count}/{provider.usage_limit}")

        await mql.proxy_keys.delete(key_id)
        print("Deleted.")


if __name__ == "__main__":
    asyncio.run(main())
