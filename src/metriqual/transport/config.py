"""
Client configuration.

ClientConfig is immutable: deriving a client with different credentials
produces a new config and leaves the original untouched.
"""

from __future__ import annotations

import dataclasses
import os
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Any

import httpx

from metriqual.errors import ConfigurationError
from metriqual.resilience import JitterStrategy

DEFAULT_BASE_URL = "https://api.metriqual.com"
DEFAULT_TIMEOUT_MS = 30000
DEFAULT_MAX_RETRIES = 3

# Environment variables read by ClientConfig.from_env
ENV_BASE_URL = "MQL_BASE_URL"
ENV_API_KEY = "MQL_API_KEY"
ENV_TOKEN = "MQL_TOKEN"
ENV_TIMEOUT_MS = "MQL_TIMEOUT_MS"
ENV_MAX_RETRIES = "MQL_MAX_RETRIES"
ENV_RETRY_JITTER = "MQL_RETRY_JITTER"


@dataclass(frozen=True)
class ClientConfig:
    """Configuration shared by every request a transport makes.

    Attributes:
        base_url: Gateway URL; a trailing slash is stripped
        api_key: Proxy key sent as a bearer credential
        token: Session token; wins over api_key when both are set
        timeout_ms: Per-attempt timeout in milliseconds
        max_retries: Retries after the first attempt for 5xx/network errors
        retry_jitter: Randomization applied to backoff delays (none, full, equal)
        http_client: Pre-built httpx.AsyncClient used to send requests;
            when omitted the transport creates and owns its own
    """

    base_url: str = DEFAULT_BASE_URL
    api_key: str | None = field(default=None, repr=False)
    token: str | None = field(default=None, repr=False)
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_jitter: JitterStrategy = JitterStrategy.NONE
    http_client: httpx.AsyncClient | None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", (self.base_url or DEFAULT_BASE_URL).rstrip("/"))

        if self.timeout_ms <= 0:
            raise ConfigurationError(
                f"timeout_ms must be positive, got {self.timeout_ms}",
                option="timeout_ms",
            )
        if self.max_retries < 0:
            raise ConfigurationError(
                f"max_retries must not be negative, got {self.max_retries}",
                option="max_retries",
            )
        try:
            object.__setattr__(self, "retry_jitter", JitterStrategy(self.retry_jitter))
        except ValueError as e:
            raise ConfigurationError(
                f"unknown retry_jitter {self.retry_jitter!r}",
                option="retry_jitter",
            ) from e
        if self.http_client is not None and self.http_client.is_closed:
            raise ConfigurationError(
                "http_client is closed; pass an open httpx.AsyncClient or omit it",
                option="http_client",
            )

    @property
    def timeout(self) -> float:
        """Per-attempt timeout in seconds."""
        return self.timeout_ms / 1000.0

    @classmethod
    def from_env(cls, **overrides: Any) -> ClientConfig:
        """Build a config from MQL_* environment variables.

        Explicit overrides that are not None take precedence. Numeric
        variables that do not parse are ignored.

        Args:
            **overrides: Any ClientConfig field

        Returns:
            ClientConfig instance
        """
        values: dict[str, Any] = {}

        for name, env_var in (
            ("base_url", ENV_BASE_URL),
            ("api_key", ENV_API_KEY),
            ("token", ENV_TOKEN),
        ):
            value = os.getenv(env_var)
            if value:
                values[name] = value

        for name, env_var in (
            ("timeout_ms", ENV_TIMEOUT_MS),
            ("max_retries", ENV_MAX_RETRIES),
        ):
            raw = os.getenv(env_var)
            if raw:
                with suppress(ValueError):
                    values[name] = int(raw)

        raw = os.getenv(ENV_RETRY_JITTER)
        if raw:
            with suppress(ValueError):
                values["retry_jitter"] = JitterStrategy(raw.lower())

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def with_overrides(self, **changes: Any) -> ClientConfig:
        """Return a copy of this config with ``changes`` applied."""
        return dataclasses.replace(self, **changes)

    def with_auth(
        self,
        *,
        api_key: str | None = None,
        token: str | None = None,
    ) -> ClientConfig:
        """Return a copy with new credentials.

        A credential passed as None keeps its current value.
        """
        return self.with_overrides(
            api_key=api_key if api_key is not None else self.api_key,
            token=token if token is not None else self.token,
        )
