"""
HTTP transport using httpx for async requests.

Provides:
- Buffered JSON, multipart and binary requests with per-attempt timeout
- Retry with capped exponential backoff on 5xx and network failures
- Server-Sent Events streaming with guaranteed response release
- Authorization header selection
"""

from __future__ import annotations

import asyncio
import os
from contextlib import aclosing
from functools import partial
from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING, Any

import httpx

from metriqual.errors import MQLAPIError, ResponseDecodeError
from metriqual.pipeline import SSELineDecoder
from metriqual.resilience import RetryConfig, RetryPolicy
from metriqual.telemetry import get_logger
from metriqual.transport.auth import get_auth_header
from metriqual.transport.config import ClientConfig

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping

    from metriqual.client.cancel import CancelToken

logger = get_logger("metriqual.transport")

QueryValue = str | int | float | bool | None
FormValue = QueryValue

JSON_CONTENT_TYPE = "application/json"
EVENT_STREAM = "text/event-stream"

_UA_VERSION: str | None = None


def _get_ua_version() -> str:
    """Get package version for User-Agent (cached)."""
    global _UA_VERSION
    if _UA_VERSION is None:
        try:
            _UA_VERSION = version("metriqual-python")
        except PackageNotFoundError:
            _UA_VERSION = "0.0.0"
    return _UA_VERSION


def _trust_env_enabled() -> bool:
    """Use env proxy settings only when explicitly enabled."""
    return os.getenv("MQL_HTTP_TRUST_ENV", "0") == "1"


def _format_param(value: str | int | float | bool) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


async def _next_chunk(chunks: AsyncIterator[bytes]) -> bytes | None:
    return await anext(chunks, None)


class HttpTransport:
    """HTTP transport for the MQL gateway.

    Buffered calls return decoded JSON (or raw bytes for the binary
    variants); ``stream`` yields raw ``data:`` payloads. Every failure is
    raised as MQLAPIError.

    Example:
        >>> transport = HttpTransport(api_key="mql-...")
        >>> models = await transport.get("/v1/models")
        >>> async for payload in transport.stream("/v1/chat/completions", body):
        ...     print(payload)
    """

    def __init__(self, config: ClientConfig | None = None, **overrides: Any) -> None:
        """Initialize HTTP transport.

        Args:
            config: Client configuration
            **overrides: ClientConfig fields applied on top of ``config``

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        if config is None:
            config = ClientConfig(**overrides)
        elif overrides:
            config = config.with_overrides(**overrides)

        self._config = config
        self._retry = RetryPolicy(
            RetryConfig(max_retries=config.max_retries, jitter=config.retry_jitter)
        )
        self._decoder = SSELineDecoder()

        # Client instance (lazy when not injected)
        self._client: httpx.AsyncClient | None = config.http_client
        self._owns_client = config.http_client is None

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def timeout(self) -> float:
        """Per-attempt timeout in seconds."""
        return self._config.timeout

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry

    def with_auth(
        self,
        *,
        api_key: str | None = None,
        token: str | None = None,
    ) -> HttpTransport:
        """Create a transport with different credentials.

        Everything else, including an injected http_client, is copied.
        """
        return HttpTransport(self._config.with_auth(api_key=api_key, token=token))

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                trust_env=_trust_env_enabled(),
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _build_url(
        self,
        path: str,
        params: Mapping[str, QueryValue] | None = None,
    ) -> str:
        """Resolve ``path`` against the base URL and append query params.

        Params keep their insertion order; None values are dropped.
        """
        url = httpx.URL(self._config.base_url).join(path)

        if params:
            pairs = [(k, _format_param(v)) for k, v in params.items() if v is not None]
            if pairs:
                url = url.copy_merge_params(pairs)

        return str(url)

    def _build_headers(
        self,
        extra_headers: Mapping[str, str] | None = None,
        *,
        accept: str = JSON_CONTENT_TYPE,
        content_type: str | None = JSON_CONTENT_TYPE,
    ) -> httpx.Headers:
        """Build request headers.

        Caller headers override the defaults; the configured credential is
        applied last and replaces any caller-supplied Authorization. With
        ``content_type`` None, httpx sets it from the encoded body.
        """
        headers = httpx.Headers(
            {
                "Accept": accept,
                "User-Agent": f"metriqual-python/{_get_ua_version()}",
            }
        )
        if content_type is not None:
            headers["Content-Type"] = content_type

        if extra_headers:
            headers.update(extra_headers)

        headers.update(get_auth_header(self._config.api_key, self._config.token))

        return headers

    @staticmethod
    def _error_from_response(response: httpx.Response) -> MQLAPIError:
        """Build an MQLAPIError from a failed (already read) response."""
        try:
            body = response.json()
        except ValueError:
            body = None
        return MQLAPIError.from_response(
            response.status_code, body, response.reason_phrase
        )

    async def _send_once(
        self,
        method: str,
        url: str,
        headers: httpx.Headers,
        content: Mapping[str, Any],
        *,
        binary: bool,
    ) -> Any:
        """Perform a single attempt and classify its outcome.

        ``content`` holds the body arguments for ``build_request``: ``json``
        for JSON calls, ``data`` and ``files`` for multipart uploads.
        """
        client = self._get_client()
        request = client.build_request(method, url, headers=headers, **content)

        try:
            response = await asyncio.wait_for(client.send(request), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise MQLAPIError.timeout() from e
        except Exception as e:
            logger.debug("Request raised", method=method, url=url, error=repr(e))
            raise MQLAPIError.network(e) from e

        if not response.is_success:
            raise self._error_from_response(response)

        if response.status_code == 204:
            return b"" if binary else {}

        if binary:
            return response.content

        try:
            return response.json()
        except ValueError as e:
            raise ResponseDecodeError(
                f"Response body from {method} {url} is not valid JSON"
            ) from e

    def _log_retry(
        self, method: str, url: str, attempt: int, error: Exception, delay_ms: float
    ) -> None:
        logger.warning(
            "Retrying request",
            method=method,
            url=url,
            attempt=attempt,
            delay_ms=delay_ms,
            status=getattr(error, "status", None),
            error=str(error),
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        params: Mapping[str, QueryValue] | None = None,
        headers: Mapping[str, str] | None = None,
        binary: bool = False,
        form: Mapping[str, FormValue] | None = None,
        files: Mapping[str, Any] | None = None,
    ) -> Any:
        """Make a buffered request with timeout and retry.

        Passing ``form`` or ``files`` sends form data instead of JSON:
        multipart when files are present, urlencoded otherwise. ``body``
        is ignored then.

        Args:
            method: HTTP method
            path: Request path (relative to base URL)
            body: JSON-serializable body
            params: Query parameters
            headers: Additional headers
            binary: Return raw bytes instead of decoded JSON
            form: Multipart text fields; None values are dropped
            files: Multipart file fields, in any form httpx accepts

        Returns:
            Decoded JSON value ({} for 204), or bytes when ``binary``

        Raises:
            MQLAPIError: On HTTP errors, timeout or network failure
            ResponseDecodeError: If a success body is not valid JSON
        """
        url = self._build_url(path, params)
        accept = "*/*" if binary else JSON_CONTENT_TYPE
        content: dict[str, Any]

        if form is not None or files is not None:
            fields = {k: _format_param(v) for k, v in (form or {}).items() if v is not None}
            content = {"data": fields}
            if files:
                content["files"] = dict(files)
            request_headers = self._build_headers(headers, accept=accept, content_type=None)
        else:
            content = {"json": body}
            request_headers = self._build_headers(headers, accept=accept)

        logger.debug("Request started", method=method, url=url)

        result = await self._retry.execute(
            lambda: self._send_once(method, url, request_headers, content, binary=binary),
            on_retry=partial(self._log_retry, method, url),
        )

        if not result.success:
            if result.attempts > 1:
                logger.error(
                    "Request failed after retries",
                    method=method,
                    url=url,
                    attempts=result.attempts,
                    status=getattr(result.error, "status", None),
                )
            raise result.error  # type: ignore[misc]

        logger.debug("Request completed", method=method, url=url, attempts=result.attempts)
        return result.value

    async def get(
        self,
        path: str,
        params: Mapping[str, QueryValue] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Make a GET request."""
        return await self.request("GET", path, params=params, headers=headers)

    async def post(
        self,
        path: str,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Make a POST request."""
        return await self.request("POST", path, body=body, headers=headers)

    async def put(
        self,
        path: str,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Make a PUT request."""
        return await self.request("PUT", path, body=body, headers=headers)

    async def patch(
        self,
        path: str,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Make a PATCH request."""
        return await self.request("PATCH", path, body=body, headers=headers)

    async def delete(
        self,
        path: str,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Make a DELETE request."""
        return await self.request("DELETE", path, headers=headers)

    async def get_binary(
        self,
        path: str,
        params: Mapping[str, QueryValue] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> bytes:
        """Make a GET request returning the raw response body."""
        return await self.request("GET", path, params=params, headers=headers, binary=True)

    async def post_binary(
        self,
        path: str,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> bytes:
        """Make a POST request returning the raw response body."""
        return await self.request("POST", path, body=body, headers=headers, binary=True)

    async def post_form(
        self,
        path: str,
        data: Mapping[str, FormValue] | None = None,
        files: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        *,
        binary: bool = False,
    ) -> Any:
        """Make a multipart POST request (file uploads).

        Uploads follow the same timeout and retry rules as JSON calls;
        file objects are rewound by httpx before each attempt.

        Args:
            path: Request path
            data: Text fields; numbers and booleans are rendered as text
            files: File fields, e.g. ``{"file": ("clip.mp3", raw, "audio/mpeg")}``
            headers: Additional headers
            binary: Return raw bytes instead of decoded JSON
        """
        return await self.request(
            "POST",
            path,
            headers=headers,
            binary=binary,
            form=data or {},
            files=files,
        )

    async def _open_stream(
        self,
        client: httpx.AsyncClient,
        request: httpx.Request,
        cancel_token: CancelToken | None,
    ) -> httpx.Response:
        """Send a streaming request; the connection phase gets the timeout."""
        send = client.send(request, stream=True)
        if cancel_token is not None:
            send = cancel_token.guard(send)

        try:
            return await asyncio.wait_for(send, timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise MQLAPIError.timeout() from e
        except Exception as e:
            raise MQLAPIError.network(e) from e

    @staticmethod
    async def _iter_chunks(
        response: httpx.Response,
        cancel_token: CancelToken | None,
    ) -> AsyncIterator[bytes]:
        try:
            async with aclosing(response.aiter_bytes()) as chunks:
                if cancel_token is None:
                    async for chunk in chunks:
                        yield chunk
                    return

                while (chunk := await cancel_token.guard(_next_chunk(chunks))) is not None:
                    yield chunk
        except httpx.TimeoutException as e:
            raise MQLAPIError.timeout() from e
        except httpx.HTTPError as e:
            raise MQLAPIError.network(e) from e

    async def stream(
        self,
        path: str,
        body: Any,
        headers: Mapping[str, str] | None = None,
        cancel_token: CancelToken | None = None,
    ) -> AsyncIterator[str]:
        """Make a streaming POST request.

        Streams are never retried. The response is released on every exit
        path, including a consumer that stops iterating early (call
        ``aclose()`` on the generator, or use ``contextlib.aclosing``).

        Args:
            path: Request path
            body: JSON-serializable body
            headers: Additional headers
            cancel_token: Fires to abort the pending read

        Yields:
            Raw payload of each ``data:`` line, up to ``[DONE]``

        Raises:
            MQLAPIError: On non-2xx status, empty body, timeout or network failure
            asyncio.CancelledError: If ``cancel_token`` fires
        """
        url = self._build_url(path)
        request_headers = self._build_headers(headers)
        request_headers["Accept"] = EVENT_STREAM

        client = self._get_client()
        # No read timeout: a stream may legitimately stay quiet between events.
        request = client.build_request(
            "POST",
            url,
            headers=request_headers,
            json=body,
            timeout=httpx.Timeout(self.timeout, read=None),
        )

        logger.debug("Stream started", url=url)
        response = await self._open_stream(client, request, cancel_token)

        try:
            if not response.is_success:
                await response.aread()
                raise self._error_from_response(response)

            if response.status_code == 204 or response.headers.get("content-length") == "0":
                raise MQLAPIError("No response body for stream", 500)

            async with (
                aclosing(self._iter_chunks(response, cancel_token)) as chunks,
                aclosing(self._decoder.decode(chunks)) as payloads,
            ):
                async for payload in payloads:
                    yield payload
        finally:
            await response.aclose()
            logger.debug("Stream closed", url=url)

    async def __aenter__(self) -> HttpTransport:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
