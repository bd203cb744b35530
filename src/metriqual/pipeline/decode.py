"""
Stream decoder for Server-Sent Events.

The gateway frames every streamed unit as a single ``data: <payload>``
line and closes with ``data: [DONE]``. The decoder works line by line and
hands payloads back undecoded; JSON parsing is left to the caller.
"""

from __future__ import annotations

import codecs
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


class SSELineDecoder:
    """Line-oriented Server-Sent Events decoder.

    Parses:
    ```
    data: {"x": 1}

    data: {"x": 2}

    data: [DONE]
    ```
    into the payload strings ``'{"x": 1}'`` and ``'{"x": 2}'``.

    Bytes are decoded incrementally, so a multi-byte UTF-8 character split
    across two network chunks is reassembled. Lines that do not carry the
    data prefix (blank separators, ``event:``, comments) are ignored.

    Attributes:
        prefix: Data line prefix (default: "data: ")
        done_signal: End of stream signal (default: "[DONE]")
    """

    def __init__(
        self,
        prefix: str = "data: ",
        done_signal: str = "[DONE]",
    ) -> None:
        self._prefix = prefix
        self._done_signal = done_signal

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def done_signal(self) -> str:
        return self._done_signal

    def _payload(self, line: str) -> str | None:
        if line.endswith("\r"):
            line = line[:-1]
        if not line.startswith(self._prefix):
            return None
        return line[len(self._prefix) :]

    async def decode(self, byte_stream: AsyncIterator[bytes]) -> AsyncIterator[str]:
        """Decode an SSE byte stream into payload strings.

        Args:
            byte_stream: Async iterator of raw bytes

        Yields:
            Payload of each data line, in order, up to the done signal
        """
        text_decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        buffer = ""

        async for chunk in byte_stream:
            buffer += text_decoder.decode(chunk)

            *lines, buffer = buffer.split("\n")
            for line in lines:
                payload = self._payload(line)
                if payload is None:
                    continue
                if payload == self._done_signal:
                    return
                yield payload

        # Trailing fragment without a newline
        buffer += text_decoder.decode(b"", final=True)
        payload = self._payload(buffer)
        if payload is not None and payload != self._done_signal:
            yield payload
