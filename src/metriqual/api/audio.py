"""
Audio API - speech synthesis, transcription, voice cloning and design.

Short texts are synthesized in one call; long texts go through an async
task that is polled until the audio can be downloaded. Uploads are sent
as multipart form data.
"""

from __future__ import annotations

import asyncio
import time
from typing import IO, TYPE_CHECKING, Any
from urllib.parse import quote

from metriqual.errors import SpeechTaskError
from metriqual.telemetry import get_logger
from metriqual.types import (
    AsyncSpeechRequest,
    AsyncSpeechResponse,
    AsyncSpeechStatusResponse,
    CloneVoiceRequest,
    CloneVoiceResponse,
    DesignVoiceRequest,
    DesignVoiceResponse,
    GetVoicesResponse,
    PromptAudioUploadResponse,
    SpeechRequest,
    TranscriptionRequest,
    TranscriptionResponse,
    VoiceCloneUploadResponse,
    VoiceType,
    decode,
)

if TYPE_CHECKING:
    from metriqual.transport import HttpTransport

logger = get_logger("metriqual.api.audio")

SPEECH_PATH = "/v1/audio/speech"
ASYNC_SPEECH_PATH = "/v1/audio/speech/async"
TRANSCRIPTIONS_PATH = "/v1/audio/transcriptions"
VOICE_CLONE_PATH = "/v1/audio/voice-clone"
PROMPT_AUDIO_UPLOAD_PATH = "/v1/audio/prompt-audio/upload"
VOICE_DESIGN_PATH = "/v1/audio/voice-design"
VOICES_PATH = "/v1/audio/voices"

# Response formats that come back as plain text rather than JSON
TEXT_TRANSCRIPTION_FORMATS = frozenset({"text", "srt", "vtt"})

# Raw bytes, a file object, or a (filename, content[, content_type]) tuple
AudioFile = (
    bytes | IO[bytes] | tuple[str, bytes | IO[bytes]] | tuple[str, bytes | IO[bytes], str]
)


class AudioAPI:
    """Speech synthesis, transcription and voice management.

    Example:
        >>> audio = await mql.audio.speech(
        ...     SpeechRequest(model="tts-1", input="Hello", voice="alloy")
        ... )
        >>> Path("hello.mp3").write_bytes(audio)
    """

    def __init__(self, transport: HttpTransport) -> None:
        self._transport = transport

    async def speech(self, request: SpeechRequest) -> bytes:
        """Synthesize speech and return the raw audio bytes."""
        return await self._transport.post_binary(SPEECH_PATH, request.to_payload())

    async def speech_async(self, request: AsyncSpeechRequest) -> AsyncSpeechResponse:
        """Start an async speech task for long text."""
        data = await self._transport.post(ASYNC_SPEECH_PATH, request.to_payload())
        return decode(AsyncSpeechResponse, data)

    async def speech_async_status(
        self,
        task_id: str,
        include_download_url: bool = True,
    ) -> AsyncSpeechStatusResponse:
        """Get the status of an async speech task."""
        data = await self._transport.get(
            f"{ASYNC_SPEECH_PATH}/{quote(task_id, safe='')}",
            params={"include_download_url": True if include_download_url else None},
        )
        return decode(AsyncSpeechStatusResponse, data)

    async def speech_async_download(self, task_id: str) -> bytes:
        """Download the audio of a completed async speech task."""
        return await self._transport.get_binary(
            f"{ASYNC_SPEECH_PATH}/{quote(task_id, safe='')}/download"
        )

    async def speech_async_and_wait(
        self,
        request: AsyncSpeechRequest,
        *,
        poll_interval_ms: int = 3000,
        max_wait_ms: int = 300000,
    ) -> bytes:
        """Start an async speech task, poll until done and download it.

        Raises:
            SpeechTaskError: If the task fails or exceeds ``max_wait_ms``
        """
        task = await self.speech_async(request)
        deadline = time.monotonic() + max_wait_ms / 1000.0

        while time.monotonic() < deadline:
            await asyncio.sleep(poll_interval_ms / 1000.0)
            status = await self.speech_async_status(task.task_id)
            logger.debug("Speech task polled", task_id=task.task_id, status=status.status)

            if status.status == "Success":
                return await self.speech_async_download(task.task_id)
            if status.status == "Failed":
                raise SpeechTaskError(
                    f"Async speech failed: {status.error or 'Unknown error'}",
                    task_id=task.task_id,
                )

        raise SpeechTaskError(
            f"Async speech timed out after {max_wait_ms}ms", task_id=task.task_id
        )

    async def transcribe(
        self, file: AudioFile, request: TranscriptionRequest | None = None
    ) -> TranscriptionResponse:
        """Transcribe audio to text.

        For the ``text``, ``srt`` and ``vtt`` formats the gateway answers
        with plain text, which is returned as ``TranscriptionResponse.text``.

        Example:
            >>> result = await mql.audio.transcribe(
            ...     Path("meeting.mp3").read_bytes(),
            ...     TranscriptionRequest(model="whisper-1", language="en"),
            ... )
            >>> print(result.text)
        """
        request = request or TranscriptionRequest()
        fields: dict[str, Any] = request.to_payload()

        if request.response_format in TEXT_TRANSCRIPTION_FORMATS:
            raw = await self._transport.post_form(
                TRANSCRIPTIONS_PATH, fields, {"file": file}, binary=True
            )
            return TranscriptionResponse(text=raw.decode("utf-8"))

        data = await self._transport.post_form(TRANSCRIPTIONS_PATH, fields, {"file": file})
        return decode(TranscriptionResponse, data)

    async def upload_voice_clone(self, file: AudioFile) -> VoiceCloneUploadResponse:
        """Upload a voice sample (mp3, m4a or wav; 10 s to 5 min; up to 20 MB)."""
        data = await self._transport.post_form(
            f"{VOICE_CLONE_PATH}/upload", files={"file": file}
        )
        return decode(VoiceCloneUploadResponse, data)

    async def clone_voice(self, request: CloneVoiceRequest) -> CloneVoiceResponse:
        """Clone a voice from an uploaded sample."""
        data = await self._transport.post(VOICE_CLONE_PATH, request.to_payload())
        return decode(CloneVoiceResponse, data)

    async def upload_and_clone_voice(
        self, file: AudioFile, voice_id: str, **options: Any
    ) -> CloneVoiceResponse:
        """Upload a sample and clone it in one call.

        Args:
            file: Voice sample
            voice_id: Id to register the cloned voice under
            **options: Remaining CloneVoiceRequest fields
        """
        upload = await self.upload_voice_clone(file)
        return await self.clone_voice(
            CloneVoiceRequest(file_id=upload.file_id, voice_id=voice_id, **options)
        )

    async def upload_prompt_audio(self, file: AudioFile) -> PromptAudioUploadResponse:
        """Upload prompt audio for voice enhancement (3 s to 30 s; up to 5 MB)."""
        data = await self._transport.post_form(PROMPT_AUDIO_UPLOAD_PATH, files={"file": file})
        return decode(PromptAudioUploadResponse, data)

    async def design_voice(self, request: DesignVoiceRequest) -> DesignVoiceResponse:
        """Design a voice from a natural-language description."""
        data = await self._transport.post(VOICE_DESIGN_PATH, request.to_payload())
        return decode(DesignVoiceResponse, data)

    async def get_voices(self, voice_type: VoiceType = "all") -> GetVoicesResponse:
        """List system, cloned and designed voices.

        Cloned voices only show up after they have been used once.
        """
        data = await self._transport.post(VOICES_PATH, {"voice_type": voice_type})
        return decode(GetVoicesResponse, data)
