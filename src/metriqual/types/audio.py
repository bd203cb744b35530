"""
Audio types: speech synthesis, transcription and voice management.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from metriqual.types.base import MqlModel


class SpeechRequest(MqlModel):
    model: str
    input: str
    voice: str
    response_format: Literal["mp3", "opus", "aac", "flac", "wav", "pcm"] | None = None
    speed: float | None = None


class AsyncSpeechRequest(MqlModel):
    """Long-form speech request (up to 50,000 characters)."""

    model: str
    input: str
    voice: str | None = None
    speed: float | None = None
    response_format: Literal["mp3", "pcm", "flac"] | None = None
    sample_rate: int | None = None
    bitrate: int | None = None
    language_boost: str | None = None
    emotion: str | None = None
    pronunciation_dict: list[str] | None = None
    voice_pitch: float | None = None
    voice_intensity: float | None = None
    sound_effects: str | None = None


class AsyncSpeechResponse(MqlModel):
    id: str
    object: str = "audio.speech.async"
    task_id: str
    file_id: int | None = None
    status: str = "processing"
    usage_characters: int = 0
    created_at: int = 0


class AsyncSpeechStatusResponse(MqlModel):
    id: str = ""
    object: str = "audio.speech.async.status"
    task_id: str
    status: Literal["Pending", "Running", "Success", "Failed"]
    download_url: str | None = None
    file_id: int | None = None
    error: str | None = None


class TranscriptionRequest(MqlModel):
    """Options for speech-to-text; the audio itself is passed separately."""

    model: str = "whisper-1"
    language: str | None = None
    prompt: str | None = None
    response_format: Literal["json", "text", "srt", "verbose_json", "vtt"] | None = None
    temperature: float | None = None


class TranscriptionSegment(MqlModel):
    id: int
    start: float
    end: float
    text: str


class TranscriptionResponse(MqlModel):
    text: str
    task: str | None = None
    language: str | None = None
    duration: float | None = None
    segments: list[TranscriptionSegment] | None = None


class VoiceCloneUploadResponse(MqlModel):
    id: str = ""
    object: str = "audio.voice_clone.upload"
    file_id: int
    bytes: int = 0
    filename: str = ""
    purpose: str = "voice_clone"
    latency_ms: int = 0


class PromptAudioUploadResponse(MqlModel):
    id: str = ""
    object: str = "audio.prompt_audio.upload"
    file_id: int
    bytes: int = 0
    filename: str = ""
    purpose: str = "prompt_audio"
    latency_ms: int = 0


class CloneVoiceRequest(MqlModel):
    """Clone a voice from an uploaded sample.

    ``model`` is required when ``preview_text`` is given.
    """

    file_id: int
    voice_id: str
    prompt_audio_id: int | None = None
    prompt_text: str | None = None
    preview_text: str | None = Field(default=None, max_length=1000)
    model: str | None = None
    language_boost: str | None = None
    noise_reduction: bool | None = None
    volume_normalization: bool | None = None


class CloneVoiceResponse(MqlModel):
    id: str = ""
    object: str = "audio.voice_clone"
    voice_id: str
    demo_audio_url: str | None = None
    latency_ms: int = 0


class DesignVoiceRequest(MqlModel):
    prompt: str
    preview_text: str = Field(max_length=500)
    voice_id: str | None = None


class DesignVoiceResponse(MqlModel):
    id: str = ""
    object: str = "audio.voice_design"
    voice_id: str
    trial_audio: str | None = None
    latency_ms: int = 0

    @property
    def trial_audio_bytes(self) -> bytes | None:
        """Preview audio decoded from its hex encoding."""
        return bytes.fromhex(self.trial_audio) if self.trial_audio else None


VoiceType = Literal["system", "voice_cloning", "voice_generation", "all"]


class Voice(MqlModel):
    id: str
    object: str = "voice"
    name: str | None = None
    description: list[str] = Field(default_factory=list)
    created_at: str | None = None
    type: str | None = None


class VoicesData(MqlModel):
    system_voices: list[Voice] = Field(default_factory=list)
    cloned_voices: list[Voice] = Field(default_factory=list)
    generated_voices: list[Voice] = Field(default_factory=list)


class GetVoicesResponse(MqlModel):
    object: str = "list"
    data: VoicesData
    latency_ms: int = 0
