"""
Integration tests for uploads, voices, images and video.
"""

from __future__ import annotations

import json

import pytest

from metriqual import MQL, VideoTaskError
from metriqual.types import (
    CloneVoiceRequest,
    DesignVoiceRequest,
    ImageGenerationRequest,
    MinimaxImageRequest,
    TranscriptionRequest,
    VideoGenerationRequest,
)
from tests.integration.conftest import GATEWAY_URL

AUDIO_URL = f"{GATEWAY_URL}/v1/audio"
GENERATIONS_URL = f"{GATEWAY_URL}/v1/videos/generations"


def video_job(status: str, **extra) -> dict:
    return {
        "id": "video_abc",
        "object": "video",
        "created_at": 1700000000,
        "status": status,
        "model": "sora-1.0-turbo",
        **extra,
    }


class TestTranscription:
    """Tests for speech-to-text uploads."""

    @pytest.mark.asyncio
    async def test_transcribe(self, mql: MQL, httpx_mock) -> None:
        """Test audio and options are uploaded as one multipart request."""
        httpx_mock.add_response(
            url=f"{AUDIO_URL}/transcriptions",
            method="POST",
            json={"text": "Hello there", "language": "en", "duration": 1.5},
        )

        result = await mql.audio.transcribe(
            ("hello.mp3", b"ID3hello", "audio/mpeg"),
            TranscriptionRequest(model="whisper-1", language="en", temperature=0.2),
        )

        assert result.text == "Hello there"
        assert result.duration == 1.5

        request = httpx_mock.get_request()
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert request.headers["Authorization"] == "Bearer mql-test-key"
        assert b'name="model"\r\n\r\nwhisper-1' in request.content
        assert b'name="language"\r\n\r\nen' in request.content
        assert b'name="temperature"\r\n\r\n0.2' in request.content
        assert b'name="prompt"' not in request.content
        assert b'filename="hello.mp3"' in request.content
        assert b"ID3hello" in request.content

    @pytest.mark.asyncio
    async def test_transcribe_plain_text_format(self, mql: MQL, httpx_mock) -> None:
        """Test text formats are returned without JSON decoding."""
        subtitles = "1\n00:00:00,000 --> 00:00:01,500\nHello there\n"
        httpx_mock.add_response(
            url=f"{AUDIO_URL}/transcriptions",
            method="POST",
            text=subtitles,
            headers={"Content-Type": "text/plain"},
        )

        result = await mql.audio.transcribe(
            b"ID3hello", TranscriptionRequest(response_format="srt")
        )

        assert result.text == subtitles
        assert b'name="response_format"\r\n\r\nsrt' in httpx_mock.get_request().content


class TestVoices:
    """Tests for voice cloning, design and listing."""

    @pytest.mark.asyncio
    async def test_upload_and_clone_voice(self, mql: MQL, httpx_mock) -> None:
        """Test the uploaded file id feeds the clone request."""
        httpx_mock.add_response(
            url=f"{AUDIO_URL}/voice-clone/upload",
            method="POST",
            json={"id": "u1", "file_id": 123456789, "bytes": 8, "filename": "me.wav"},
        )
        httpx_mock.add_response(
            url=f"{AUDIO_URL}/voice-clone",
            method="POST",
            json={"id": "c1", "voice_id": "my_voice", "demo_audio_url": "https://cdn.test/d"},
        )

        voice = await mql.audio.upload_and_clone_voice(
            ("me.wav", b"RIFFwave"), "my_voice", preview_text="Hello!", model="speech-2.8-hd"
        )

        assert voice.voice_id == "my_voice"
        upload, clone = httpx_mock.get_requests()
        assert b'filename="me.wav"' in upload.content
        assert json.loads(clone.content) == {
            "file_id": 123456789,
            "voice_id": "my_voice",
            "preview_text": "Hello!",
            "model": "speech-2.8-hd",
        }

    @pytest.mark.asyncio
    async def test_clone_voice(self, mql: MQL, httpx_mock) -> None:
        """Test cloning from an earlier upload."""
        httpx_mock.add_response(
            url=f"{AUDIO_URL}/voice-clone", method="POST", json={"voice_id": "v2"}
        )

        voice = await mql.audio.clone_voice(
            CloneVoiceRequest(file_id=1, voice_id="v2", noise_reduction=True)
        )

        assert voice.voice_id == "v2"
        assert json.loads(httpx_mock.get_request().content)["noise_reduction"] is True

    @pytest.mark.asyncio
    async def test_upload_prompt_audio(self, mql: MQL, httpx_mock) -> None:
        """Test prompt audio uploads."""
        httpx_mock.add_response(
            url=f"{AUDIO_URL}/prompt-audio/upload", method="POST", json={"file_id": 42}
        )

        upload = await mql.audio.upload_prompt_audio(b"prompt-audio")

        assert upload.file_id == 42
        assert upload.purpose == "prompt_audio"

    @pytest.mark.asyncio
    async def test_design_voice(self, mql: MQL, httpx_mock) -> None:
        """Test the hex preview audio is decodable."""
        httpx_mock.add_response(
            url=f"{AUDIO_URL}/voice-design",
            method="POST",
            json={"id": "d1", "voice_id": "designed_1", "trial_audio": "494433"},
        )

        voice = await mql.audio.design_voice(
            DesignVoiceRequest(prompt="Calm narrator", preview_text="Welcome.")
        )

        assert voice.voice_id == "designed_1"
        assert voice.trial_audio_bytes == b"ID3"

    @pytest.mark.asyncio
    async def test_get_voices(self, mql: MQL, httpx_mock) -> None:
        """Test voices are grouped by category and filtered by type."""
        httpx_mock.add_response(
            url=f"{AUDIO_URL}/voices",
            method="POST",
            json={
                "object": "list",
                "data": {
                    "system_voices": [
                        {"id": "Wise_Woman", "description": ["calm"], "type": "system"}
                    ],
                    "cloned_voices": [],
                    "generated_voices": [],
                },
            },
        )

        voices = await mql.audio.get_voices("system")

        assert [v.id for v in voices.data.system_voices] == ["Wise_Woman"]
        assert json.loads(httpx_mock.get_request().content) == {"voice_type": "system"}


class TestImages:
    """Tests for the images API."""

    @pytest.mark.asyncio
    async def test_generate_urls(self, mql: MQL, httpx_mock) -> None:
        """Test the URL response format is forced and URLs are collected."""
        httpx_mock.add_response(
            url=f"{GATEWAY_URL}/v1/images/generations",
            method="POST",
            json={
                "created": 1700000000,
                "data": [{"url": "https://cdn.test/1.png"}, {"b64_json": "aGk="}],
            },
        )

        urls = await mql.images.generate_urls(
            ImageGenerationRequest(model="dall-e-3", prompt="A cat", n=2)
        )

        assert urls == ["https://cdn.test/1.png"]
        assert json.loads(httpx_mock.get_request().content) == {
            "model": "dall-e-3",
            "prompt": "A cat",
            "n": 2,
            "response_format": "url",
        }

    @pytest.mark.asyncio
    async def test_generate_minimax_defaults_model(self, mql: MQL, httpx_mock) -> None:
        """Test the image-01 model is sent when none is given."""
        httpx_mock.add_response(
            url=f"{GATEWAY_URL}/v1/images/minimax/generations",
            method="POST",
            json={"id": "img1", "model": "image-01", "data": [{"url": "https://cdn.test/m.png"}]},
        )

        response = await mql.images.generate_minimax(
            MinimaxImageRequest(prompt="A sunset", aspect_ratio="16:9")
        )

        assert response.data[0].url == "https://cdn.test/m.png"
        assert json.loads(httpx_mock.get_request().content)["model"] == "image-01"


class TestVideo:
    """Tests for the video API."""

    @pytest.mark.asyncio
    async def test_create_and_wait(self, mql: MQL, httpx_mock) -> None:
        """Test polling a job until it completes."""
        httpx_mock.add_response(url=GENERATIONS_URL, method="POST", json=video_job("queued"))
        httpx_mock.add_response(
            url=f"{GENERATIONS_URL}/video_abc", json=video_job("in_progress", progress=40)
        )
        httpx_mock.add_response(
            url=f"{GENERATIONS_URL}/video_abc",
            json=video_job("completed", download_url="https://cdn.test/v.mp4"),
        )

        video = await mql.video.create_and_wait(
            VideoGenerationRequest(model="sora-1.0-turbo", prompt="A cat", duration=5),
            poll_interval_ms=0,
        )

        assert video.status == "completed"
        assert video.download_url == "https://cdn.test/v.mp4"
        assert json.loads(httpx_mock.get_requests()[0].content) == {
            "model": "sora-1.0-turbo",
            "prompt": "A cat",
            "duration": 5,
        }

    @pytest.mark.asyncio
    async def test_create_and_wait_failure(self, mql: MQL, httpx_mock) -> None:
        """Test a failed job raises VideoTaskError with the gateway message."""
        httpx_mock.add_response(url=GENERATIONS_URL, method="POST", json=video_job("queued"))
        httpx_mock.add_response(
            url=f"{GENERATIONS_URL}/video_abc",
            json=video_job("failed", error={"code": "moderation", "message": "prompt rejected"}),
        )

        with pytest.raises(VideoTaskError) as exc_info:
            await mql.video.create_and_wait(
                VideoGenerationRequest(model="sora", prompt="x"), poll_interval_ms=0
            )

        assert exc_info.value.job_id == "video_abc"
        assert "prompt rejected" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_create_and_wait_timeout(self, mql: MQL, httpx_mock) -> None:
        """Test giving up once the wait budget is spent."""
        httpx_mock.add_response(url=GENERATIONS_URL, method="POST", json=video_job("queued"))

        with pytest.raises(VideoTaskError, match="timed out"):
            await mql.video.create_and_wait(
                VideoGenerationRequest(model="sora", prompt="x"), max_wait_ms=0
            )

    @pytest.mark.asyncio
    async def test_download(self, mql: MQL, httpx_mock) -> None:
        """Test video content is returned as bytes."""
        httpx_mock.add_response(
            url=f"{GATEWAY_URL}/v1/videos/video_abc/content",
            content=b"\x00\x00\x00\x18ftypmp42",
            headers={"Content-Type": "video/mp4"},
        )

        assert await mql.video.download("video_abc") == b"\x00\x00\x00\x18ftypmp42"

    @pytest.mark.asyncio
    async def test_wait_and_get_download_url(self, mql: MQL, httpx_mock) -> None:
        """Test a provider task is polled and its file exchanged for a URL."""
        query_url = f"{GATEWAY_URL}/v1/videos/query/176843862716480?include_download_url=true"
        httpx_mock.add_response(
            url=query_url, json={"task_id": "176843862716480", "status": "Processing"}
        )
        httpx_mock.add_response(
            url=query_url,
            json={"task_id": "176843862716480", "status": "Success", "file_id": "f-9"},
        )
        httpx_mock.add_response(
            url=f"{GATEWAY_URL}/v1/videos/download/f-9",
            json={"download_url": "https://cdn.test/f-9.mp4", "file_id": "f-9"},
        )

        link = await mql.video.wait_and_get_download_url("176843862716480", poll_interval_ms=0)

        assert link.download_url == "https://cdn.test/f-9.mp4"
        assert link.expires_in_seconds == 3600

    @pytest.mark.asyncio
    async def test_query_task_without_download_url(self, mql: MQL, httpx_mock) -> None:
        """Test the download URL flag is omitted by default."""
        httpx_mock.add_response(
            url=f"{GATEWAY_URL}/v1/videos/query/t1", json={"task_id": "t1", "status": "Queueing"}
        )

        status = await mql.video.query_task("t1")

        assert status.status == "Queueing"
