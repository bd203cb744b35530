"""
Video API - generation jobs and provider video tasks.

Generation jobs are created, polled by id and downloaded as raw bytes.
Provider tasks are polled by task id; a finished task yields a file id
that is exchanged for a short-lived download URL.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING
from urllib.parse import quote

from metriqual.errors import VideoTaskError
from metriqual.telemetry import get_logger
from metriqual.types import (
    VideoDownloadResponse,
    VideoGenerationRequest,
    VideoGenerationResponse,
    VideoTaskStatusResponse,
    decode,
)

if TYPE_CHECKING:
    from metriqual.transport import HttpTransport

logger = get_logger("metriqual.api.video")

GENERATIONS_PATH = "/v1/videos/generations"
VIDEOS_PATH = "/v1/videos"

DEFAULT_POLL_INTERVAL_MS = 5000
DEFAULT_MAX_WAIT_MS = 600000


class VideoAPI:
    """Video generation.

    Example:
        >>> video = await mql.video.create_and_wait(
        ...     VideoGenerationRequest(model="sora-1.0-turbo", prompt="A cat playing piano")
        ... )
        >>> print(video.download_url)
    """

    def __init__(self, transport: HttpTransport) -> None:
        self._transport = transport

    async def create(self, request: VideoGenerationRequest) -> VideoGenerationResponse:
        """Start a video generation job."""
        data = await self._transport.post(GENERATIONS_PATH, request.to_payload())
        return decode(VideoGenerationResponse, data)

    async def get_status(self, video_id: str) -> VideoGenerationResponse:
        """Get the current state of a generation job."""
        data = await self._transport.get(f"{GENERATIONS_PATH}/{quote(video_id, safe='')}")
        return decode(VideoGenerationResponse, data)

    async def download(self, video_id: str) -> bytes:
        """Download the video of a completed job."""
        return await self._transport.get_binary(
            f"{VIDEOS_PATH}/{quote(video_id, safe='')}/content"
        )

    async def create_and_wait(
        self,
        request: VideoGenerationRequest,
        *,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        max_wait_ms: int = DEFAULT_MAX_WAIT_MS,
    ) -> VideoGenerationResponse:
        """Start a job and poll until it completes.

        Raises:
            VideoTaskError: If the job fails or exceeds ``max_wait_ms``
        """
        job = await self.create(request)
        deadline = time.monotonic() + max_wait_ms / 1000.0

        while time.monotonic() < deadline:
            await asyncio.sleep(poll_interval_ms / 1000.0)
            status = await self.get_status(job.id)
            logger.debug(
                "Video job polled", video_id=job.id, status=status.status, progress=status.progress
            )

            if status.status == "completed":
                return status
            if status.status == "failed":
                message = status.error.message if status.error else "Unknown error"
                raise VideoTaskError(f"Video generation failed: {message}", job_id=job.id)

        raise VideoTaskError(f"Video generation timed out after {max_wait_ms}ms", job_id=job.id)

    async def create_and_download(
        self,
        request: VideoGenerationRequest,
        *,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        max_wait_ms: int = DEFAULT_MAX_WAIT_MS,
    ) -> bytes:
        """Start a job, wait for it and download the result."""
        video = await self.create_and_wait(
            request, poll_interval_ms=poll_interval_ms, max_wait_ms=max_wait_ms
        )
        return await self.download(video.id)

    async def query_task(
        self,
        task_id: str,
        include_download_url: bool = False,
    ) -> VideoTaskStatusResponse:
        """Get the status of a provider video task."""
        data = await self._transport.get(
            f"{VIDEOS_PATH}/query/{quote(task_id, safe='')}",
            params={"include_download_url": True if include_download_url else None},
        )
        return decode(VideoTaskStatusResponse, data)

    async def get_download_url(self, file_id: str) -> VideoDownloadResponse:
        """Exchange a finished task's file id for a download URL (valid for an hour)."""
        data = await self._transport.get(f"{VIDEOS_PATH}/download/{quote(file_id, safe='')}")
        return decode(VideoDownloadResponse, data)

    async def wait_for_task(
        self,
        task_id: str,
        *,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        max_wait_ms: int = DEFAULT_MAX_WAIT_MS,
    ) -> VideoTaskStatusResponse:
        """Poll a provider task until it succeeds.

        The first query is made immediately.

        Raises:
            VideoTaskError: If the task fails or exceeds ``max_wait_ms``
        """
        deadline = time.monotonic() + max_wait_ms / 1000.0

        while time.monotonic() < deadline:
            status = await self.query_task(task_id, include_download_url=True)
            logger.debug("Video task polled", task_id=task_id, status=status.status)

            if status.status == "Success":
                return status
            if status.status == "Fail":
                raise VideoTaskError(
                    f"Video generation failed: {status.error or 'Unknown error'}",
                    job_id=task_id,
                )
            await asyncio.sleep(poll_interval_ms / 1000.0)

        raise VideoTaskError(f"Video generation timed out after {max_wait_ms}ms", job_id=task_id)

    async def wait_and_get_download_url(
        self,
        task_id: str,
        *,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        max_wait_ms: int = DEFAULT_MAX_WAIT_MS,
    ) -> VideoDownloadResponse:
        """Wait for a provider task and fetch the download URL of its file."""
        status = await self.wait_for_task(
            task_id, poll_interval_ms=poll_interval_ms, max_wait_ms=max_wait_ms
        )
        if not status.file_id:
            raise VideoTaskError("No file_id available for completed video", job_id=task_id)
        return await self.get_download_url(status.file_id)
