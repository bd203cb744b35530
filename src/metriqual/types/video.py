"""
Video generation types.

Two job flavours exist: generation jobs addressed by video id, and
provider tasks addressed by task id and downloaded through a file id.
"""

from __future__ import annotations

from typing import Literal

from metriqual.types.base import MqlModel


class VideoGenerationRequest(MqlModel):
    model: str
    prompt: str
    duration: int | None = None
    resolution: str | None = None
    aspect_ratio: str | None = None
    n: int | None = None


class VideoError(MqlModel):
    code: str | None = None
    message: str


class VideoGenerationResponse(MqlModel):
    id: str
    object: str = "video"
    created_at: int = 0
    status: Literal["queued", "in_progress", "completed", "failed"]
    model: str = ""
    download_url: str | None = None
    progress: float | None = None
    prompt: str | None = None
    size: str | None = None
    seconds: int | str | None = None
    n_variants: int | None = None
    resolution: str | None = None
    error: VideoError | None = None


class VideoTaskStatusResponse(MqlModel):
    id: str = ""
    object: str = ""
    task_id: str
    status: Literal["Preparing", "Queueing", "Processing", "Success", "Fail"]
    file_id: str | None = None
    video_width: int | None = None
    video_height: int | None = None
    download_url: str | None = None
    error: str | None = None


class VideoDownloadResponse(MqlModel):
    """Short-lived download link for a finished task's file."""

    download_url: str
    file_id: str
    expires_in_seconds: int = 3600
