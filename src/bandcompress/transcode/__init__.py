"""Video compression for interview recordings.

This package provides two levels of functionality:
- core: Low-level FFmpeg utilities (height probe, command building, running ffmpeg)
- batch: Per-file job running and discovery of video files
"""

from .core import (
    probe_height,
    needs_downscale,
    build_ffmpeg_cmd,
    transcode_video,
)
from .batch import (
    EncodeJob,
    JobOutcome,
    run_job,
    collect_video_files,
)

__all__ = [
    # Probing
    "probe_height",
    "needs_downscale",
    # Transcoding
    "build_ffmpeg_cmd",
    "transcode_video",
    # Jobs
    "EncodeJob",
    "JobOutcome",
    "run_job",
    "collect_video_files",
]
