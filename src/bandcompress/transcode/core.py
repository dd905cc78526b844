"""
Functions to probe source height and run ffmpeg with the fixed compression profile.

This module asks ffprobe for the height of the first video stream, decides
whether the output needs to be scaled down to 1080 lines, builds the one
ffmpeg command line every file is encoded with (H.264 veryfast CRF 22,
AAC 160k, fast-start MP4) and runs it while logging progress.
"""
import re
import subprocess
import time
from pathlib import Path
from typing import Optional, List, Sequence, Tuple

from bandcompress.utils import logger, system_util, LogLevel
from bandcompress.utils.constants import (
    AUDIO_BITRATE,
    AUDIO_CODEC,
    CRF,
    MAX_OUTPUT_HEIGHT,
    PRESET,
    PROGRESS_LOG_INTERVAL,
    SCALE_FILTER,
    VIDEO_CODEC,
)

_TIME_RE = re.compile(r"time=(\S+)")
_SPEED_RE = re.compile(r"speed=\s*(\S+)")


def probe_height(path: Path, ffprobe: str = "ffprobe") -> Optional[int]:
    """
    Return the height of the first video stream, or None if it cannot be determined.

    Any failure (tool error, no video stream, unexpected output) yields None;
    callers treat None as "do not scale".
    """
    cmd = [
        ffprobe, "-v", "error",
        "-select_streams", "v:0",
        "-show_entries", "stream=height",
        "-of", "csv=p=0",
        str(path),
    ]
    try:
        code, out, err = system_util.run_cmd(cmd)
    except OSError as e:
        logger.log("probe.failed", LogLevel.DEBUG, file=path.name, error=str(e))
        return None
    if code != 0:
        logger.log("probe.failed", LogLevel.DEBUG, file=path.name, exit_code=code, error=err.strip()[:200])
        return None

    first_line = out.strip().splitlines()[0].strip().rstrip(",") if out.strip() else ""
    try:
        height = int(first_line)
    except ValueError:
        logger.log("probe.unparsed", LogLevel.DEBUG, file=path.name, output=out.strip()[:50])
        return None
    return height


def needs_downscale(height: Optional[int]) -> bool:
    """Scale only a known height above 1080. Never upscale."""
    return height is not None and height > MAX_OUTPUT_HEIGHT


def build_ffmpeg_cmd(src: Path, dst: Path, tags: Sequence[Tuple[str, str]], scale: bool,
                     ffmpeg: str = "ffmpeg", crf: int = CRF) -> List[str]:
    """Build the ffmpeg command for one file. `-n` makes ffmpeg refuse to overwrite `dst`."""
    cmd = [
        ffmpeg,
        "-hide_banner",
        "-loglevel", "error",
        "-stats",
        "-n",
        "-i", str(src),
    ]

    if scale:
        cmd += ["-vf", SCALE_FILTER]

    cmd += [
        "-c:v", VIDEO_CODEC,
        "-preset", PRESET,
        "-crf", str(crf),
        "-c:a", AUDIO_CODEC,
        "-b:a", AUDIO_BITRATE,
        "-movflags", "+faststart",
    ]

    for key, value in tags:
        cmd += ["-metadata", f"{key}={value}"]

    cmd.append(str(dst))
    return cmd


def transcode_video(cmd: List[str], src: Path, debug: bool = False) -> Tuple[int, str]:
    """
    Run a prepared ffmpeg command to completion, logging progress lines periodically.

    Args:
        cmd: Command from build_ffmpeg_cmd
        src: Source file (for log fields only)
        debug: Log the full command line

    Returns:
        Tuple of (exit_code, stderr)

    Raises:
        OSError: If ffmpeg cannot be started
    """
    if debug:
        logger.log("transcode.cmd", LogLevel.DEBUG, file=src.name, cmd=" ".join(cmd))

    process = subprocess.Popen(
        cmd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
    )

    stderr_output = []
    last_progress_log = time.time()

    # ffmpeg -stats rewrites one status line with \r; universal newlines split it
    while True:
        line = process.stderr.readline()
        if not line and process.poll() is not None:
            break
        if not line:
            continue

        if "time=" in line and "speed=" in line:
            now = time.time()
            if now - last_progress_log >= PROGRESS_LOG_INTERVAL:
                time_match = _TIME_RE.search(line)
                speed_match = _SPEED_RE.search(line)
                if time_match and speed_match:
                    logger.log("transcode.progress", LogLevel.INFO,
                               file=src.name,
                               position=time_match.group(1),
                               speed=speed_match.group(1))
                last_progress_log = now
        else:
            stderr_output.append(line)

    _, remaining_stderr = process.communicate()
    stderr_output.append(remaining_stderr)

    return process.returncode, "".join(stderr_output)
