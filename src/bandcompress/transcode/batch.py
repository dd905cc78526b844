"""
This module provides discovery of video files and the per-file compression job.

`collect_video_files` expands a user-supplied path into the files to
compress. `run_job` takes one file through the whole chain: checks, tag
extraction, output naming, height probe and the single ffmpeg call. It
reports what happened as a `JobOutcome` instead of raising, so one bad file
never stops a batch.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import bandcompress as bandcompress_module
from bandcompress import metadata
from bandcompress.utils import (
    COLLISION_RENAME,
    COLLISION_SKIP,
    CRF,
    OUTPUT_EXTENSION,
    STATUS_FAIL,
    STATUS_OK,
    STATUS_SKIP,
    VIDEO_EXTENSIONS,
    LogLevel,
    logger,
)
from bandcompress.utils.file_util import OutputReservations, resolve_output_path
from bandcompress.utils.system_util import Toolchain
from . import core

# ffmpeg's -n refusal: "File '<dst>' already exists. Exiting."
_ALREADY_EXISTS = "already exists. Exiting"


@dataclass(frozen=True)
class EncodeJob:
    source: Path
    output_dir: Path
    crf: int = CRF


@dataclass(frozen=True)
class JobOutcome:
    """Result of one job: OK with a target, SKIP with a reason, or FAIL with a reason."""

    source: Path
    status: str
    target: Optional[Path] = None
    reason: Optional[str] = None
    exit_code: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.status == STATUS_OK

    @property
    def skipped(self) -> bool:
        return self.status == STATUS_SKIP

    @property
    def failed(self) -> bool:
        return self.status == STATUS_FAIL


def _fail(src: Path, reason: str, exit_code: Optional[int] = None) -> JobOutcome:
    return JobOutcome(src, STATUS_FAIL, reason=reason, exit_code=exit_code)


def run_job(job: EncodeJob, tools: Toolchain, on_collision: str = COLLISION_RENAME,
            reservations: Optional[OutputReservations] = None) -> JobOutcome:
    """Compress one source file into `job.output_dir`."""
    src = job.source

    if not src.is_file():
        return _fail(src, "source not found")
    if not os.access(src, os.R_OK):
        return _fail(src, "source unreadable")

    try:
        job.output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return _fail(src, f"output directory unavailable: {e}")

    descriptor = metadata.extract_metadata(src.stem)
    logger.log("metadata.parsed", LogLevel.DEBUG,
               file=src.name,
               band=descriptor.band or None,
               date=descriptor.date_iso or None)

    if on_collision == COLLISION_SKIP:
        dst = job.output_dir / f"{src.stem}{OUTPUT_EXTENSION}"
        free = reservations.claim_exact(dst) if reservations is not None else not dst.exists()
        if not free:
            return JobOutcome(src, STATUS_SKIP, target=dst, reason="already exists")
    elif reservations is not None:
        dst = reservations.claim(job.output_dir, src.stem)
    else:
        dst = resolve_output_path(job.output_dir, src.stem)

    height = core.probe_height(src, tools.ffprobe)
    scale = core.needs_downscale(height)
    cmd = core.build_ffmpeg_cmd(src, dst, metadata.build_tags(descriptor), scale,
                                ffmpeg=tools.ffmpeg, crf=job.crf)

    logger.log("transcode.start", LogLevel.INFO,
               file=src.name,
               dst=dst.name,
               height=height,
               scale=scale)

    debug = getattr(bandcompress_module, "DEBUG", False)
    taken_before = dst.exists()
    try:
        code, err = core.transcode_video(cmd, src, debug=debug)
    except OSError as e:
        return _fail(src, f"ffmpeg could not start: {e}")

    if code != 0:
        # a file at dst is ours only if it was absent at start and ffmpeg did not refuse it (-n)
        if taken_before or _ALREADY_EXISTS in err:
            logger.log("transcode.target_taken", LogLevel.WARN, file=src.name, dst=dst)
        elif dst.exists():
            try:
                dst.unlink()
            except OSError:
                logger.log("transcode.cleanup_failed", LogLevel.WARN, file=dst.name)
        logger.log("transcode.failed", LogLevel.ERROR,
                   file=src.name,
                   exit_code=code,
                   error=err.strip()[-200:] if debug else "see ffmpeg output with --debug")
        return _fail(src, f"ffmpeg code {code}", exit_code=code)

    return JobOutcome(src, STATUS_OK, target=dst)


def _log_walk_error(error: OSError) -> None:
    logger.log("collect.unreadable", LogLevel.DEBUG, path=getattr(error, "filename", None), error=str(error))


def collect_video_files(path: Path) -> List[Path]:
    """
    Expand a user path into the files to compress.

    A file is returned as-is. A folder is searched recursively for video
    extensions (case-insensitive) in sorted order; unreadable entries are
    left out. A missing path gives an empty list.
    """
    path = Path(path)
    if path.is_file():
        return [path.resolve()]
    if not path.is_dir():
        return []

    files = []
    for dirpath, dirnames, filenames in os.walk(path, onerror=_log_walk_error):
        dirnames.sort()
        for name in sorted(filenames):
            if os.path.splitext(name)[1].lower() not in VIDEO_EXTENSIONS:
                continue
            p = Path(dirpath) / name
            try:
                if p.is_file():
                    files.append(p.resolve())
            except OSError as e:
                _log_walk_error(e)
    return files
