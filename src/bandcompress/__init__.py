"""
A single-preset batch compressor for band interview recordings.

This package turns folders of camera footage into small, web-friendly MP4
files with one fixed H.264/AAC profile. Core functionalities include
discovering video files, deriving band/title/date tags from file names,
probing the source height with ffprobe, picking a collision-free output name
and running ffmpeg once per file while keeping a tally of the results.

The package is organized into several categories:
- Metadata extraction from file names (band, title, interview date).
- Transcoding: probing, command building and the per-file job runner.
- The batch pipeline that folds job outcomes into run counters.
- Utilities for configuration, logging, system commands and file handling.
"""

__version__ = "1.0.0"

# Debug flag for controlling verbose output
DEBUG: bool = False

__all__ = ["__version__", "DEBUG"]
