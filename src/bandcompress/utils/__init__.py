"""
Constants, logging and system helpers shared by the compressor.

This package collects the fixed encoding profile and status codes, the
structured logger, subprocess helpers and the error types. Configuration
loading (`config`) and path helpers (`file_util`) are imported from their
modules directly.
"""

from .constants import (
    AUDIO_BITRATE,
    AUDIO_CODEC,
    COLLISION_RENAME,
    COLLISION_SKIP,
    CRF,
    MAX_OUTPUT_HEIGHT,
    OUTPUT_EXTENSION,
    PRESET,
    STATUS_FAIL,
    STATUS_OK,
    STATUS_SKIP,
    VIDEO_CODEC,
    VIDEO_EXTENSIONS,
    WORKERS,
)
from .errors import BandCompressError, ConfigError, ToolMissingError
from .logger import LogLevel

__all__ = [
    "AUDIO_BITRATE",
    "AUDIO_CODEC",
    "COLLISION_RENAME",
    "COLLISION_SKIP",
    "CRF",
    "MAX_OUTPUT_HEIGHT",
    "OUTPUT_EXTENSION",
    "PRESET",
    "STATUS_FAIL",
    "STATUS_OK",
    "STATUS_SKIP",
    "VIDEO_CODEC",
    "VIDEO_EXTENSIONS",
    "WORKERS",
    "BandCompressError",
    "ConfigError",
    "ToolMissingError",
    "LogLevel",
]
