"""
Exception types for the interview compressor.

Only conditions that stop a whole run are raised as exceptions. Per-file
problems (missing source, encoder failure, collisions) are reported as job
outcomes instead so a single bad file never halts a batch.
"""


class BandCompressError(Exception):
    """Base class for all errors raised by the compressor."""


class ToolMissingError(BandCompressError):
    """Raised when a required external binary (ffmpeg, ffprobe) is not on PATH."""

    def __init__(self, binary: str):
        super().__init__(f"'{binary}' not found on PATH. Install FFmpeg (https://ffmpeg.org/download.html) "
                         f"or point BANDCOMPRESS_FFMPEG / BANDCOMPRESS_FFPROBE at the binaries.")
        self.binary = binary


class ConfigError(BandCompressError):
    """Raised when a configuration file cannot be read or written."""
