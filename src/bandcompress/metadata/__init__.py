"""
File name metadata for interview recordings.

Public API:
- `MediaDescriptor`: band, title and interview date recovered from a name.
- `extract_metadata`: best-effort parse of a file stem; never raises.
- `build_tags`: the ffmpeg `-metadata` pairs for a descriptor.

Example:
    from bandcompress import metadata
    desc = metadata.extract_metadata("Alpha 29.09.2025 - CamA")
    metadata.build_tags(desc)
    # [("artist", "Alpha"), ("date", "2025-09-29"), ("title", "Alpha 29.09.2025 - CamA"),
    #  ("comment", "Interview date 29.09.2025; Band: Alpha")]
"""
from .parser import (
    MediaDescriptor,
    build_tags,
    extract_metadata,
)

__all__ = [
    "MediaDescriptor",
    "build_tags",
    "extract_metadata",
]
