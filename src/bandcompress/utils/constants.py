"""
Constants and configuration settings for the interview compressor.

This module holds the fixed encoding profile, the accepted video container
extensions, the filename date patterns used for tagging, status codes for
job outcomes and the environment variable names read at startup. A `.env`
file in the working directory is loaded first so the variables can be kept
next to the footage.
"""

import os
import re

from dotenv import load_dotenv

load_dotenv()

# Fixed encoding profile
VIDEO_CODEC = "libx264"
PRESET = "veryfast"
CRF = 22
AUDIO_CODEC = "aac"
AUDIO_BITRATE = "160k"
MAX_OUTPUT_HEIGHT = 1080
SCALE_FILTER = f"scale=-2:{MAX_OUTPUT_HEIGHT}"
OUTPUT_EXTENSION = ".mp4"

# Collision handling
COLLISION_RENAME = "rename"
COLLISION_SKIP = "skip"
COLLISION_POLICIES = (COLLISION_RENAME, COLLISION_SKIP)
COLLISION_LABEL = "compressed"

# Run settings
WORKERS = 1

# Seconds between two encoder progress lines in the log
PROGRESS_LOG_INTERVAL = 30

# Accepted video file extensions
VIDEO_EXTENSIONS = {".mp4", ".mov", ".mkv", ".m4v", ".avi", ".mpg", ".mpeg", ".mts", ".m2ts", ".wmv"}

# Regex patterns for filename parsing, tried in order
_SUFFIX = r"(?:\s+-\s+.*)?"
COMPACT_DATE_REGEX = re.compile(rf"^(?P<band>.+)\s+(?P<day>\d{{2}})(?P<month>\d{{2}})(?P<year>\d{{4}}){_SUFFIX}$")
SEPARATED_DATE_REGEX = re.compile(
    rf"^(?P<band>.+)\s+(?P<day>\d{{2}})[.-](?P<month>\d{{2}})[.-](?P<year>\d{{4}}){_SUFFIX}$"
)
LOOSE_DATE_REGEX = re.compile(r"(?<!\d)(?P<day>\d{2})(?P<month>\d{2})(?P<year>\d{4})(?!\d)")
DATE_REGEXES = [COMPACT_DATE_REGEX, SEPARATED_DATE_REGEX]

# Environment configuration
CONFIG_PATH = os.getenv("BANDCOMPRESS_CONFIG")
FFMPEG_BINARY = os.getenv("BANDCOMPRESS_FFMPEG", "ffmpeg")
FFPROBE_BINARY = os.getenv("BANDCOMPRESS_FFPROBE", "ffprobe")
LOG_FILE = os.getenv("BANDCOMPRESS_LOG_FILE")

# Processing status codes
STATUS_OK = "OK"
STATUS_SKIP = "SKIP"
STATUS_FAIL = "FAIL"
