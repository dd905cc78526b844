"""
Utility functions for running system commands and locating external binaries.

This module provides helper functions to execute external commands and to
resolve the ffmpeg/ffprobe pair once at startup. The resolved paths travel
through the pipeline in a `Toolchain` instead of being looked up again for
every file.

Functions:
    - run_cmd: Executes a system command and returns its exit code along with its
      standard output and error streams.
    - which_or_raise: Resolves a binary on the system's PATH and raises
      ToolMissingError if it is unavailable.
"""
import shutil
import subprocess
from dataclasses import dataclass
from typing import Tuple, List

from bandcompress.utils.constants import FFMPEG_BINARY, FFPROBE_BINARY
from bandcompress.utils.errors import ToolMissingError


def run_cmd(cmd: List[str]) -> Tuple[int, str, str]:
    """Run a command and return (code, stdout, stderr); undecodable bytes become U+FFFD."""
    p = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE,
                       text=True, encoding="utf-8", errors="replace")
    return p.returncode, p.stdout, p.stderr


def which_or_raise(binary: str) -> str:
    """Return the full path of `binary`, raise ToolMissingError if it is not on PATH."""
    found = shutil.which(binary)
    if found is None:
        raise ToolMissingError(binary)
    return found


@dataclass(frozen=True)
class Toolchain:
    """Resolved paths of the external encoder and prober."""

    ffmpeg: str = "ffmpeg"
    ffprobe: str = "ffprobe"

    @classmethod
    def discover(cls, ffmpeg: str = FFMPEG_BINARY, ffprobe: str = FFPROBE_BINARY) -> "Toolchain":
        """Locate both binaries or raise ToolMissingError before any job starts."""
        return cls(ffmpeg=which_or_raise(ffmpeg), ffprobe=which_or_raise(ffprobe))
