"""
Output path helpers for compressed files.

`resolve_output_path` picks a destination that does not exist yet, adding
" (compressed)", " (compressed 2)", ... before the extension until a free
name is found. It never creates anything, so calling it twice against an
unchanged folder returns the same path. `OutputReservations` wraps it with a
lock for runs with more than one worker, where two jobs could otherwise pick
the same free name before either has written to it.
"""
import threading
from pathlib import Path
from typing import Collection, Set

from bandcompress.utils.constants import COLLISION_LABEL, OUTPUT_EXTENSION


def collision_name(base: str, attempt: int) -> str:
    """Name for the `attempt`-th collision: 1 -> "base (compressed)", 2 -> "base (compressed 2)"."""
    if attempt == 1:
        return f"{base} ({COLLISION_LABEL})"
    return f"{base} ({COLLISION_LABEL} {attempt})"


def resolve_output_path(directory: Path, base: str, extension: str = OUTPUT_EXTENSION,
                        taken: Collection[Path] = ()) -> Path:
    """
    Return a path under `directory` for `base` + `extension` that is not in use.

    A candidate is in use when it exists on disk or is listed in `taken`.
    The first candidate is returned unchanged when it is free.
    """
    candidate = directory / f"{base}{extension}"
    attempt = 0
    while candidate.exists() or candidate in taken:
        attempt += 1
        candidate = directory / f"{collision_name(base, attempt)}{extension}"
    return candidate


class OutputReservations:
    """Thread-safe set of destinations already handed out during a run."""

    def __init__(self):
        self._lock = threading.Lock()
        self._claimed: Set[Path] = set()

    def claim(self, directory: Path, base: str, extension: str = OUTPUT_EXTENSION) -> Path:
        with self._lock:
            target = resolve_output_path(directory, base, extension, taken=self._claimed)
            self._claimed.add(target)
            return target

    def claim_exact(self, path: Path) -> bool:
        """Claim `path` itself; False if it exists or was already handed out."""
        with self._lock:
            if path.exists() or path in self._claimed:
                return False
            self._claimed.add(path)
            return True
