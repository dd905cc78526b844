"""
Module for deriving tag metadata (band, title, interview date) from file names.

Interview recordings are named like "Alpha 29092025", "Alpha 29.09.2025" or
"Alpha 29-09-2025 - CamA". The parser recovers the band name and the date
from those names; anything it does not recognise still gets a title tag and
is encoded normally.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from bandcompress.utils.constants import DATE_REGEXES, LOOSE_DATE_REGEX


@dataclass(frozen=True)
class MediaDescriptor:
    band: str
    title_base: str
    date_iso: str = ""
    date_human: str = ""


def _format_dates(day: str, month: str, year: str) -> Tuple[str, str]:
    """Rearrange captured date parts into (YYYY-MM-DD, DD.MM.YYYY). No calendar checks."""
    return f"{year}-{month}-{day}", f"{day}.{month}.{year}"


def _match_band_date(stem: str) -> Optional[Tuple[str, str, str, str]]:
    for rx in DATE_REGEXES:
        m = rx.match(stem)
        if m:
            return m.group("band").strip(), m.group("day"), m.group("month"), m.group("year")

    m = LOOSE_DATE_REGEX.search(stem)
    if m:
        return stem[: m.start()].strip(), m.group("day"), m.group("month"), m.group("year")
    return None


def extract_metadata(stem: str) -> MediaDescriptor:
    """
    Parse a file name without extension into a MediaDescriptor.

    Tried in order, first match wins:
      "Alpha 29092025"          -> band "Alpha", 2025-09-29
      "Alpha 29.09.2025 - CamA" -> band "Alpha", 2025-09-29
      "Live_29092025_final"     -> band "Live_", 2025-09-29 (8 digits anywhere)
      "randomclip"              -> no band, no date
    The title is always the whole stem. Never raises.
    """
    found = _match_band_date(stem)
    if not found:
        return MediaDescriptor(band="", title_base=stem)

    band, day, month, year = found
    date_iso, date_human = _format_dates(day, month, year)
    return MediaDescriptor(band=band, title_base=stem, date_iso=date_iso, date_human=date_human)


def build_tags(descriptor: MediaDescriptor) -> List[Tuple[str, str]]:
    """
    Build the (key, value) metadata pairs passed to ffmpeg.

    The title is always set; artist and date only when known, and the comment
    only when both the band and the date are known.
    """
    tags = []
    if descriptor.band:
        tags.append(("artist", descriptor.band))
    if descriptor.date_iso:
        tags.append(("date", descriptor.date_iso))
    tags.append(("title", descriptor.title_base))
    if descriptor.band and descriptor.date_human:
        tags.append(("comment", f"Interview date {descriptor.date_human}; Band: {descriptor.band}"))
    return tags
