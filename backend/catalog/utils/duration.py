"""Conversion between "M:SS" display durations and stored interval text."""
import re
from typing import Optional

from catalog.errors import InvalidDurationFormat

_MINUTES = re.compile(r"(\d+)\s*minute")
_SECONDS = re.compile(r"(\d+)\s*second")
_CLOCK = re.compile(r"^\s*(\d+):(\d{1,2}):(\d{1,2})(?:\.\d+)?\s*$")
_DIGITS = re.compile(r"\d+", re.ASCII)


def encode(display: str) -> str:
    """
    Convert "M:SS" to an interval string.

    "3:45" -> "3 minutes 45 seconds"

    Raises:
        InvalidDurationFormat: wrong segment count, non-digit parts,
            negative values or seconds >= 60.
    """
    parts = (display or "").strip().split(":")
    if len(parts) != 2:
        raise InvalidDurationFormat(f"Invalid duration format: {display!r}")

    minutes_text, seconds_text = (p.strip() for p in parts)
    if not _DIGITS.fullmatch(minutes_text) or not _DIGITS.fullmatch(seconds_text):
        raise InvalidDurationFormat(f"Invalid duration values: {display!r}")

    minutes = int(minutes_text)
    seconds = int(seconds_text)
    if seconds >= 60:
        raise InvalidDurationFormat(f"Seconds must be less than 60: {display!r}")

    return f"{minutes} minutes {seconds} seconds"


def decode(interval: Optional[str]) -> str:
    """
    Convert an interval string back to "MM:SS".

    Missing minute or second components count as zero. Clock-style
    intervals ("00:03:45", as PostgreSQL renders them) fold hours
    into minutes.
    """
    text = str(interval or "")

    clock = _CLOCK.match(text)
    if clock:
        hours, minutes, seconds = (int(g) for g in clock.groups())
        return f"{hours * 60 + minutes:02d}:{seconds:02d}"

    minutes_match = _MINUTES.search(text)
    seconds_match = _SECONDS.search(text)

    minutes = int(minutes_match.group(1)) if minutes_match else 0
    seconds = int(seconds_match.group(1)) if seconds_match else 0

    return f"{minutes:02d}:{seconds:02d}"


def canonical(display: str) -> str:
    """Zero-pad the minutes of a valid "M:SS" value ("3:05" -> "03:05")."""
    minutes, seconds = display.strip().split(":")
    return f"{int(minutes):02d}:{seconds.strip()}"
