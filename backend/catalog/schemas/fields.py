"""Reusable annotated field types for form schemas.

Strings are trimmed before any length or format check. Optional fields
treat an empty string as absent.
"""
import re
from datetime import date, datetime
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, AnyHttpUrl, BeforeValidator, TypeAdapter

URL_MAX_LENGTH = 500
EMBED_MAX_LENGTH = 5000
EMBED_TAG_TOKENS = ("<iframe", "<audio")

_url_adapter = TypeAdapter(AnyHttpUrl)
_DURATION = re.compile(r"^\d{1,2}:\d{2}$", re.ASCII)


def strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def blank_to_none(value: Any) -> Any:
    value = strip(value)
    if value == "":
        return None
    return value


def _check_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if len(value) > URL_MAX_LENGTH:
        raise ValueError(f"URL must be less than {URL_MAX_LENGTH} characters")
    try:
        _url_adapter.validate_python(value)
    except ValueError:
        raise ValueError("Must be a valid URL") from None
    return value


def required_text(label: str, max_length: int):
    """Trimmed, non-empty text of bounded length."""
    def check(value: str) -> str:
        if not value:
            raise ValueError(f"{label} is required")
        if len(value) > max_length:
            raise ValueError(f"{label} must be less than {max_length} characters")
        return value
    return Annotated[str, BeforeValidator(strip), AfterValidator(check)]


def optional_text(label: str, max_length: Optional[int] = None):
    """Trimmed text; empty becomes None."""
    def check(value: Optional[str]) -> Optional[str]:
        if value is not None and max_length is not None and len(value) > max_length:
            raise ValueError(f"{label} must be less than {max_length} characters")
        return value
    return Annotated[Optional[str], BeforeValidator(blank_to_none), AfterValidator(check)]


def _parse_date(value: Any) -> Any:
    value = blank_to_none(value)
    if value is None or isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(value).date()
        except ValueError:
            pass
    raise ValueError("Invalid date format")


def _check_duration(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if not _DURATION.match(value):
        raise ValueError("Duration must be in MM:SS format (e.g., 3:45)")
    if int(value.split(":")[1]) >= 60:
        raise ValueError("Seconds must be less than 60")
    return value


def _check_embed(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if len(value) > EMBED_MAX_LENGTH:
        raise ValueError(f"Embed code must be less than {EMBED_MAX_LENGTH} characters")
    if not any(token in value for token in EMBED_TAG_TOKENS):
        raise ValueError("Embed code must contain valid iframe or audio tag")
    return value


RequiredUrl = Annotated[str, BeforeValidator(strip), AfterValidator(_check_url)]
OptionalUrl = Annotated[Optional[str], BeforeValidator(blank_to_none), AfterValidator(_check_url)]
OptionalDate = Annotated[Optional[date], BeforeValidator(_parse_date)]
DurationText = Annotated[str, BeforeValidator(strip), AfterValidator(_check_duration)]
OptionalDurationText = Annotated[Optional[str], BeforeValidator(blank_to_none), AfterValidator(_check_duration)]
EmbedMarkup = Annotated[Optional[str], BeforeValidator(blank_to_none), AfterValidator(_check_embed)]
