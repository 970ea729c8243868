"""Utility functions."""
from catalog.utils.duration import encode as duration_to_interval, decode as interval_to_duration
from catalog.utils.catalog_number import format_catalog_number, to_roman
from catalog.utils.sanitize import sanitize_embed, sanitize_player, sanitize_note

__all__ = [
    "duration_to_interval",
    "interval_to_duration",
    "format_catalog_number",
    "to_roman",
    "sanitize_embed",
    "sanitize_player",
    "sanitize_note",
]
