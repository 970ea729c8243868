"""Allow-list sanitization for user-supplied embed markup."""
from dataclasses import dataclass
from typing import FrozenSet, Optional

import nh3

from catalog.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SanitizerProfile:
    """Tags and attributes a rendering context accepts."""
    name: str
    tags: FrozenSet[str]
    attributes: FrozenSet[str]


# Track players on the public album page
PLAYER_PROFILE = SanitizerProfile(
    name="player",
    tags=frozenset({"iframe", "audio", "source"}),
    attributes=frozenset({
        "src", "width", "height", "frameborder", "allow", "allowfullscreen",
        "controls", "type", "style", "class",
    }),
)

# Standalone track notes
NOTES_PROFILE = SanitizerProfile(
    name="notes",
    tags=frozenset({"iframe"}),
    attributes=frozenset({"src", "width", "height", "frameborder", "allow", "allowfullscreen"}),
)


def _is_forbidden(attribute: str) -> bool:
    name = attribute.lower()
    return name.startswith("on") or name.startswith("data-")


def _attribute_filter(tag: str, attribute: str, value: str) -> Optional[str]:
    if _is_forbidden(attribute):
        return None
    return value


def sanitize_embed(markup: Optional[str], profile: SanitizerProfile = PLAYER_PROFILE) -> str:
    """
    Strip everything not on the profile's allow-list.

    Script and style elements are removed with their content. Event
    handlers and data-* attributes are never emitted, whatever the
    profile lists. Markup the sanitizer cannot process yields "".
    """
    if not markup:
        return ""

    attributes = {a for a in profile.attributes if not _is_forbidden(a)}
    try:
        return nh3.clean(
            markup,
            tags=set(profile.tags),
            attributes={tag: set(attributes) for tag in profile.tags},
            attribute_filter=_attribute_filter,
            strip_comments=True,
        )
    except Exception as e:
        logger.warning("Embed sanitization failed", context={"profile": profile.name, "error": str(e)})
        return ""


def sanitize_player(markup: Optional[str]) -> str:
    """Sanitize a track's stream embed for the player."""
    return sanitize_embed(markup, PLAYER_PROFILE)


def sanitize_note(markup: Optional[str]) -> str:
    """Sanitize a standalone track note."""
    return sanitize_embed(markup, NOTES_PROFILE)
