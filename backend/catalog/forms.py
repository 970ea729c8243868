"""Controlled form state and the pure reducers that update it."""
import enum
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional

from catalog.errors import FieldError
from catalog.models.enums import (
    AlbumStatus,
    AlbumType,
    ProductionStage,
    StandaloneVisibility,
    TrackStatus,
    Visibility,
)


class EntityKind(str, enum.Enum):
    ALBUM = "album"
    TRACK = "track"
    STANDALONE_TRACK = "standalone_track"


@dataclass(frozen=True)
class FormState:
    """Values being edited, the errors against them, and an optional notice."""
    values: Dict[str, Any] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)
    notice: Optional[str] = None

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def error_for(self, name: str) -> Optional[str]:
        return self.errors.get(name)


_TRACK_DEFAULTS = {
    "track_name": "",
    "duration": "",
    "track_status": TrackStatus.WIP.value,
    "stage_of_production": ProductionStage.CONCEPTION.value,
    "allow_stream": True,
    "stream_embed": "",
    "isrc": "",
    "purchase_link": "",
    "commentary": "",
    "artists": [],
    "composers": [],
    "key_contributors": [],
}


def initial_form(kind: EntityKind) -> FormState:
    """Blank form for creating an entity of the given kind."""
    kind = EntityKind(kind)
    if kind == EntityKind.ALBUM:
        values = {
            "album_name": "",
            "album_artist": "",
            "catalog_number": "",
            "album_type": AlbumType.LP.value,
            "status": AlbumStatus.IN_DEVELOPMENT.value,
            "visibility": Visibility.PUBLIC.value,
            "artwork_front": "",
            "streaming_links": {},
            "purchase_links": {},
            "release_date": "",
            "removal_date": "",
            "album_duration": "",
            "commentary": "",
        }
    elif kind == EntityKind.TRACK:
        values = dict(_TRACK_DEFAULTS, track_number=1, visibility=Visibility.PUBLIC.value)
    else:
        values = dict(
            _TRACK_DEFAULTS,
            album_artist="",
            visibility=StandaloneVisibility.PUBLIC.value,
        )
    # Fresh containers so states never share mutable values
    return FormState(values={k: _copy(v) for k, v in values.items()})


def load_form(values: Dict[str, Any]) -> FormState:
    """Form preloaded with stored values."""
    return FormState(values={k: _copy(v) for k, v in values.items()})


def update_field(state: FormState, name: str, value: Any) -> FormState:
    """Set one field and clear the errors that were reported against it."""
    values = dict(state.values)
    if "." in name:
        # Nested map entry, e.g. streaming_links.spotify
        parent, key = name.split(".", 1)
        nested = dict(values.get(parent) or {})
        nested[key] = value
        values[parent] = nested
    else:
        values[name] = value

    errors = {
        k: v for k, v in state.errors.items()
        if k != name and not k.startswith(name + ".")
    }
    return replace(state, values=values, errors=errors)


def apply_errors(state: FormState, errors: Iterable[FieldError]) -> FormState:
    """Replace the form's errors with a fresh validation outcome."""
    return replace(state, errors={e.field: e.message for e in errors})


def _copy(value: Any) -> Any:
    if isinstance(value, dict):
        return dict(value)
    if isinstance(value, list):
        return list(value)
    return value
