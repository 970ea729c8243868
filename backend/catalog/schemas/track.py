"""Track and standalone track schemas."""
from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from catalog.models.enums import ProductionStage, StandaloneVisibility, TrackStatus, Visibility
from catalog.schemas.credits import CreditList, credit_names, dump_credits
from catalog.schemas.fields import (
    DurationText,
    EmbedMarkup,
    OptionalUrl,
    optional_text,
    required_text,
)
from catalog.utils.duration import decode, encode
from catalog.utils.sanitize import sanitize_note, sanitize_player

TRACK_CREDIT_FIELDS = ("artists", "composers", "key_contributors")

TrackNumber = Annotated[StrictInt, Field(ge=1, le=999)]


class TrackFields(BaseModel):
    """Fields shared by album tracks and standalone tracks."""
    model_config = ConfigDict(extra="ignore")

    track_name: required_text("Track name", 200)
    duration: DurationText
    track_status: TrackStatus = TrackStatus.WIP
    stage_of_production: ProductionStage = ProductionStage.CONCEPTION
    allow_stream: bool = True
    stream_embed: EmbedMarkup = None
    isrc: optional_text("ISRC", 20) = None
    purchase_link: OptionalUrl = None
    commentary: optional_text("Commentary") = None

    artists: CreditList = None
    composers: CreditList = None
    key_contributors: CreditList = None

    def to_columns(self) -> Dict[str, Any]:
        """Column values, with the duration stored as an interval."""
        data = self.model_dump(exclude=set(TRACK_CREDIT_FIELDS))
        data["duration"] = encode(self.duration)
        data["stage_date"] = date.today()
        for name in TRACK_CREDIT_FIELDS:
            data[name] = dump_credits(getattr(self, name))
        return data

    @staticmethod
    def common_values(track) -> Dict[str, Any]:
        values = {
            "track_name": track.track_name,
            "duration": decode(track.duration),
            "track_status": _value(track.track_status),
            "stage_of_production": _value(track.stage_of_production),
            "visibility": _value(track.visibility),
            "allow_stream": True if track.allow_stream is None else track.allow_stream,
            "stream_embed": track.stream_embed or "",
            "isrc": track.isrc or "",
            "purchase_link": track.purchase_link or "",
            "commentary": track.commentary or "",
        }
        for name in TRACK_CREDIT_FIELDS:
            values[name] = list(getattr(track, name) or [])
        return values


class TrackForm(TrackFields):
    """Album track create/edit form."""
    track_number: TrackNumber
    visibility: Visibility = Visibility.PUBLIC

    @staticmethod
    def values_from(track) -> Dict[str, Any]:
        values = TrackFields.common_values(track)
        values["track_number"] = track.track_number
        return values


class StandaloneTrackForm(TrackFields):
    """Standalone track create/edit form."""
    album_artist: optional_text("Artist name", 200) = None
    visibility: StandaloneVisibility = StandaloneVisibility.PUBLIC

    @staticmethod
    def values_from(track) -> Dict[str, Any]:
        values = TrackFields.common_values(track)
        values["album_artist"] = track.album_artist or ""
        return values


class NoteForm(BaseModel):
    """New note on a standalone track."""
    model_config = ConfigDict(extra="ignore")

    note_content: required_text("Note content", 10000)
    user_initials: required_text("Initials", 10)


def _value(member) -> Optional[str]:
    return getattr(member, "value", member)


class TrackResponse(BaseModel):
    """Album track as shown on the catalog."""
    model_config = ConfigDict(from_attributes=True)

    track_id: int
    album_id: int
    track_number: int
    track_name: str
    duration: str  # MM:SS
    track_status: TrackStatus
    stage_of_production: ProductionStage
    stage_date: Optional[date] = None
    visibility: Visibility
    allow_stream: bool = True
    stream_embed: Optional[str] = None  # sanitized for the player
    isrc: Optional[str] = None
    purchase_link: Optional[str] = None
    commentary: Optional[str] = None
    artists: List[str] = []
    composers: List[str] = []

    @classmethod
    def from_model(cls, track) -> "TrackResponse":
        return cls(
            track_id=track.track_id,
            album_id=track.album_id,
            track_number=track.track_number,
            track_name=track.track_name,
            duration=decode(track.duration),
            track_status=track.track_status,
            stage_of_production=track.stage_of_production,
            stage_date=track.stage_date,
            visibility=track.visibility,
            allow_stream=True if track.allow_stream is None else track.allow_stream,
            stream_embed=sanitize_player(track.stream_embed) or None,
            isrc=track.isrc,
            purchase_link=track.purchase_link,
            commentary=track.commentary,
            artists=credit_names(track.artists),
            composers=credit_names(track.composers),
        )


class StandaloneTrackResponse(BaseModel):
    """Standalone track as shown on the catalog."""
    model_config = ConfigDict(from_attributes=True)

    track_id: int
    track_name: str
    album_artist: Optional[str] = None
    duration: str  # MM:SS
    track_status: TrackStatus
    stage_of_production: ProductionStage
    stage_date: Optional[date] = None
    visibility: StandaloneVisibility
    allow_stream: bool = True
    stream_embed: Optional[str] = None
    isrc: Optional[str] = None
    purchase_link: Optional[str] = None
    commentary: Optional[str] = None
    artists: List[str] = []
    composers: List[str] = []
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, track) -> "StandaloneTrackResponse":
        return cls(
            track_id=track.track_id,
            track_name=track.track_name,
            album_artist=track.album_artist,
            duration=decode(track.duration),
            track_status=track.track_status,
            stage_of_production=track.stage_of_production,
            stage_date=track.stage_date,
            visibility=track.visibility,
            allow_stream=True if track.allow_stream is None else track.allow_stream,
            stream_embed=sanitize_player(track.stream_embed) or None,
            isrc=track.isrc,
            purchase_link=track.purchase_link,
            commentary=track.commentary,
            artists=credit_names(track.artists),
            composers=credit_names(track.composers),
            created_at=track.created_at,
        )


class NoteResponse(BaseModel):
    """Track note with its content sanitized for display."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    track_id: int
    note_content: str
    user_initials: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, note) -> "NoteResponse":
        return cls(
            id=note.id,
            track_id=note.track_id,
            note_content=sanitize_note(note.note_content),
            user_initials=note.user_initials,
            created_at=note.created_at,
        )
