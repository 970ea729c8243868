"""Album schemas."""
import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from catalog.models.enums import AlbumStatus, AlbumType, Visibility
from catalog.schemas.credits import CreditList, credit_names, dump_credits
from catalog.schemas.fields import (
    OptionalDate,
    OptionalDurationText,
    OptionalUrl,
    RequiredUrl,
    optional_text,
    required_text,
)
from catalog.utils.catalog_number import format_catalog_number
from catalog.utils.duration import decode, encode

CATALOG_NUMBER_PATTERN = re.compile(r"^[A-Za-z0-9\-_]+$")

STREAMING_PLATFORMS = ("apple_music", "youtube_music", "tidal", "spotify")
PURCHASE_FORMATS = ("itunes", "artcore", "bandcamp", "cd_vinyl")

ARTWORK_FIELDS = (
    "artwork_front",
    "artwork_back",
    "artwork_sleeve",
    "artwork_sticker",
    "artwork_fullcover",
    "artwork_fullinner",
)

CREDIT_FIELDS = ("producers", "engineers", "mastering", "key_contributors")


class AlbumForm(BaseModel):
    """Album create/edit form.

    A validated instance is the only thing the catalog service writes.
    """
    model_config = ConfigDict(extra="ignore")

    album_name: required_text("Album name", 200)
    album_artist: required_text("Artist name", 200)
    catalog_number: required_text("Catalog number", 50)
    album_type: AlbumType
    status: AlbumStatus = AlbumStatus.IN_DEVELOPMENT
    visibility: Visibility = Visibility.PUBLIC

    artwork_front: RequiredUrl
    artwork_back: OptionalUrl = None
    artwork_sleeve: OptionalUrl = None
    artwork_sticker: OptionalUrl = None
    artwork_fullcover: OptionalUrl = None
    artwork_fullinner: OptionalUrl = None

    streaming_links: Dict[str, OptionalUrl] = {}
    purchase_links: Dict[str, OptionalUrl] = {}

    upc: optional_text("UPC", 20) = None
    label: optional_text("Label", 200) = None
    distributor: optional_text("Distributor", 200) = None
    release_date: OptionalDate = None
    removal_date: OptionalDate = None
    vinyl_cd_release_date: OptionalDate = None
    album_duration: OptionalDurationText = None
    commentary: optional_text("Commentary") = None

    producers: CreditList = None
    engineers: CreditList = None
    mastering: CreditList = None
    key_contributors: CreditList = None

    @field_validator("catalog_number")
    @classmethod
    def catalog_number_charset(cls, value: str) -> str:
        if not CATALOG_NUMBER_PATTERN.match(value):
            raise ValueError(
                "Catalog number can only contain letters, numbers, hyphens, and underscores"
            )
        return value

    @field_validator("streaming_links", "purchase_links", mode="before")
    @classmethod
    def links_mapping(cls, value: Any) -> Any:
        if value is None:
            return {}
        return value

    @model_validator(mode="after")
    def normalize(self) -> "AlbumForm":
        # Empty link values mean "no link"
        self.streaming_links = {k: v for k, v in self.streaming_links.items() if v}
        self.purchase_links = {k: v for k, v in self.purchase_links.items() if v}
        # A removal date only means something for removed albums
        if self.status != AlbumStatus.REMOVED:
            self.removal_date = None
        return self

    def to_columns(self) -> Dict[str, Any]:
        """Column values for the albums table."""
        data = self.model_dump(exclude=set(CREDIT_FIELDS) | {"album_duration"})
        data["album_duration"] = encode(self.album_duration) if self.album_duration else None
        data["streaming_links"] = data["streaming_links"] or None
        data["purchase_links"] = data["purchase_links"] or None
        for name in CREDIT_FIELDS:
            data[name] = dump_credits(getattr(self, name))
        return data

    @staticmethod
    def values_from(album) -> Dict[str, Any]:
        """Form values for editing a stored album."""
        values = {
            "album_name": album.album_name,
            "album_artist": album.album_artist,
            "catalog_number": album.catalog_number,
            "album_type": _value(album.album_type),
            "status": _value(album.status),
            "visibility": _value(album.visibility),
            "streaming_links": dict(album.streaming_links or {}),
            "purchase_links": dict(album.purchase_links or {}),
            "upc": album.upc or "",
            "label": album.label or "",
            "distributor": album.distributor or "",
            "release_date": _iso(album.release_date),
            "removal_date": _iso(album.removal_date),
            "vinyl_cd_release_date": _iso(album.vinyl_cd_release_date),
            "album_duration": decode(album.album_duration) if album.album_duration else "",
            "commentary": album.commentary or "",
        }
        for name in ARTWORK_FIELDS:
            values[name] = getattr(album, name) or ""
        for name in CREDIT_FIELDS:
            values[name] = list(getattr(album, name) or [])
        return values


def _value(member) -> Optional[str]:
    return getattr(member, "value", member)


def _iso(value: Optional[date]) -> str:
    return value.isoformat() if value else ""


class AlbumResponse(BaseModel):
    """Album as shown on the catalog."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    album_name: str
    album_artist: str
    catalog_number: str
    catalog_number_display: str
    album_type: AlbumType
    status: AlbumStatus
    visibility: Visibility
    artwork_front: str
    artworks: List[str] = []
    release_date: Optional[date] = None
    removal_date: Optional[date] = None
    vinyl_cd_release_date: Optional[date] = None
    album_duration: Optional[str] = None  # MM:SS
    upc: Optional[str] = None
    label: Optional[str] = None
    distributor: Optional[str] = None
    commentary: Optional[str] = None
    producers: List[str] = []
    engineers: List[str] = []
    mastering: List[str] = []
    key_contributors: List[str] = []
    streaming_links: Dict[str, str] = {}
    purchase_links: Dict[str, str] = {}
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, album) -> "AlbumResponse":
        """Build a display-ready response from an Album row."""
        return cls(
            id=album.id,
            album_name=album.album_name,
            album_artist=album.album_artist,
            catalog_number=album.catalog_number,
            catalog_number_display=format_catalog_number(album.catalog_number),
            album_type=album.album_type,
            status=album.status,
            visibility=album.visibility,
            artwork_front=album.artwork_front,
            artworks=album.artworks,
            release_date=album.release_date,
            removal_date=album.removal_date,
            vinyl_cd_release_date=album.vinyl_cd_release_date,
            album_duration=decode(album.album_duration) if album.album_duration else None,
            upc=album.upc,
            label=album.label,
            distributor=album.distributor,
            commentary=album.commentary,
            producers=credit_names(album.producers),
            engineers=credit_names(album.engineers),
            mastering=credit_names(album.mastering),
            key_contributors=credit_names(album.key_contributors),
            streaming_links=album.streaming_links or {},
            purchase_links=album.purchase_links or {},
            created_at=album.created_at,
        )
