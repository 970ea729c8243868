"""Album model."""
from sqlalchemy import Column, Integer, String, Date, DateTime, Enum, JSON, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from catalog.database import Base
from catalog.models.enums import AlbumType, AlbumStatus, Visibility, enum_values


class Album(Base):
    """Album in the label catalog."""

    __tablename__ = "albums"

    id = Column(Integer, primary_key=True, index=True)
    album_name = Column(String(200), nullable=False, index=True)
    album_artist = Column(String(200), nullable=False, index=True)
    catalog_number = Column(String(50), nullable=False, unique=True, index=True)
    album_type = Column(Enum(AlbumType, name="album_type", values_callable=enum_values), nullable=False)
    status = Column(
        Enum(AlbumStatus, name="album_status", values_callable=enum_values),
        nullable=False,
        default=AlbumStatus.IN_DEVELOPMENT,
    )
    visibility = Column(
        Enum(Visibility, name="visibility_level", values_callable=enum_values),
        nullable=False,
        default=Visibility.PUBLIC,
        index=True,
    )

    # Artwork URLs (front is required)
    artwork_front = Column(String(500), nullable=False)
    artwork_back = Column(String(500))
    artwork_sleeve = Column(String(500))
    artwork_sticker = Column(String(500))
    artwork_fullcover = Column(String(500))
    artwork_fullinner = Column(String(500))

    release_date = Column(Date, index=True)
    removal_date = Column(Date)  # only set when status is Removed
    vinyl_cd_release_date = Column(Date)
    album_duration = Column(String(50))  # "41 minutes 7 seconds"

    upc = Column(String(20))
    label = Column(String(200))
    distributor = Column(String(200))
    commentary = Column(Text)

    # Credits: [{"kind": "plain", "name": ...} | {"kind": "contributor", "name": ..., "role": ...}]
    producers = Column(JSON)
    engineers = Column(JSON)
    mastering = Column(JSON)
    key_contributors = Column(JSON)

    streaming_links = Column(JSON)  # {"spotify": "https://...", ...}
    purchase_links = Column(JSON)  # {"bandcamp": "https://...", ...}

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    tracks = relationship(
        "Track",
        back_populates="album",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Track.track_number",
    )

    @property
    def artworks(self) -> list:
        """All artwork URLs, front first, skipping empty slots."""
        slots = [
            self.artwork_front,
            self.artwork_back,
            self.artwork_sleeve,
            self.artwork_sticker,
            self.artwork_fullcover,
            self.artwork_fullinner,
        ]
        return [url for url in slots if url]

    def __repr__(self):
        return f"<Album {self.catalog_number} {self.album_name}>"
