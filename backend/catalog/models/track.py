"""Track model."""
from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, Enum, ForeignKey, JSON, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from catalog.database import Base
from catalog.models.enums import TrackStatus, ProductionStage, Visibility, enum_values


class Track(Base):
    """Track belonging to an album."""

    __tablename__ = "tracks"
    __table_args__ = (
        UniqueConstraint('album_id', 'track_number', name='uq_track_album_position'),
    )

    track_id = Column(Integer, primary_key=True, index=True)
    album_id = Column(Integer, ForeignKey("albums.id", ondelete="CASCADE"), nullable=False, index=True)
    track_number = Column(Integer, nullable=False)
    track_name = Column(String(200), nullable=False, index=True)
    duration = Column(String(50), nullable=False)  # "3 minutes 45 seconds"

    track_status = Column(
        Enum(TrackStatus, name="track_status", values_callable=enum_values),
        nullable=False,
        default=TrackStatus.WIP,
    )
    stage_of_production = Column(
        Enum(ProductionStage, name="production_stage", values_callable=enum_values),
        nullable=False,
        default=ProductionStage.CONCEPTION,
    )
    stage_date = Column(Date, server_default=func.current_date())
    visibility = Column(
        Enum(Visibility, name="visibility_level", values_callable=enum_values),
        nullable=False,
        default=Visibility.PUBLIC,
    )

    allow_stream = Column(Boolean, default=True)
    stream_embed = Column(Text)  # raw markup, sanitized on read
    isrc = Column(String(20), index=True)  # International Standard Recording Code
    purchase_link = Column(String(500))
    commentary = Column(Text)

    artists = Column(JSON)
    composers = Column(JSON)
    key_contributors = Column(JSON)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    album = relationship("Album", back_populates="tracks")

    def __repr__(self):
        return f"<Track {self.track_number}. {self.track_name}>"
