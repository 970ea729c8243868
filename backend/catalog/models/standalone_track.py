"""Standalone track and track note models."""
from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, Enum, ForeignKey, JSON, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from catalog.database import Base
from catalog.models.enums import TrackStatus, ProductionStage, StandaloneVisibility, enum_values


class StandaloneTrack(Base):
    """Track released outside of any album."""

    __tablename__ = "standalone_tracks"

    track_id = Column(Integer, primary_key=True, index=True)
    track_name = Column(String(200), nullable=False, index=True)
    album_artist = Column(String(200))
    duration = Column(String(50), nullable=False)

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
        Enum(StandaloneVisibility, name="standalone_visibility", values_callable=enum_values),
        nullable=False,
        default=StandaloneVisibility.PUBLIC,
    )

    allow_stream = Column(Boolean, default=True)
    stream_embed = Column(Text)
    isrc = Column(String(20), index=True)
    purchase_link = Column(String(500))
    commentary = Column(Text)

    artists = Column(JSON)
    composers = Column(JSON)
    key_contributors = Column(JSON)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    notes = relationship(
        "StandaloneTrackNote",
        back_populates="track",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="StandaloneTrackNote.created_at.desc()",
    )

    def __repr__(self):
        return f"<StandaloneTrack {self.track_name}>"


class StandaloneTrackNote(Base):
    """Append-only annotation on a standalone track."""

    __tablename__ = "standalone_track_notes"

    id = Column(Integer, primary_key=True, index=True)
    track_id = Column(
        Integer,
        ForeignKey("standalone_tracks.track_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    note_content = Column(Text, nullable=False)
    user_initials = Column(String(10), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    track = relationship("StandaloneTrack", back_populates="notes")

    def __repr__(self):
        return f"<StandaloneTrackNote {self.user_initials} on {self.track_id}>"
