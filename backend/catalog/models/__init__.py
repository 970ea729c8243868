"""SQLAlchemy models for Label Catalog."""
from catalog.models.user import User, UserRole
from catalog.models.album import Album
from catalog.models.track import Track
from catalog.models.standalone_track import StandaloneTrack, StandaloneTrackNote

__all__ = [
    "User",
    "UserRole",
    "Album",
    "Track",
    "StandaloneTrack",
    "StandaloneTrackNote",
]
