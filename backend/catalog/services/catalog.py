"""Catalog service for albums and their tracks."""
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from catalog.errors import NotFound
from catalog.logging_config import get_logger
from catalog.models.album import Album
from catalog.models.enums import Visibility
from catalog.models.track import Track
from catalog.schemas.album import AlbumForm
from catalog.schemas.track import TrackForm
from catalog.services.store import require_form, store_operation

logger = get_logger(__name__)


class CatalogService:
    """Reads and writes albums and album tracks.

    Writes only accept validated forms (see ``catalog.validation``). Store
    failures surface as ``Conflict`` or ``StoreUnavailable`` and are not
    retried.
    """

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Albums
    # ------------------------------------------------------------------

    def list_public_albums(self, search: Optional[str] = None) -> List[Album]:
        """Public albums, newest release first."""
        with store_operation(self.db, "list_public_albums"):
            query = self.db.query(Album).filter(Album.visibility == Visibility.PUBLIC)

            if search and search.strip():
                pattern = f"%{search.strip()}%"
                query = query.filter(
                    or_(
                        Album.album_name.ilike(pattern),
                        Album.album_artist.ilike(pattern),
                        Album.catalog_number.ilike(pattern),
                    )
                )

            return query.order_by(Album.release_date.desc().nulls_last(), Album.id.desc()).all()

    def list_albums(self) -> List[Album]:
        """All albums regardless of visibility (admin)."""
        with store_operation(self.db, "list_albums"):
            return self.db.query(Album).order_by(Album.created_at.desc(), Album.id.desc()).all()

    def get_album(self, album_id: int) -> Optional[Album]:
        """Get a single album by ID."""
        with store_operation(self.db, "get_album", album_id=album_id):
            return self.db.query(Album).filter(Album.id == album_id).first()

    def get_public_album(self, album_id: int) -> Optional[Album]:
        """Get an album only if it is publicly visible."""
        album = self.get_album(album_id)
        if album is None or album.visibility != Visibility.PUBLIC:
            return None
        return album

    def require_album(self, album_id: int) -> Album:
        album = self.get_album(album_id)
        if album is None:
            raise NotFound("Album not found", action="get_album", entity_id=album_id)
        return album

    def create_album(self, form: AlbumForm) -> Album:
        """Insert a new album."""
        require_form(form, AlbumForm)
        album = Album(**form.to_columns())
        with store_operation(self.db, "create_album", catalog_number=form.catalog_number):
            self.db.add(album)
            self.db.commit()
            self.db.refresh(album)

        logger.info("Album created", context={"action": "create", "album_id": album.id})
        return album

    def update_album(self, album_id: int, form: AlbumForm) -> Album:
        """Overwrite an album's fields with a validated form."""
        require_form(form, AlbumForm)
        album = self.require_album(album_id)
        with store_operation(self.db, "update_album", album_id=album_id):
            for name, value in form.to_columns().items():
                setattr(album, name, value)
            self.db.commit()
            self.db.refresh(album)

        logger.info("Album updated", context={"action": "update", "album_id": album_id})
        return album

    def delete_album(self, album_id: int) -> None:
        """Delete an album and, through the cascade, its tracks."""
        album = self.require_album(album_id)
        with store_operation(self.db, "delete_album", album_id=album_id):
            self.db.delete(album)
            self.db.commit()

        logger.info("Album deleted", context={"action": "delete", "album_id": album_id})

    # ------------------------------------------------------------------
    # Tracks
    # ------------------------------------------------------------------

    def list_tracks(self, album_id: int, public_only: bool = False) -> List[Track]:
        """Tracks of an album by track number."""
        with store_operation(self.db, "list_tracks", album_id=album_id):
            query = self.db.query(Track).filter(Track.album_id == album_id)
            if public_only:
                query = query.filter(Track.visibility == Visibility.PUBLIC)
            return query.order_by(Track.track_number.asc()).all()

    def get_track(self, track_id: int) -> Optional[Track]:
        with store_operation(self.db, "get_track", track_id=track_id):
            return self.db.query(Track).filter(Track.track_id == track_id).first()

    def require_track(self, track_id: int) -> Track:
        track = self.get_track(track_id)
        if track is None:
            raise NotFound("Track not found", action="get_track", entity_id=track_id)
        return track

    def create_track(self, album_id: int, form: TrackForm) -> Track:
        """Add a track to an album."""
        require_form(form, TrackForm)
        self.require_album(album_id)
        track = Track(album_id=album_id, **form.to_columns())
        with store_operation(self.db, "create_track", album_id=album_id):
            self.db.add(track)
            self.db.commit()
            self.db.refresh(track)

        logger.info(
            "Track created",
            context={
                "action": "create",
                "track_id": track.track_id,
                "album_id": album_id,
                "track_name": track.track_name,
            },
        )
        return track

    def update_track(self, track_id: int, form: TrackForm) -> Track:
        require_form(form, TrackForm)
        track = self.require_track(track_id)
        with store_operation(self.db, "update_track", track_id=track_id, album_id=track.album_id):
            for name, value in form.to_columns().items():
                setattr(track, name, value)
            self.db.commit()
            self.db.refresh(track)

        logger.info("Track updated", context={"action": "update", "track_id": track_id, "album_id": track.album_id})
        return track

    def delete_track(self, track_id: int) -> None:
        track = self.require_track(track_id)
        album_id = track.album_id
        with store_operation(self.db, "delete_track", track_id=track_id, album_id=album_id):
            self.db.delete(track)
            self.db.commit()

        logger.info("Track deleted", context={"action": "delete", "track_id": track_id, "album_id": album_id})
