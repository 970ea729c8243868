"""Standalone tracks and their notes."""
from typing import List, Optional

from sqlalchemy.orm import Session

from catalog.errors import NotFound
from catalog.logging_config import get_logger
from catalog.models.enums import StandaloneVisibility
from catalog.models.standalone_track import StandaloneTrack, StandaloneTrackNote
from catalog.schemas.track import NoteForm, StandaloneTrackForm
from catalog.services.store import require_form, store_operation

logger = get_logger(__name__)


class StandaloneTrackService:
    """Service for tracks released outside of any album."""

    def __init__(self, db: Session):
        self.db = db

    def list_standalone_tracks(self) -> List[StandaloneTrack]:
        """All standalone tracks, newest first (admin)."""
        with store_operation(self.db, "list_standalone_tracks"):
            return (
                self.db.query(StandaloneTrack)
                .order_by(StandaloneTrack.created_at.desc(), StandaloneTrack.track_id.desc())
                .all()
            )

    def list_public_standalone_tracks(self) -> List[StandaloneTrack]:
        with store_operation(self.db, "list_public_standalone_tracks"):
            return (
                self.db.query(StandaloneTrack)
                .filter(StandaloneTrack.visibility == StandaloneVisibility.PUBLIC)
                .order_by(StandaloneTrack.created_at.desc(), StandaloneTrack.track_id.desc())
                .all()
            )

    def get_standalone_track(self, track_id: int) -> Optional[StandaloneTrack]:
        with store_operation(self.db, "get_standalone_track", track_id=track_id):
            return self.db.query(StandaloneTrack).filter(StandaloneTrack.track_id == track_id).first()

    def require_standalone_track(self, track_id: int) -> StandaloneTrack:
        track = self.get_standalone_track(track_id)
        if track is None:
            raise NotFound("Standalone track not found", action="get_standalone_track", entity_id=track_id)
        return track

    def create_standalone_track(self, form: StandaloneTrackForm) -> StandaloneTrack:
        require_form(form, StandaloneTrackForm)
        track = StandaloneTrack(**form.to_columns())
        with store_operation(self.db, "create_standalone_track"):
            self.db.add(track)
            self.db.commit()
            self.db.refresh(track)

        logger.info("Standalone track created", context={"action": "create", "track_id": track.track_id})
        return track

    def update_standalone_track(self, track_id: int, form: StandaloneTrackForm) -> StandaloneTrack:
        require_form(form, StandaloneTrackForm)
        track = self.require_standalone_track(track_id)
        with store_operation(self.db, "update_standalone_track", track_id=track_id):
            for name, value in form.to_columns().items():
                setattr(track, name, value)
            self.db.commit()
            self.db.refresh(track)

        logger.info("Standalone track updated", context={"action": "update", "track_id": track_id})
        return track

    def delete_standalone_track(self, track_id: int) -> None:
        track = self.require_standalone_track(track_id)
        with store_operation(self.db, "delete_standalone_track", track_id=track_id):
            self.db.delete(track)
            self.db.commit()

        logger.info("Standalone track deleted", context={"action": "delete", "track_id": track_id})

    # Notes are append-only: there is no update or delete.

    def list_notes(self, track_id: int) -> List[StandaloneTrackNote]:
        """Notes on a standalone track, newest first."""
        self.require_standalone_track(track_id)
        with store_operation(self.db, "list_notes", track_id=track_id):
            return (
                self.db.query(StandaloneTrackNote)
                .filter(StandaloneTrackNote.track_id == track_id)
                .order_by(StandaloneTrackNote.created_at.desc(), StandaloneTrackNote.id.desc())
                .all()
            )

    def add_note(self, track_id: int, form: NoteForm) -> StandaloneTrackNote:
        require_form(form, NoteForm)
        self.require_standalone_track(track_id)
        note = StandaloneTrackNote(
            track_id=track_id,
            note_content=form.note_content,
            user_initials=form.user_initials,
        )
        with store_operation(self.db, "add_note", track_id=track_id):
            self.db.add(note)
            self.db.commit()
            self.db.refresh(note)

        logger.info("Track note added", context={"track_id": track_id, "note_id": note.id})
        return note
