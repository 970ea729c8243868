"""Admin workflow controller.

A state machine over {listing, creating, editing} for albums, album tracks
and standalone tracks. Track operations need an owning album to be selected
first. Writes go through validation, then the services, and invalidate the
matching cached list so the next read refetches.
"""
import enum
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple

from sqlalchemy.orm import Session

from catalog.errors import AlbumSelectionRequired, NotFound
from catalog.forms import (
    EntityKind,
    FormState,
    apply_errors,
    initial_form,
    load_form,
    update_field,
)
from catalog.logging_config import get_logger
from catalog.schemas.album import AlbumForm
from catalog.schemas.track import StandaloneTrackForm, TrackForm
from catalog.services.catalog import CatalogService
from catalog.services.standalone import StandaloneTrackService
from catalog.validation import (
    ValidationResult,
    validate_album,
    validate_standalone_track,
    validate_track,
)

logger = get_logger(__name__)

FORM_UNAVAILABLE = "This track could not be loaded for editing. Go back to the list and try again."

VALIDATORS: Dict[EntityKind, Callable[[Any], ValidationResult]] = {
    EntityKind.ALBUM: validate_album,
    EntityKind.TRACK: validate_track,
    EntityKind.STANDALONE_TRACK: validate_standalone_track,
}


class Mode(str, enum.Enum):
    LISTING = "listing"
    CREATING = "creating"
    EDITING = "editing"


@dataclass
class WorkflowState:
    entity: EntityKind = EntityKind.ALBUM
    mode: Mode = Mode.LISTING
    album_id: Optional[int] = None
    editing_id: Optional[int] = None
    form: Optional[FormState] = None


class ListCache:
    """Cached list views with generation-guarded stores.

    A reader takes ``generation(key)`` before fetching and hands it back to
    ``store``. If the key was invalidated in between, the fetched rows are
    stale and are dropped.
    """

    def __init__(self):
        self._rows: Dict[Hashable, List[Any]] = {}
        self._generations: Dict[Hashable, int] = defaultdict(int)

    def generation(self, key: Hashable) -> int:
        return self._generations[key]

    def get(self, key: Hashable) -> Optional[List[Any]]:
        return self._rows.get(key)

    def store(self, key: Hashable, rows: List[Any], generation: int) -> bool:
        if generation != self._generations[key]:
            logger.debug("Dropping stale list", context={"key": key, "generation": generation})
            return False
        self._rows[key] = rows
        return True

    def invalidate(self, key: Hashable) -> None:
        self._generations[key] += 1
        self._rows.pop(key, None)


class AdminWorkflow:
    """Drives the admin panel. Starts listing albums."""

    def __init__(self, db: Session, cache: Optional[ListCache] = None):
        self.catalog = CatalogService(db)
        self.standalone = StandaloneTrackService(db)
        self.cache = cache if cache is not None else ListCache()
        self.state = WorkflowState()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def select_tab(self, entity: EntityKind) -> WorkflowState:
        """Switch entity tab. Any in-progress form is discarded."""
        self.state = WorkflowState(entity=EntityKind(entity), album_id=self.state.album_id)
        return self.state

    def select_album(self, album_id: int) -> WorkflowState:
        """Choose the album whose tracks are managed."""
        self.catalog.require_album(album_id)
        self.state.album_id = album_id
        if self.state.entity == EntityKind.TRACK:
            self._to_listing()
        return self.state

    def list_entries(self) -> List[Any]:
        """Rows for the current tab, served from cache when fresh."""
        self._require_album()
        key = self._list_key()
        rows = self.cache.get(key)
        if rows is not None:
            return rows

        generation = self.cache.generation(key)
        rows = self._fetch()
        self.cache.store(key, rows, generation)
        return rows

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def start_create(self) -> FormState:
        self._require_album()
        self.state.mode = Mode.CREATING
        self.state.editing_id = None
        self.state.form = initial_form(self.state.entity)
        return self.state.form

    def start_edit(self, entity_id: int) -> FormState:
        """Enter editing with the stored values of ``entity_id`` preloaded."""
        self._require_album()
        entity = self.state.entity

        if entity == EntityKind.STANDALONE_TRACK:
            form = self._load_standalone_form(entity_id)
        elif entity == EntityKind.TRACK:
            form = load_form(TrackForm.values_from(self._require_album_track(entity_id)))
        else:
            form = load_form(AlbumForm.values_from(self.catalog.require_album(entity_id)))

        self.state.mode = Mode.EDITING
        self.state.editing_id = entity_id
        self.state.form = form
        return form

    def update_field(self, name: str, value: Any) -> FormState:
        if self.state.form is None:
            raise RuntimeError("No form is open")
        self.state.form = update_field(self.state.form, name, value)
        return self.state.form

    def submit(self):
        """Validate and write the open form.

        Returns the written row, or None when validation failed (the errors
        are then on ``state.form``). Store errors propagate and leave the
        form open.
        """
        if self.state.mode == Mode.LISTING or self.state.form is None:
            raise RuntimeError("No form is open")

        entity = self.state.entity
        result = VALIDATORS[entity](self.state.form.values)
        if not result.ok:
            self.state.form = apply_errors(self.state.form, result.errors)
            return None

        row = self._write(result.record)
        self.cache.invalidate(self._list_key())
        logger.info(
            "Workflow write",
            context={"entity": entity.value, "mode": self.state.mode.value, "id": self.state.editing_id},
        )
        self._to_listing()
        return row

    def cancel(self) -> WorkflowState:
        """Discard the open form without touching the store."""
        self._to_listing()
        return self.state

    def delete(self, entity_id: int) -> None:
        self._require_album()
        entity = self.state.entity
        if entity == EntityKind.ALBUM:
            self.catalog.delete_album(entity_id)
            # Cascade removed the album's tracks too
            self.cache.invalidate((EntityKind.TRACK.value, entity_id))
            if self.state.album_id == entity_id:
                self.state.album_id = None
        elif entity == EntityKind.TRACK:
            self._require_album_track(entity_id)
            self.catalog.delete_track(entity_id)
        else:
            self.standalone.delete_standalone_track(entity_id)
        self.cache.invalidate(self._list_key())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _list_key(self) -> Tuple[str, Optional[int]]:
        if self.state.entity == EntityKind.TRACK:
            return (EntityKind.TRACK.value, self.state.album_id)
        return (self.state.entity.value, None)

    def _require_album(self) -> None:
        if self.state.entity == EntityKind.TRACK and self.state.album_id is None:
            raise AlbumSelectionRequired("Select an album to manage its tracks")

    def _require_album_track(self, track_id: int):
        track = self.catalog.require_track(track_id)
        if track.album_id != self.state.album_id:
            raise NotFound("Track not found in the selected album", action="get_track", entity_id=track_id)
        return track

    def _to_listing(self) -> None:
        self.state.mode = Mode.LISTING
        self.state.editing_id = None
        self.state.form = None

    def _fetch(self) -> List[Any]:
        entity = self.state.entity
        if entity == EntityKind.ALBUM:
            return self.catalog.list_albums()
        if entity == EntityKind.TRACK:
            return self.catalog.list_tracks(self.state.album_id)
        return self.standalone.list_standalone_tracks()

    def _write(self, record):
        entity = self.state.entity
        editing_id = self.state.editing_id
        if entity == EntityKind.ALBUM:
            if editing_id is None:
                return self.catalog.create_album(record)
            return self.catalog.update_album(editing_id, record)
        if entity == EntityKind.TRACK:
            if editing_id is None:
                return self.catalog.create_track(self.state.album_id, record)
            return self.catalog.update_track(editing_id, record)
        if editing_id is None:
            return self.standalone.create_standalone_track(record)
        return self.standalone.update_standalone_track(editing_id, record)

    def _load_standalone_form(self, track_id: int) -> FormState:
        try:
            track = self.standalone.require_standalone_track(track_id)
            return load_form(StandaloneTrackForm.values_from(track))
        except Exception as e:
            logger.error(
                "Failed to load standalone track for editing",
                context={"track_id": track_id, "error": repr(e)},
            )
            return FormState(notice=FORM_UNAVAILABLE)
