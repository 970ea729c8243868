"""Admin catalog management endpoints.

Create and PATCH bodies are plain JSON objects. PATCH overlays the body on
the stored record's form values and validates the merged form in full, so
a partial update is held to the same rules as a create. Validation
failures return 422 with a list of ``{field, message}``.
"""
from typing import Any, Callable, Dict, List
from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from catalog.api.errors import http_error
from catalog.database import get_db
from catalog.dependencies import require_admin
from catalog.errors import CatalogError
from catalog.models.user import User
from catalog.schemas.album import AlbumForm, AlbumResponse
from catalog.schemas.common import MessageResponse
from catalog.schemas.track import (
    NoteResponse,
    StandaloneTrackForm,
    StandaloneTrackResponse,
    TrackForm,
    TrackResponse,
)
from catalog.services.catalog import CatalogService
from catalog.services.standalone import StandaloneTrackService
from catalog.validation import (
    ValidationResult,
    validate_album,
    validate_note,
    validate_standalone_track,
    validate_track,
)

router = APIRouter(prefix="/admin", tags=["admin"])

Payload = Dict[str, Any]


def _merged(stored: Payload, patch: Payload) -> Payload:
    values = dict(stored)
    values.update(patch)
    return values


def _form(validate: Callable[[Any], ValidationResult], data: Payload):
    """Validated form or ``ValidationError``."""
    return validate(data).unwrap()


# ----------------------------------------------------------------------
# Albums
# ----------------------------------------------------------------------

@router.get("/albums", response_model=List[AlbumResponse])
def list_albums(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    """All albums regardless of visibility."""
    try:
        albums = CatalogService(db).list_albums()
    except CatalogError as e:
        raise http_error(e)
    return [AlbumResponse.from_model(a) for a in albums]


@router.post("/albums", response_model=AlbumResponse, status_code=status.HTTP_201_CREATED)
def create_album(
    payload: Payload = Body(...),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    try:
        album = CatalogService(db).create_album(_form(validate_album, payload))
    except CatalogError as e:
        raise http_error(e)
    return AlbumResponse.from_model(album)


@router.get("/albums/{album_id}", response_model=AlbumResponse)
def get_album(album_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    try:
        album = CatalogService(db).require_album(album_id)
    except CatalogError as e:
        raise http_error(e)
    return AlbumResponse.from_model(album)


@router.patch("/albums/{album_id}", response_model=AlbumResponse)
def update_album(
    album_id: int,
    payload: Payload = Body(...),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    service = CatalogService(db)
    try:
        stored = AlbumForm.values_from(service.require_album(album_id))
        form = _form(validate_album, _merged(stored, payload))
        album = service.update_album(album_id, form)
    except CatalogError as e:
        raise http_error(e)
    return AlbumResponse.from_model(album)


@router.delete("/albums/{album_id}", response_model=MessageResponse)
def delete_album(album_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    """Delete an album and all of its tracks."""
    try:
        CatalogService(db).delete_album(album_id)
    except CatalogError as e:
        raise http_error(e)
    return MessageResponse(message="Album deleted")


# ----------------------------------------------------------------------
# Album tracks
# ----------------------------------------------------------------------

@router.get("/albums/{album_id}/tracks", response_model=List[TrackResponse])
def list_tracks(album_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    service = CatalogService(db)
    try:
        service.require_album(album_id)
        tracks = service.list_tracks(album_id)
    except CatalogError as e:
        raise http_error(e)
    return [TrackResponse.from_model(t) for t in tracks]


@router.post("/albums/{album_id}/tracks", response_model=TrackResponse, status_code=status.HTTP_201_CREATED)
def create_track(
    album_id: int,
    payload: Payload = Body(...),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    try:
        track = CatalogService(db).create_track(album_id, _form(validate_track, payload))
    except CatalogError as e:
        raise http_error(e)
    return TrackResponse.from_model(track)


@router.get("/tracks/{track_id}", response_model=TrackResponse)
def get_track(track_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    try:
        track = CatalogService(db).require_track(track_id)
    except CatalogError as e:
        raise http_error(e)
    return TrackResponse.from_model(track)


@router.patch("/tracks/{track_id}", response_model=TrackResponse)
def update_track(
    track_id: int,
    payload: Payload = Body(...),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    service = CatalogService(db)
    try:
        stored = TrackForm.values_from(service.require_track(track_id))
        form = _form(validate_track, _merged(stored, payload))
        track = service.update_track(track_id, form)
    except CatalogError as e:
        raise http_error(e)
    return TrackResponse.from_model(track)


@router.delete("/tracks/{track_id}", response_model=MessageResponse)
def delete_track(track_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    try:
        CatalogService(db).delete_track(track_id)
    except CatalogError as e:
        raise http_error(e)
    return MessageResponse(message="Track deleted")


# ----------------------------------------------------------------------
# Standalone tracks and notes
# ----------------------------------------------------------------------

@router.get("/standalone-tracks", response_model=List[StandaloneTrackResponse])
def list_standalone_tracks(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    """All standalone tracks, including Private and Unlisted ones."""
    try:
        tracks = StandaloneTrackService(db).list_standalone_tracks()
    except CatalogError as e:
        raise http_error(e)
    return [StandaloneTrackResponse.from_model(t) for t in tracks]


@router.post("/standalone-tracks", response_model=StandaloneTrackResponse, status_code=status.HTTP_201_CREATED)
def create_standalone_track(
    payload: Payload = Body(...),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    try:
        track = StandaloneTrackService(db).create_standalone_track(
            _form(validate_standalone_track, payload)
        )
    except CatalogError as e:
        raise http_error(e)
    return StandaloneTrackResponse.from_model(track)


@router.get("/standalone-tracks/{track_id}", response_model=StandaloneTrackResponse)
def get_standalone_track(track_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    try:
        track = StandaloneTrackService(db).require_standalone_track(track_id)
    except CatalogError as e:
        raise http_error(e)
    return StandaloneTrackResponse.from_model(track)


@router.patch("/standalone-tracks/{track_id}", response_model=StandaloneTrackResponse)
def update_standalone_track(
    track_id: int,
    payload: Payload = Body(...),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    service = StandaloneTrackService(db)
    try:
        stored = StandaloneTrackForm.values_from(service.require_standalone_track(track_id))
        form = _form(validate_standalone_track, _merged(stored, payload))
        track = service.update_standalone_track(track_id, form)
    except CatalogError as e:
        raise http_error(e)
    return StandaloneTrackResponse.from_model(track)


@router.delete("/standalone-tracks/{track_id}", response_model=MessageResponse)
def delete_standalone_track(track_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    try:
        StandaloneTrackService(db).delete_standalone_track(track_id)
    except CatalogError as e:
        raise http_error(e)
    return MessageResponse(message="Standalone track deleted")


@router.get("/standalone-tracks/{track_id}/notes", response_model=List[NoteResponse])
def list_notes(track_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    """Notes on a standalone track, newest first."""
    try:
        notes = StandaloneTrackService(db).list_notes(track_id)
    except CatalogError as e:
        raise http_error(e)
    return [NoteResponse.from_model(n) for n in notes]


@router.post(
    "/standalone-tracks/{track_id}/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_note(
    track_id: int,
    payload: Payload = Body(...),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    try:
        note = StandaloneTrackService(db).add_note(track_id, _form(validate_note, payload))
    except CatalogError as e:
        raise http_error(e)
    return NoteResponse.from_model(note)
