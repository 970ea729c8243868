"""Public catalog endpoints. Only Public records are ever returned."""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from catalog.api.errors import http_error
from catalog.database import get_db
from catalog.errors import CatalogError
from catalog.schemas.album import AlbumResponse
from catalog.schemas.track import StandaloneTrackResponse, TrackResponse
from catalog.services.catalog import CatalogService
from catalog.services.standalone import StandaloneTrackService

router = APIRouter()


@router.get("/albums", response_model=List[AlbumResponse])
def list_albums(
    q: Optional[str] = Query(None, description="Search name, artist or catalog number"),
    db: Session = Depends(get_db),
):
    """List public albums, newest release first."""
    try:
        albums = CatalogService(db).list_public_albums(search=q)
    except CatalogError as e:
        raise http_error(e)
    return [AlbumResponse.from_model(a) for a in albums]


@router.get("/albums/{album_id}", response_model=AlbumResponse)
def get_album(album_id: int, db: Session = Depends(get_db)):
    try:
        album = CatalogService(db).get_public_album(album_id)
    except CatalogError as e:
        raise http_error(e)
    if not album:
        raise HTTPException(status_code=404, detail="Album not found")
    return AlbumResponse.from_model(album)


@router.get("/albums/{album_id}/tracks", response_model=List[TrackResponse])
def list_album_tracks(album_id: int, db: Session = Depends(get_db)):
    """Public tracks of a public album, by track number."""
    service = CatalogService(db)
    try:
        album = service.get_public_album(album_id)
        if not album:
            raise HTTPException(status_code=404, detail="Album not found")
        tracks = service.list_tracks(album_id, public_only=True)
    except CatalogError as e:
        raise http_error(e)
    return [TrackResponse.from_model(t) for t in tracks]


@router.get("/standalone-tracks", response_model=List[StandaloneTrackResponse])
def list_standalone_tracks(db: Session = Depends(get_db)):
    """Public standalone tracks, newest first."""
    try:
        tracks = StandaloneTrackService(db).list_public_standalone_tracks()
    except CatalogError as e:
        raise http_error(e)
    return [StandaloneTrackResponse.from_model(t) for t in tracks]
