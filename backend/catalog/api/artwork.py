"""Artwork upload."""
from fastapi import APIRouter, Depends, File, UploadFile, status

from catalog.api.errors import http_error
from catalog.dependencies import get_artwork_storage, require_admin
from catalog.errors import UploadError
from catalog.models.user import User
from catalog.schemas.common import UploadResponse
from catalog.services.artwork import ArtworkStorage

router = APIRouter(tags=["artwork"])


@router.post("/admin/artwork", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_artwork(
    artwork: UploadFile = File(...),
    storage: ArtworkStorage = Depends(get_artwork_storage),
    admin: User = Depends(require_admin),
):
    """Store an artwork image and return its public URL.

    The URL goes into one of an album's artwork fields; the album itself is
    not touched here.
    """
    content = await artwork.read()
    try:
        url = storage.save(artwork.filename, content)
    except UploadError as e:
        raise http_error(e)
    return UploadResponse(url=url)
