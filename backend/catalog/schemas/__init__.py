"""Pydantic schemas for forms and API responses."""
from catalog.schemas.user import UserCreate, UserResponse, UserLogin, LoginResponse
from catalog.schemas.album import AlbumForm, AlbumResponse
from catalog.schemas.track import (
    TrackForm,
    TrackResponse,
    StandaloneTrackForm,
    StandaloneTrackResponse,
    NoteForm,
    NoteResponse,
)
from catalog.schemas.credits import PlainName, Contributor, credit_names
from catalog.schemas.common import MessageResponse, UploadResponse

__all__ = [
    "UserCreate",
    "UserResponse",
    "UserLogin",
    "LoginResponse",
    "AlbumForm",
    "AlbumResponse",
    "TrackForm",
    "TrackResponse",
    "StandaloneTrackForm",
    "StandaloneTrackResponse",
    "NoteForm",
    "NoteResponse",
    "PlainName",
    "Contributor",
    "credit_names",
    "MessageResponse",
    "UploadResponse",
]
