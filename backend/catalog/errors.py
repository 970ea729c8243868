"""Error taxonomy for catalog operations."""
from dataclasses import dataclass
from typing import List, Optional


class CatalogError(Exception):
    """Base exception for catalog errors."""
    pass


@dataclass(frozen=True)
class FieldError:
    """A single user-correctable problem with one form field."""
    field: str
    message: str

    def as_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class ValidationError(CatalogError):
    """Raised when a form fails validation. Blocks submission."""

    def __init__(self, errors: List[FieldError]):
        self.errors = list(errors)
        fields = ", ".join(e.field for e in self.errors)
        super().__init__(f"Invalid fields: {fields}")


class StoreError(CatalogError):
    """Raised when the catalog store rejects or cannot serve an operation."""

    def __init__(self, message: str, action: Optional[str] = None, entity_id=None):
        super().__init__(message)
        self.action = action
        self.entity_id = entity_id


class StoreUnavailable(StoreError):
    """The store could not be reached or failed mid-operation."""
    pass


class Conflict(StoreError):
    """A write violated a unique key."""
    pass


class NotFound(StoreError):
    """The requested record does not exist."""
    pass


class AuthRequired(CatalogError):
    """No authenticated user for an operation that needs one."""
    pass


class AuthorizationDenied(CatalogError):
    """The authenticated user lacks the required role."""
    pass


class UploadError(CatalogError):
    """Artwork upload was rejected or could not be stored."""
    pass


class InvalidDurationFormat(ValueError):
    """Duration text is not a valid M:SS value."""
    pass


class AlbumSelectionRequired(CatalogError):
    """Track operations need an owning album to be selected first."""
    pass
