"""Translation of catalog errors into HTTP responses."""
from fastapi import HTTPException, status

from catalog.errors import (
    AuthRequired,
    AuthorizationDenied,
    CatalogError,
    Conflict,
    NotFound,
    StoreUnavailable,
    UploadError,
    ValidationError,
)

STATUS_CODES = (
    (ValidationError, 422),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (Conflict, status.HTTP_409_CONFLICT),
    (StoreUnavailable, status.HTTP_503_SERVICE_UNAVAILABLE),
    (AuthRequired, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationDenied, status.HTTP_403_FORBIDDEN),
    (UploadError, status.HTTP_400_BAD_REQUEST),
)


def http_error(exc: CatalogError) -> HTTPException:
    """HTTPException for a service error. Validation errors keep their fields."""
    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=422,
            detail=[e.as_dict() for e in exc.errors],
        )
    for exc_type, code in STATUS_CODES:
        if isinstance(exc, exc_type):
            return HTTPException(status_code=code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
