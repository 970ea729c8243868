"""Form validation entry points.

Each ``validate_*`` function is pure: it returns a ``ValidationResult``
holding either the normalized form or field-scoped errors, and never
raises for bad input.
"""
from dataclasses import dataclass
from typing import Any, Generic, List, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from catalog.errors import FieldError, ValidationError
from catalog.schemas.album import AlbumForm
from catalog.schemas.track import NoteForm, StandaloneTrackForm, TrackForm

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Normalized record, or the reasons there isn't one."""
    record: Optional[T] = None
    errors: Tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        return self.record is not None and not self.errors

    def errors_for(self, field: str) -> List[str]:
        return [e.message for e in self.errors if e.field == field]

    def unwrap(self) -> T:
        """Return the record or raise ``ValidationError``."""
        if not self.ok:
            raise ValidationError(list(self.errors))
        return self.record


def _location(loc: Tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "__all__"


def _message(error: Mapping[str, Any]) -> str:
    if error.get("type") == "value_error" and error.get("ctx", {}).get("error"):
        return str(error["ctx"]["error"])
    if error.get("type") == "missing":
        return "This field is required"
    return error.get("msg", "Invalid value")


def field_errors(exc: PydanticValidationError) -> Tuple[FieldError, ...]:
    """Flatten pydantic errors into field-scoped errors, first per field."""
    seen = {}
    for error in exc.errors():
        field = _location(error.get("loc", ()))
        seen.setdefault(field, FieldError(field=field, message=_message(error)))
    return tuple(seen.values())


def _validate(form_cls: Type[T], data: Any) -> ValidationResult[T]:
    if not isinstance(data, Mapping):
        return ValidationResult(errors=(FieldError("__all__", "Expected an object of form fields"),))
    try:
        return ValidationResult(record=form_cls.model_validate(dict(data)))
    except PydanticValidationError as e:
        return ValidationResult(errors=field_errors(e))


def validate_album(data: Any) -> ValidationResult[AlbumForm]:
    return _validate(AlbumForm, data)


def validate_track(data: Any) -> ValidationResult[TrackForm]:
    return _validate(TrackForm, data)


def validate_standalone_track(data: Any) -> ValidationResult[StandaloneTrackForm]:
    return _validate(StandaloneTrackForm, data)


def validate_note(data: Any) -> ValidationResult[NoteForm]:
    return _validate(NoteForm, data)
