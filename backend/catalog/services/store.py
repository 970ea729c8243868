"""Translation of database failures into catalog store errors."""
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.errors import Conflict, StoreUnavailable
from catalog.logging_config import get_logger

logger = get_logger(__name__)

# Substrings of driver messages -> what the user is told
_CONFLICT_MESSAGES = (
    ("catalog_number", "An album with this catalog number already exists"),
    ("uq_track_album_position", "This album already has a track with that number"),
    ("tracks.album_id, tracks.track_number", "This album already has a track with that number"),
    ("username", "Username already exists"),
    ("uq_user_role", "User already has this role"),
    ("user_roles.user_id, user_roles.role", "User already has this role"),
)


def conflict_message(error: IntegrityError) -> str:
    text = str(getattr(error, "orig", error))
    for needle, message in _CONFLICT_MESSAGES:
        if needle in text:
            return message
    return "Record conflicts with an existing entry"


@contextmanager
def store_operation(db: Session, action: str, **context: Any) -> Iterator[None]:
    """Run store calls; roll back and raise Conflict/StoreUnavailable on failure.

    Nothing is retried. The caller surfaces the error.
    """
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        message = conflict_message(e)
        logger.warning(f"Store conflict during {action}", context={"action": action, **context, "error": message})
        raise Conflict(message, action=action, entity_id=_entity_id(context)) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Store unavailable during {action}", context={"action": action, **context, "error": str(e)})
        raise StoreUnavailable("Catalog store is unavailable", action=action, entity_id=_entity_id(context)) from e


def _entity_id(context: dict):
    for key in ("album_id", "track_id", "user_id", "note_id"):
        if context.get(key) is not None:
            return context[key]
    return None


def require_form(form, form_cls) -> None:
    """Writes accept only forms that went through validation."""
    if not isinstance(form, form_cls):
        raise TypeError(f"Expected validated {form_cls.__name__}, got {type(form).__name__}")
