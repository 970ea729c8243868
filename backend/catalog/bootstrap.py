"""First-admin bootstrap.

After a user authenticates we try, once per user id, to grant them the
admin role. The role service only allows that while no admin exists, so
in steady state the attempt is rejected and the rejection is ignored.
"""
import json
import threading
from pathlib import Path
from typing import Optional, Protocol

from sqlalchemy.orm import Session

from catalog.errors import CatalogError
from catalog.logging_config import get_logger
from catalog.services.roles import RoleService

logger = get_logger(__name__)


class BootstrapFlagStore(Protocol):
    """Remembers the last user id a bootstrap was attempted for."""

    def get(self) -> Optional[int]:
        ...

    def set(self, user_id: int) -> None:
        ...


class MemoryFlagStore:
    """Process-local flag, shared between request threads."""

    def __init__(self):
        self._lock = threading.Lock()
        self._user_id: Optional[int] = None

    def get(self) -> Optional[int]:
        with self._lock:
            return self._user_id

    def set(self, user_id: int) -> None:
        with self._lock:
            self._user_id = user_id


class FileFlagStore:
    """Flag persisted to a small JSON file (used by the CLI)."""

    def __init__(self, path):
        self.path = Path(path)

    def get(self) -> Optional[int]:
        if not self.path.exists():
            return None
        try:
            value = json.loads(self.path.read_text()).get("user_id")
        except (OSError, ValueError, AttributeError):
            return None
        return value if isinstance(value, int) else None

    def set(self, user_id: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"user_id": user_id}))


class RoleBootstrap:
    """Attempts the one-shot admin grant for a freshly authenticated user."""

    def __init__(self, db: Session, flags: BootstrapFlagStore):
        self.db = db
        self.flags = flags

    def attempt(self, user_id: int) -> bool:
        """Try to grant admin to ``user_id``. Returns True if it was granted."""
        if self.flags.get() == user_id:
            return False

        granted = False
        try:
            RoleService(self.db).grant_initial_admin(user_id)
            granted = True
            logger.info("Initial admin granted", context={"user_id": user_id})
        except CatalogError as e:
            logger.debug("Admin bootstrap skipped", context={"user_id": user_id, "reason": str(e)})
        finally:
            self.flags.set(user_id)
        return granted
