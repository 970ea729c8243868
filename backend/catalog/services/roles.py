"""User role management and the access policy for admin grants."""
import threading
from typing import List

from sqlalchemy import Integer, cast, insert, select
from sqlalchemy.orm import Session

from catalog.errors import AuthorizationDenied, NotFound
from catalog.logging_config import get_logger
from catalog.models.enums import AppRole
from catalog.models.user import User, UserRole
from catalog.services.store import store_operation

logger = get_logger(__name__)

_initial_admin_lock = threading.Lock()


class RoleService:
    """Grants, revokes and checks roles."""

    def __init__(self, db: Session):
        self.db = db

    def has_role(self, user_id: int, role: AppRole) -> bool:
        return (
            self.db.query(UserRole)
            .filter(UserRole.user_id == user_id, UserRole.role == role)
            .first()
            is not None
        )

    def is_admin(self, user_id: int) -> bool:
        return self.has_role(user_id, AppRole.ADMIN)

    def admin_exists(self) -> bool:
        return self.db.query(UserRole).filter(UserRole.role == AppRole.ADMIN).first() is not None

    def list_admins(self) -> List[User]:
        return (
            self.db.query(User)
            .join(UserRole, UserRole.user_id == User.id)
            .filter(UserRole.role == AppRole.ADMIN)
            .order_by(User.username)
            .all()
        )

    def grant_initial_admin(self, user_id: int) -> UserRole:
        """Self-grant admin; only allowed while no admin exists.

        The existence check and the insert run as one statement, and
        grants from this process are serialized.

        Raises:
            AuthorizationDenied: an admin already exists.
        """
        if self.db.query(User).filter(User.id == user_id).first() is None:
            raise NotFound("User not found", action="bootstrap_admin", entity_id=user_id)

        role_column = UserRole.__table__.c.role
        admin_rows = select(role_column).where(role_column == AppRole.ADMIN).correlate(None)
        stmt = insert(UserRole).from_select(
            ["user_id", "role"],
            select(
                cast(user_id, Integer),
                cast(AppRole.ADMIN, role_column.type),
            ).where(~admin_rows.exists()),
        )

        with _initial_admin_lock:
            with store_operation(self.db, "bootstrap_admin", user_id=user_id):
                result = self.db.execute(stmt)
                self.db.commit()

        if result.rowcount != 1:
            raise AuthorizationDenied("An admin already exists")

        logger.info("Role granted", context={"action": "bootstrap_admin", "user_id": user_id, "role": AppRole.ADMIN.value})
        return (
            self.db.query(UserRole)
            .filter(UserRole.user_id == user_id, UserRole.role == AppRole.ADMIN)
            .one()
        )

    def grant(self, user_id: int, role: AppRole) -> UserRole:
        """Grant a role (operator path, no policy check)."""
        return self._insert(user_id, role, action="grant_role")

    def revoke(self, user_id: int, role: AppRole) -> None:
        """Revoke a role. The last admin cannot be revoked."""
        row = (
            self.db.query(UserRole)
            .filter(UserRole.user_id == user_id, UserRole.role == role)
            .first()
        )
        if row is None:
            raise NotFound("User does not have this role", action="revoke_role", entity_id=user_id)

        if role == AppRole.ADMIN and len(self.list_admins()) <= 1:
            raise AuthorizationDenied("Cannot revoke the last admin")

        with store_operation(self.db, "revoke_role", user_id=user_id):
            self.db.delete(row)
            self.db.commit()
        logger.info("Role revoked", context={"user_id": user_id, "role": role.value})

    def _insert(self, user_id: int, role: AppRole, action: str) -> UserRole:
        if self.db.query(User).filter(User.id == user_id).first() is None:
            raise NotFound("User not found", action=action, entity_id=user_id)

        row = UserRole(user_id=user_id, role=role)
        with store_operation(self.db, action, user_id=user_id):
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        logger.info("Role granted", context={"action": action, "user_id": user_id, "role": role.value})
        return row
