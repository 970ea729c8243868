"""User and role models."""
from sqlalchemy import Column, Integer, String, DateTime, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from catalog.database import Base
from catalog.models.enums import AppRole, enum_values


class User(Base):
    """Account that can sign in to the admin surface."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    roles = relationship("UserRole", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def is_admin(self) -> bool:
        return any(r.role == AppRole.ADMIN for r in self.roles)

    def __repr__(self):
        return f"<User {self.username}>"


class UserRole(Base):
    """Role granted to a user."""

    __tablename__ = "user_roles"
    __table_args__ = (
        UniqueConstraint('user_id', 'role', name='uq_user_role'),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(Enum(AppRole, name="app_role", values_callable=enum_values), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="roles")

    def __repr__(self):
        return f"<UserRole {self.role} for user {self.user_id}>"
