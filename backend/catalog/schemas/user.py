"""User schemas."""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import List, Optional


class UserBase(BaseModel):
    """Base user fields."""
    username: str = Field(..., min_length=1, max_length=50)


class UserCreate(UserBase):
    """Registration request."""
    password: str = Field(..., min_length=6)


class UserResponse(UserBase):
    """User response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    is_admin: bool = False
    roles: List[str] = []
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, user) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            is_admin=user.is_admin,
            roles=sorted(r.role.value for r in user.roles),
            created_at=user.created_at,
        )


class UserLogin(BaseModel):
    """Login request."""
    username: str
    password: str


class LoginResponse(BaseModel):
    """Login response with token."""
    token: str
    user: UserResponse
