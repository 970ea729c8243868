"""FastAPI dependencies for authentication and per-process state."""
import threading

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from catalog.bootstrap import BootstrapFlagStore, MemoryFlagStore
from catalog.database import get_db
from catalog.services.artwork import ArtworkStorage
from catalog.services.auth import AuthService
from catalog.models.user import User

security = HTTPBearer(auto_error=False)

_state_lock = threading.Lock()


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Get the current authenticated user from JWT token."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication",
            headers={"WWW-Authenticate": "Bearer"},
        )

    auth = AuthService(db)
    user_id = auth.decode_token(credentials.credentials)

    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = auth.get_user_by_id(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Get current user and require the admin role."""
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


def get_bootstrap_flags(request: Request) -> BootstrapFlagStore:
    """Bootstrap flag store for this process (created on first use)."""
    state = request.app.state
    with _state_lock:
        flags = getattr(state, "bootstrap_flags", None)
        if flags is None:
            flags = MemoryFlagStore()
            state.bootstrap_flags = flags
    return flags


def get_artwork_storage() -> ArtworkStorage:
    """Artwork storage configured from settings."""
    return ArtworkStorage()
