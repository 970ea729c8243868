"""Authentication endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from catalog.api.errors import http_error
from catalog.bootstrap import BootstrapFlagStore, RoleBootstrap
from catalog.database import get_db
from catalog.dependencies import get_bootstrap_flags, get_current_user
from catalog.errors import CatalogError
from catalog.services.auth import AuthService
from catalog.schemas.user import UserCreate, UserLogin, LoginResponse, UserResponse
from catalog.schemas.common import MessageResponse
from catalog.models.user import User

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(request: UserCreate, db: Session = Depends(get_db)):
    """Create an account with the regular user role."""
    auth = AuthService(db)
    try:
        user = auth.create_user(request.username, request.password)
    except CatalogError as e:
        raise http_error(e)
    return UserResponse.from_model(user)


@router.post("/login", response_model=LoginResponse)
def login(
    request: UserLogin,
    db: Session = Depends(get_db),
    flags: BootstrapFlagStore = Depends(get_bootstrap_flags),
):
    """Authenticate user, attempt the admin bootstrap, and return a JWT token."""
    auth = AuthService(db)
    user = auth.authenticate(request.username, request.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    if RoleBootstrap(db, flags).attempt(user.id):
        db.refresh(user)

    token = auth.create_token(user.id)

    return LoginResponse(token=token, user=UserResponse.from_model(user))


@router.post("/logout", response_model=MessageResponse)
def logout(user: User = Depends(get_current_user)):
    """Logout current user (client should discard token)."""
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
def get_me(user: User = Depends(get_current_user)):
    """Get current user info."""
    return UserResponse.from_model(user)
