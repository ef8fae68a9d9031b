"""
Authentication routes for registration and login.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from fintrack.api.dependencies import get_settings
from fintrack.core.config import Settings
from fintrack.core.security import issue_token
from fintrack.db.session import get_db
from fintrack.schemas.user import AuthResponse, UserCreate, UserLogin
from fintrack.services.credential_service import authenticate_user, register_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Register a new user and log them in."""
    user = register_user(
        db,
        user_data.name,
        user_data.email,
        user_data.password,
        rounds=settings.BCRYPT_ROUNDS
    )
    token = issue_token(user.id, user.email, settings)
    return {"token": token, "user": user}


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Login and get JWT token."""
    user = authenticate_user(db, credentials.email, credentials.password)
    token = issue_token(user.id, user.email, settings)
    return {"token": token, "user": user}
