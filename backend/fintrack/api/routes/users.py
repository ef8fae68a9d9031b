"""
User routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from fintrack.api.dependencies import get_current_user
from fintrack.db.session import get_db
from fintrack.schemas.user import TokenClaims, UserResponse
from fintrack.services.credential_service import get_user

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
def get_current_user_info(
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get current user information."""
    return get_user(db, current_user.id)
