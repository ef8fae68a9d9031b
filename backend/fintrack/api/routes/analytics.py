"""
Reporting routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from fintrack.api.dependencies import get_current_user
from fintrack.db.session import get_db
from fintrack.schemas.analytics import AnalyticsRow, SummaryResponse
from fintrack.schemas.user import TokenClaims
from fintrack.services.transaction_service import get_analytics, get_summary

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("", response_model=List[AnalyticsRow])
def analytics(
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Totals per type, category and month."""
    return get_analytics(db, current_user.id)


@router.get("/summary", response_model=SummaryResponse)
def summary(
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Income, expense and balance for the dashboard cards."""
    return get_summary(db, current_user.id)
