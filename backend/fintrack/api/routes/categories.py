"""
Category suggestions for the transaction form.
"""
from fastapi import APIRouter
from typing import List
from fintrack.schemas.transaction import SUGGESTED_CATEGORIES

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[str])
async def list_categories():
    """Suggested categories. Any other category string is accepted too."""
    return SUGGESTED_CATEGORIES
