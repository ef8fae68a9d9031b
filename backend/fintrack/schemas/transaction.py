"""
Pydantic schemas for Transaction entity.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import date as dt_date, datetime
from decimal import Decimal
from fintrack.models.transaction import TransactionType

# Offered by the dashboard; storage accepts any category string
SUGGESTED_CATEGORIES = [
    "Food",
    "Transport",
    "Entertainment",
    "Shopping",
    "Bills",
    "Salary",
    "Other",
]


class TransactionIn(BaseModel):
    """
    Body for create and update.

    Every field is optional at parse time so that a missing field surfaces
    as a store-level ValidationError. Any user_id sent by the client is
    dropped; ownership comes from the token.
    """
    description: Optional[str] = None
    amount: Optional[Decimal] = None
    category: Optional[str] = None
    type: Optional[str] = None
    date: Optional[dt_date] = None


class TransactionResponse(BaseModel):
    """Schema for transaction response."""
    id: int
    user_id: int
    description: str
    amount: Decimal
    category: str
    type: TransactionType
    date: dt_date
    created_at: datetime

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    message: str
