"""
Pydantic schemas for reporting aggregates.
"""
from pydantic import BaseModel
from typing import List
from datetime import date as dt_date
from decimal import Decimal
from fintrack.models.transaction import TransactionType


class AnalyticsRow(BaseModel):
    """Summed amount for one (type, category, month) group."""
    type: TransactionType
    category: str
    total: Decimal
    month: dt_date  # First day of the month


class CategoryTotal(BaseModel):
    category: str
    total: Decimal


class SummaryResponse(BaseModel):
    """Balance cards and spending-by-category data for the dashboard."""
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    transaction_count: int
    expense_by_category: List[CategoryTotal]
