"""Models package - Import all models for SQLAlchemy registration."""
from fintrack.models.user import User
from fintrack.models.transaction import Transaction, TransactionType

__all__ = [
    "User",
    "Transaction",
    "TransactionType",
]
