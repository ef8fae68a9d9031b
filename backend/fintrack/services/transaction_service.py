"""
Transaction store: owner-scoped CRUD and reporting aggregates.

Every query filters on ``user_id``; a row owned by someone else is
indistinguishable from a row that does not exist.
"""
import logging
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, List, Mapping
from sqlalchemy import extract, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from fintrack.core.exceptions import NotFoundError, ValidationError
from fintrack.core.utils import is_blank
from fintrack.db.session import store_operation
from fintrack.models.transaction import (
    CATEGORY_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    Transaction,
    TransactionType,
)
from fintrack.schemas.analytics import AnalyticsRow, CategoryTotal, SummaryResponse

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("description", "amount", "category", "type", "date")
TWO_PLACES = Decimal("0.01")
# NUMERIC(10, 2) holds at most eight integer digits
MAX_AMOUNT = Decimal("99999999.99")


def _to_amount(value: Any) -> Decimal:
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
        amount = amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        raise ValidationError("Amount must be a number")
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("Amount must be greater than zero")
    if amount > MAX_AMOUNT:
        raise ValidationError("Amount is too large")
    return amount


def _to_type(value: Any) -> TransactionType:
    try:
        return TransactionType(value)
    except ValueError:
        raise ValidationError("Type must be 'income' or 'expense'")


def _to_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValidationError("Date must be YYYY-MM-DD")


def validate_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Check and normalize the five mutable transaction fields.

    Unknown keys (including any client supplied user_id) are discarded.
    """
    if any(is_blank(fields.get(name)) for name in REQUIRED_FIELDS):
        raise ValidationError("All fields are required")
    description = str(fields["description"]).strip()
    category = str(fields["category"]).strip()
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters")
    if len(category) > CATEGORY_MAX_LENGTH:
        raise ValidationError(f"Category must be at most {CATEGORY_MAX_LENGTH} characters")
    return {
        "description": description,
        "amount": _to_amount(fields["amount"]),
        "category": category,
        "type": _to_type(fields["type"]),
        "date": _to_date(fields["date"]),
    }


def _owned(db: Session, user_id: int, transaction_id: int):
    return db.query(Transaction).filter(
        Transaction.id == transaction_id,
        Transaction.user_id == user_id
    )


def list_transactions(db: Session, user_id: int) -> List[Transaction]:
    """All of a user's transactions, newest date first; ties newest id first."""
    with store_operation(db, "List transactions", user_id):
        return db.query(Transaction).filter(
            Transaction.user_id == user_id
        ).order_by(
            Transaction.date.desc(),
            Transaction.id.desc()
        ).all()


def create_transaction(db: Session, user_id: int, fields: Mapping[str, Any]) -> Transaction:
    """
    Store a new transaction for the user.

    The five fields are validated first, so the only integrity failure left
    is the owner reference: a token for a user who has since been removed.
    """
    values = validate_fields(fields)
    with store_operation(db, "Create transaction", user_id):
        transaction = Transaction(user_id=user_id, **values)
        try:
            db.add(transaction)
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info("Create transaction for missing user %s", user_id)
            raise NotFoundError("User not found")
        db.refresh(transaction)
    return transaction


def update_transaction(
    db: Session,
    user_id: int,
    transaction_id: int,
    fields: Mapping[str, Any]
) -> Transaction:
    """
    Overwrite all mutable fields of an owned transaction.

    No optimistic concurrency: the last write wins. If a concurrent delete
    removes the row between the ownership check and the UPDATE, the update
    affects zero rows and is reported as not found.
    """
    values = validate_fields(fields)
    with store_operation(db, "Update transaction", user_id):
        if not _owned(db, user_id, transaction_id).first():
            raise NotFoundError("Transaction not found")

        updated = _owned(db, user_id, transaction_id).update(
            values, synchronize_session=False
        )
        db.commit()
        if not updated:
            raise NotFoundError("Transaction not found")

        transaction = _owned(db, user_id, transaction_id).first()
    if not transaction:
        raise NotFoundError("Transaction not found")
    return transaction


def delete_transaction(db: Session, user_id: int, transaction_id: int):
    with store_operation(db, "Delete transaction", user_id):
        deleted = _owned(db, user_id, transaction_id).delete(synchronize_session=False)
        db.commit()
    if not deleted:
        raise NotFoundError("Transaction not found")
    logger.info("User %s deleted transaction %s", user_id, transaction_id)


def get_analytics(db: Session, user_id: int) -> List[AnalyticsRow]:
    """
    Sum amounts per (type, category, month), latest month first.

    Recomputed from the transactions table on every call.
    """
    year = extract("year", Transaction.date)
    month = extract("month", Transaction.date)
    with store_operation(db, "Analytics", user_id):
        rows = db.query(
            Transaction.type,
            Transaction.category,
            func.sum(Transaction.amount).label("total"),
            year.label("year"),
            month.label("month")
        ).filter(
            Transaction.user_id == user_id
        ).group_by(
            Transaction.type,
            Transaction.category,
            year,
            month
        ).order_by(
            year.desc(),
            month.desc(),
            Transaction.type,
            Transaction.category
        ).all()

    return [
        AnalyticsRow(
            type=row.type,
            category=row.category,
            total=Decimal(row.total).quantize(TWO_PLACES),
            month=date(int(row.year), int(row.month), 1)
        )
        for row in rows
    ]


def get_summary(db: Session, user_id: int) -> SummaryResponse:
    """Income, expense and balance totals plus expense totals per category."""
    with store_operation(db, "Summary", user_id):
        totals = dict(
            db.query(Transaction.type, func.sum(Transaction.amount)).filter(
                Transaction.user_id == user_id
            ).group_by(Transaction.type).all()
        )
        count = db.query(func.count(Transaction.id)).filter(
            Transaction.user_id == user_id
        ).scalar() or 0
        spent = func.sum(Transaction.amount)
        categories = db.query(Transaction.category, spent).filter(
            Transaction.user_id == user_id,
            Transaction.type == TransactionType.EXPENSE
        ).group_by(Transaction.category).order_by(
            spent.desc(),
            Transaction.category
        ).all()

    income = Decimal(totals.get(TransactionType.INCOME) or 0).quantize(TWO_PLACES)
    expense = Decimal(totals.get(TransactionType.EXPENSE) or 0).quantize(TWO_PLACES)
    return SummaryResponse(
        total_income=income,
        total_expense=expense,
        balance=income - expense,
        transaction_count=count,
        expense_by_category=[
            CategoryTotal(category=category, total=Decimal(total).quantize(TWO_PLACES))
            for category, total in categories
        ]
    )
