"""
Transaction CRUD routes. The owner is always the authenticated user.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from fintrack.api.dependencies import get_current_user
from fintrack.db.session import get_db
from fintrack.schemas.transaction import MessageResponse, TransactionIn, TransactionResponse
from fintrack.schemas.user import TokenClaims
from fintrack.services import transaction_service

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=List[TransactionResponse])
def list_transactions(
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get all transactions for the current user."""
    return transaction_service.list_transactions(db, current_user.id)


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
def create_transaction(
    transaction_data: TransactionIn,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a transaction."""
    return transaction_service.create_transaction(
        db, current_user.id, transaction_data.model_dump()
    )


@router.put("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: int,
    transaction_data: TransactionIn,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Replace a transaction's fields."""
    return transaction_service.update_transaction(
        db, current_user.id, transaction_id, transaction_data.model_dump()
    )


@router.delete("/{transaction_id}", response_model=MessageResponse)
def delete_transaction(
    transaction_id: int,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a transaction."""
    transaction_service.delete_transaction(db, current_user.id, transaction_id)
    return {"message": "Transaction deleted successfully"}
