"""
Transaction model for income and expense records.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer, Enum as SQLEnum
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import relationship
from fintrack.db.base import BaseModel
import enum

DESCRIPTION_MAX_LENGTH = 255
CATEGORY_MAX_LENGTH = 50


class TransactionType(str, enum.Enum):
    """Transaction direction."""
    INCOME = "income"
    EXPENSE = "expense"


class Transaction(BaseModel):
    """A single income or expense owned by exactly one user."""
    __tablename__ = "transactions"

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    description = Column(String(DESCRIPTION_MAX_LENGTH), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    # Open set, not enforced. Grouped case-sensitively, so binary on MySQL
    category = Column(
        String(CATEGORY_MAX_LENGTH).with_variant(
            mysql.VARCHAR(CATEGORY_MAX_LENGTH, collation="utf8mb4_bin"), "mysql"
        ),
        nullable=False
    )
    type = Column(
        SQLEnum(
            TransactionType,
            name="transaction_type",
            native_enum=False,
            length=20,
            values_callable=lambda enum_cls: [member.value for member in enum_cls]
        ),
        nullable=False
    )
    date = Column(Date, nullable=False, index=True)

    # Relationships
    owner = relationship("User", back_populates="transactions")
