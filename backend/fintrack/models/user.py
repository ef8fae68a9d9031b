"""
User model for authentication.
"""
from sqlalchemy import Column, String
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import relationship
from fintrack.db.base import BaseModel

NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255


class User(BaseModel):
    """Account owning a set of transactions. Email is unique as stored."""
    __tablename__ = "users"

    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    # Binary collation on MySQL, whose default collation ignores case
    email = Column(
        String(EMAIL_MAX_LENGTH).with_variant(
            mysql.VARCHAR(EMAIL_MAX_LENGTH, collation="utf8mb4_bin"), "mysql"
        ),
        unique=True,
        nullable=False,
        index=True
    )
    password_hash = Column(String(255), nullable=False)

    # Relationships
    transactions = relationship(
        "Transaction",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True
    )
