"""
Credential store: user registration and lookup.
"""
import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from fintrack.core.exceptions import ConflictError, CredentialsError, NotFoundError, ValidationError
from fintrack.core.security import get_password_hash, verify_password
from fintrack.core.utils import is_blank
from fintrack.db.session import store_operation
from fintrack.models.user import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH, User

logger = logging.getLogger(__name__)


def find_user_by_email(db: Session, email: str) -> Optional[User]:
    """Return the stored user for an exact (case-sensitive) email, or None."""
    with store_operation(db, "Find user by email"):
        return db.query(User).filter(User.email == email).first()


def get_user(db: Session, user_id: int) -> User:
    with store_operation(db, "Get user", user_id):
        user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def register_user(
    db: Session,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    rounds: int = 10
) -> User:
    """
    Create a user with a salted bcrypt hash of the password.

    Raises:
        ValidationError: if name, email or password is empty, or a value
            does not fit its column.
        ConflictError: if the email is already registered.
    """
    if is_blank(name) or is_blank(email) or is_blank(password):
        raise ValidationError("All fields are required")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(f"Name must be at most {NAME_MAX_LENGTH} characters")
    if len(email) > EMAIL_MAX_LENGTH:
        raise ValidationError(f"Email must be at most {EMAIL_MAX_LENGTH} characters")

    if find_user_by_email(db, email):
        raise ConflictError("User already exists")

    new_user = User(
        name=name,
        email=email,
        password_hash=get_password_hash(password, rounds=rounds)
    )
    with store_operation(db, "Register user"):
        try:
            db.add(new_user)
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            db.rollback()
            raise ConflictError("User already exists")
        db.refresh(new_user)

    logger.info("Registered user %s", new_user.id)
    return new_user


def authenticate_user(db: Session, email: Optional[str], password: Optional[str]) -> User:
    """
    Check login credentials.

    Unknown email and wrong password raise the same CredentialsError so the
    response does not reveal which accounts exist.
    """
    if is_blank(email) or is_blank(password):
        raise ValidationError("Email and password are required")

    user = find_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.info("Failed login attempt")
        raise CredentialsError()
    return user
