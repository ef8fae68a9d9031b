"""
Security utilities for JWT authentication and password hashing.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import base64
import hashlib
import logging
import bcrypt
from jose import JWTError, jwt
from fintrack.core.config import Settings
from fintrack.core.exceptions import AuthError
from fintrack.schemas.user import TokenClaims

logger = logging.getLogger(__name__)


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    The digest is base64 encoded (44 bytes) so bcrypt never sees a NUL byte.
    """
    digest = hashlib.sha256(password.encode('utf-8')).digest()
    return base64.b64encode(digest)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    pre_hashed = _pre_hash_password(plain_password)
    try:
        return bcrypt.checkpw(pre_hashed, hashed_password.encode('utf-8'))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def get_password_hash(password: str, rounds: int = 10) -> str:
    """
    Hash a password with a fresh salt.
    Uses bcrypt directly to avoid passlib's backend detection issues.
    """
    pre_hashed = _pre_hash_password(password)
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(pre_hashed, salt)
    # Return as string for database storage
    return hashed.decode('utf-8')


def create_access_token(
    data: dict,
    settings: Settings,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    to_encode.update({"iat": now, "exp": now + expires_delta})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> Optional[dict]:
    """Decode and verify a JWT token."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.debug("Rejected token: %s", e)
        return None


def issue_token(
    user_id: int,
    email: str,
    settings: Settings,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Issue a session token bound to a user identity."""
    return create_access_token({"id": user_id, "email": email}, settings, expires_delta)


def verify_token(token: str, settings: Settings) -> TokenClaims:
    """
    Verify signature and expiry of a session token.

    Raises:
        AuthError: (403) if the token is malformed, forged, expired, or
            lacks the identity claims.
    """
    payload = decode_access_token(token, settings)
    if payload is None:
        raise AuthError()
    user_id = payload.get("id")
    email = payload.get("email")
    if not isinstance(user_id, int) or isinstance(user_id, bool) or not email:
        logger.debug("Token is missing identity claims")
        raise AuthError()
    return TokenClaims(id=user_id, email=email)
