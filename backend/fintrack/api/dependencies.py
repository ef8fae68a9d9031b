"""
Shared route dependencies: settings, database session and authentication.
"""
import logging
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from fintrack.core.config import Settings
from fintrack.core.exceptions import AuthError
from fintrack.core.security import verify_token
from fintrack.schemas.user import TokenClaims

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    """Settings of the application serving this request."""
    return request.app.state.settings


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings)
) -> TokenClaims:
    """
    Verify the bearer token and return its identity claims.

    The claims are also attached to ``request.state.user``. They are the only
    source of the owner id for transaction routes.
    """
    if credentials is None or not credentials.credentials:
        raise AuthError.missing()
    claims = verify_token(credentials.credentials, settings)
    request.state.user = claims
    return claims
