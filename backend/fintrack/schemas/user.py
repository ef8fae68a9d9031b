"""
Pydantic schemas for User entity and session tokens.
"""
from pydantic import BaseModel
from typing import Optional


class UserCreate(BaseModel):
    """Schema for registration. Emptiness is checked by the credential store."""
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserLogin(BaseModel):
    """Schema for user login."""
    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    """Public view of a user; never carries the password hash."""
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    """Schema for register/login response."""
    token: str
    user: UserResponse


class TokenClaims(BaseModel):
    """Identity decoded from a verified session token."""
    id: int
    email: str
