"""
Pydantic schemas for the session endpoints.
"""

from typing import Optional

from pydantic import EmailStr, Field

from pricelist.schemas.base import CamelModel


class SignUpRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="Login e-mail (unique)")
    password: str = Field(..., min_length=8, max_length=128, description="Plain text password (will be hashed)")


class SignInRequest(CamelModel):
    email: EmailStr = Field(..., description="Login e-mail")
    password: str = Field(..., description="Plain text password")


class UserOut(CamelModel):
    """User as exposed to clients (no password)."""
    id: str
    name: str
    email: str


class SessionResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class CurrentSession(CamelModel):
    user: Optional[UserOut] = None


class SignOutResponse(CamelModel):
    success: bool = True
