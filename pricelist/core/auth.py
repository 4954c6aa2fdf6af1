"""
Authentication and session utilities.

Sessions are stateless JWT bearer tokens. A request's session resolves to the
stored user the token names, or to nothing.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from pricelist.core.config import settings
from pricelist.core.database import get_db
from pricelist.core.errors import UnauthorizedError
from pricelist.models.user import User


# auto_error is off so a missing header becomes our own UNAUTHORIZED body
security = HTTPBearer(auto_error=False)


def verify_password(plain_password: str, hashed_password_in_db: str) -> bool:
    """
    Verify a plain password against the stored bcrypt hash.

    Args:
        plain_password: Plain text password from the client
        hashed_password_in_db: Bcrypt hash stored in the database

    Returns:
        True if the password matches the hash, False otherwise
    """
    return bcrypt.checkpw(
        plain_password.encode('utf-8'),
        hashed_password_in_db.encode('utf-8')
    )


def get_password_hash(plain_password: str) -> str:
    """Hash a plain password with bcrypt (12 rounds, salt embedded in the hash)."""
    salt = bcrypt.gensalt(rounds=12)
    hashed = bcrypt.hashpw(plain_password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT access token.

    Args:
        data: Claims to embed; ``sub`` must hold the user id
        expires_delta: Optional lifetime, defaults to JWT_EXPIRATION_HOURS

    Returns:
        Encoded JWT string
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)

    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(hours=settings.JWT_EXPIRATION_HOURS)

    to_encode.update({
        "exp": expire,
        "iat": now,
        "type": "access"
    })

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM
    )


def decode_access_token(token: str) -> Optional[dict]:
    """Decode and validate a JWT access token; None when invalid or expired."""
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        return None

    if payload.get("type") != "access":
        return None
    return payload


def get_session_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Resolve the bearer token on the request to a user, or None."""
    if not credentials:
        return None

    payload = decode_access_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        return None

    return db.query(User).filter(User.id == payload["sub"]).first()


def get_current_user(user: Optional[User] = Depends(get_session_user)) -> User:
    """Require an authenticated session."""
    if user is None:
        raise UnauthorizedError()
    return user


def get_current_user_id(user: User = Depends(get_current_user)) -> str:
    return user.id
