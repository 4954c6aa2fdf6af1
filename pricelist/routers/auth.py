"""
Session endpoints: sign up, sign in, sign out and current session.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pricelist.core.auth import (
    create_access_token,
    get_current_user,
    get_password_hash,
    get_session_user,
    verify_password,
)
from pricelist.core.database import get_db
from pricelist.core.errors import ConflictError, UnauthorizedError
from pricelist.models.user import User
from pricelist.schemas.auth import (
    CurrentSession,
    SessionResponse,
    SignInRequest,
    SignOutResponse,
    SignUpRequest,
    UserOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def issue_session(user: User) -> SessionResponse:
    access_token = create_access_token(data={"sub": user.id, "email": user.email})
    return SessionResponse(
        access_token=access_token,
        token_type="bearer",
        user=UserOut.model_validate(user),
    )


@router.post("/sign-up", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def sign_up(data: SignUpRequest, db: Session = Depends(get_db)):
    """
    Register a new user and start a session.

    Raises:
        409 CONFLICT: If the e-mail is already registered
    """
    email = data.email.lower()
    existing = db.query(User).filter(User.email == email).first()
    if existing:
        raise ConflictError("Email already registered")

    user = User(
        name=data.name.strip(),
        email=email,
        password=get_password_hash(data.password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"Registered user {user.id}")
    return issue_session(user)


@router.post("/sign-in", response_model=SessionResponse)
def sign_in(data: SignInRequest, db: Session = Depends(get_db)):
    """
    Verify credentials and return a bearer token.

    Raises:
        401 UNAUTHORIZED: If the e-mail or password is wrong
    """
    user = db.query(User).filter(User.email == data.email.lower()).first()
    if not user or not verify_password(data.password, user.password):
        logger.warning(f"Failed sign-in for {data.email}")
        raise UnauthorizedError("Invalid email or password")

    return issue_session(user)


@router.post("/sign-out", response_model=SignOutResponse)
def sign_out(_: User = Depends(get_current_user)):
    """
    End the session.

    Tokens are stateless; the client discards its token and it lapses at expiry.
    """
    return SignOutResponse(success=True)


@router.get("/session", response_model=Optional[CurrentSession])
def get_session(user: Optional[User] = Depends(get_session_user)):
    """Current session's user, or null when the request carries no valid token."""
    if user is None:
        return None
    return CurrentSession(user=UserOut.model_validate(user))
