from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.api.deps import get_current_user, oauth2_scheme
from backend.app.api.errors import internal_error
from backend.app.core.config import settings
from backend.app.core.database import get_db
from backend.app.core.security import (
    cleanup_expired_tokens,
    create_access_token,
    revoke_token,
    verify_password,
)
from backend.app.middleware.rate_limit import InMemoryRateLimiter
from backend.app.models.user import User
from backend.app.schemas.auth import LoginRequest, TokenOut, UserOut

logger = logging.getLogger(__name__)

router = APIRouter()

# Per-IP, per-process
login_limiter = InMemoryRateLimiter(
    window_seconds=settings.LOGIN_RATE_WINDOW_SECONDS,
    max_attempts=settings.LOGIN_RATE_LIMIT,
)


@router.post("/login", response_model=TokenOut)
def login(
    payload: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
) -> TokenOut:
    ip = request.client.host if request.client else "unknown"
    login_limiter.check(ip)

    try:
        user = db.query(User).filter(User.email == payload.email).first()
    except SQLAlchemyError:
        raise internal_error(request, "Login")
    if not user or not verify_password(payload.password, user.password_hash):
        logger.warning("Failed login for %s from %s", payload.email, ip)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        logger.warning("Login attempt by inactive user %s", user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user"
        )

    logger.info("User %s logged in from %s", user.id, ip)
    return TokenOut(token=create_access_token(subject=str(user.id)))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    token: str = Depends(oauth2_scheme),
    current_user: User = Depends(get_current_user),
) -> Response:
    cleanup_expired_tokens()
    revoke_token(token)
    logger.info("User %s logged out", current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)) -> User:
    return current_user
