"""
Request dependencies: authentication of the calling user.

The session token is read from the auth cookie (dashboard) or an
Authorization: Bearer header (API clients). Routers receive the User row
and the request's DB session.
"""
import logging
from typing import Optional, Tuple

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.user import User
from app.utils.auth_internal import CLAIM_SUB, decode_access_token

logger = logging.getLogger(__name__)


def _token_from_request(request: Request) -> Optional[str]:
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if token:
        return token
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth[7:].strip() or None
    return None


def authenticate_request(request: Request, db: Session) -> User:
    """
    Resolve the authenticated user or raise 401.
    Missing token -> "Unauthorized"; bad/expired token or unknown user -> "Invalid token".
    """
    token = _token_from_request(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    payload = decode_access_token(token)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        user_id = int(payload[CLAIM_SUB])
    except (ValueError, TypeError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        logger.warning("Token for unknown user id %s", user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
) -> Tuple[User, Session]:
    """Require a valid session token; return (user, db)."""
    user = authenticate_request(request, db)
    return (user, db)
