import logging

from fastapi import Cookie, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.errors import AuthError
from app.database import get_db
from app.core.security import decode_access_token
from app.repos.user_repo import get_by_id

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)

SESSION_COOKIE_NAME = "token"


def get_current_user(
    db: Session = Depends(get_db),
    token: str | None = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> "User":
    """Resolve the session cookie (or a bearer header, for API clients) to a user."""
    from app.models.user import User  # noqa: F401

    raw = token or (credentials.credentials if credentials else None)
    if not raw:
        logger.info("Auth failed: no session cookie or bearer credentials")
        raise AuthError("Access denied. No token provided.")
    payload = decode_access_token(raw)
    if not payload:
        logger.info("Auth failed: invalid or expired token")
        raise AuthError("Invalid or expired token")
    user = get_by_id(db, payload["sub"])
    if not user:
        logger.info("Auth failed: user from token not found")
        raise AuthError("User not found")
    return user
