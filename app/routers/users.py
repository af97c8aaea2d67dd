import logging
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.core.errors import AppError, AuthError, ConflictError, NotFoundError, ValidationError
from app.core.security import (
    create_access_token,
    generate_reset_token,
    hash_password,
    session_lifetime,
    verify_password,
)
from app.database import get_db
from app.dependencies import SESSION_COOKIE_NAME, get_current_user
from app.models.user import User
from app.repos.reset_token_repo import (
    create as create_reset_token,
    delete as delete_reset_token,
    get_by_token as get_reset_token,
)
from app.repos.user_repo import (
    create as create_user_repo,
    get_all_users,
    get_by_email,
    get_by_id,
    set_password_hash,
)
from app.schemas.common import MessageResponse
from app.schemas.user import (
    ForgotPasswordRequest,
    LoginResponse,
    ResetPasswordRequest,
    UserCreate,
    UserLogin,
    UserResponse,
)
from app.services.mailer import send_password_reset_email

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/user", tags=["user"])


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _set_session_cookie(response: Response, token: str, max_age: int) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=max_age,
        httponly=True,
        secure=settings.cookie_secure or settings.is_production,
        samesite="strict",
        path="/",
    )


@router.post("/adduser", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(data: UserCreate, db: Session = Depends(get_db)):
    try:
        if get_by_email(db, data.email):
            raise ConflictError("User already exists")
        user = create_user_repo(db, data.user_name, data.email, data.password)
        logger.info("User created: %s", user.email)
        return UserResponse.model_validate(user)
    except AppError:
        raise
    except IntegrityError as e:
        db.rollback()
        logger.info("Create user lost a unique-email race for email=%s", data.email)
        raise ConflictError("User already exists") from e
    except Exception as e:
        logger.exception("Create user failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create user") from e


@router.post("/login", response_model=LoginResponse)
def login(data: UserLogin, response: Response, db: Session = Depends(get_db)):
    try:
        user = get_by_email(db, data.email)
        if not user or not verify_password(data.password, user.password_hash):
            logger.info("Login rejected for email=%s", data.email)
            raise AuthError("Invalid credentials")
        lifetime = session_lifetime(data.remember_me)
        token = create_access_token(user.id, role=user.role.value, expires_delta=lifetime)
        _set_session_cookie(response, token, int(lifetime.total_seconds()))
        logger.info("User logged in: %s (remember_me=%s)", user.email, data.remember_me)
        return LoginResponse(message="Login successful", user=UserResponse.model_validate(user))
    except AppError:
        raise
    except Exception as e:
        logger.exception("Login failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Authentication failed") from e


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response):
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.cookie_secure or settings.is_production,
        samesite="strict",
    )
    return MessageResponse(message="Logout successful")


@router.get("/me", response_model=UserResponse)
def user_data(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        current = get_by_id(db, user.id)
        if not current:
            raise NotFoundError("User not found")
        return UserResponse.model_validate(current)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Fetching user data failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error") from e


@router.get("/users", response_model=list[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return [UserResponse.model_validate(u) for u in get_all_users(db)]
    except Exception as e:
        logger.exception("Listing users failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to list users") from e


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(data: ForgotPasswordRequest, db: Session = Depends(get_db)):
    """Mail a single-use reset link. The token is only kept if the mail went out."""
    try:
        user = get_by_email(db, data.email)
        if not user:
            raise NotFoundError("User not found")
        token = generate_reset_token()
        expires_at = datetime.now(timezone.utc) + timedelta(minutes=settings.reset_token_expire_minutes)
        try:
            create_reset_token(db, user.id, token, expires_at)
            send_password_reset_email(user.email, token)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info("Reset token issued for %s, expires in %d min", user.email, settings.reset_token_expire_minutes)
        return MessageResponse(message="Password reset link sent. Check your email.")
    except AppError:
        raise
    except Exception as e:
        logger.exception("Forgot-password flow failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to send reset email") from e


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(data: ResetPasswordRequest, db: Session = Depends(get_db)):
    """Consume a reset token. Expired tokens are rejected but left in place."""
    try:
        row = get_reset_token(db, data.token)
        if not row:
            raise ValidationError.for_field("token", "Invalid token")
        if _as_utc(row.expires_at) <= datetime.now(timezone.utc):
            raise ValidationError.for_field("token", "Token expired")
        user = get_by_id(db, row.user_id)
        if not user:
            raise NotFoundError("User not found")
        try:
            set_password_hash(db, user, hash_password(data.password))
            delete_reset_token(db, row)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info("Password reset completed for %s", user.email)
        return MessageResponse(message="Password reset successful")
    except AppError:
        raise
    except Exception as e:
        logger.exception("Reset-password failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to reset password") from e
