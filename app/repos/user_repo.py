from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.user import User, UserRole
from app.core.security import hash_password, generate_id


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(func.lower(User.email) == email.lower()).first()


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create(db: Session, user_name: str, email: str, password: str) -> User:
    """Create an account. Every account created through the API is an admin."""
    user = User(
        id=generate_id(),
        user_name=user_name,
        email=email,
        password_hash=hash_password(password),
        role=UserRole.ADMIN,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def set_password_hash(db: Session, user: User, password_hash: str) -> User:
    """Stage a new password hash; the caller commits."""
    user.password_hash = password_hash
    db.add(user)
    return user


def get_all_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at.desc()).all()
