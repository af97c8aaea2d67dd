from datetime import datetime

from sqlalchemy.orm import Session

from app.models.reset_token import ResetToken
from app.core.security import generate_id


def create(db: Session, user_id: str, token: str, expires_at: datetime) -> ResetToken:
    """Stage a reset token. Not committed: the mail send decides whether it sticks."""
    row = ResetToken(
        id=generate_id(),
        token=token,
        user_id=user_id,
        expires_at=expires_at,
    )
    db.add(row)
    db.flush()
    return row


def get_by_token(db: Session, token: str) -> ResetToken | None:
    return db.query(ResetToken).filter(ResetToken.token == token).first()


def delete(db: Session, row: ResetToken) -> None:
    db.delete(row)
