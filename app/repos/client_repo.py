"""
Client and outcome queries.

Write helpers only flush. The client service owns commit/rollback so that a
client row and its outcome row always change in the same transaction.
"""

from datetime import datetime, timezone

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from app.models.client import Client, ClientStatus, OUTCOME_RELATIONSHIPS
from app.models.education import Education
from app.models.outcome import OUTCOME_MODELS, Recruited, Further, SelfEmployed, Searching
from app.core.security import generate_id

OUTCOME_TABLES = {
    ClientStatus.RECRUITED: Recruited,
    ClientStatus.FARTHER: Further,
    ClientStatus.EMPLOYED: SelfEmployed,
    ClientStatus.SEARCHING: Searching,
}

_EAGER = (
    joinedload(Client.education),
    joinedload(Client.recruited),
    joinedload(Client.further),
    joinedload(Client.self_employed),
    joinedload(Client.searching),
)


def _active(db: Session):
    return db.query(Client).filter(Client.deleted_at.is_(None))


def get_active_by_id(db: Session, client_id: str) -> Client | None:
    return _active(db).options(*_EAGER).filter(Client.id == client_id).first()


def get_active_by_email(db: Session, email: str, exclude_id: str | None = None) -> Client | None:
    q = _active(db).filter(func.lower(Client.email) == email.lower())
    if exclude_id is not None:
        q = q.filter(Client.id != exclude_id)
    return q.first()


def create(db: Session, fields: dict) -> Client:
    client = Client(
        id=generate_id(),
        created_at=datetime.now(timezone.utc),
        **fields,
    )
    db.add(client)
    db.flush()
    return client


def update_fields(db: Session, client: Client, fields: dict) -> Client:
    for name, value in fields.items():
        setattr(client, name, value)
    db.flush()
    return client


def delete_outcomes(db: Session, client: Client) -> int:
    """Remove the client's rows from every outcome table, whatever its status was."""
    removed = 0
    for model in OUTCOME_MODELS:
        removed += (
            db.query(model)
            .filter(model.client_id == client.id)
            .delete(synchronize_session="fetch")
        )
    db.expire(client, list(OUTCOME_RELATIONSHIPS.values()))
    return removed


def add_outcome(db: Session, client_id: str, outcome):
    model = OUTCOME_TABLES[ClientStatus(outcome.status)]
    row = model(client_id=client_id, **outcome.model_dump(exclude={"status"}))
    db.add(row)
    db.flush()
    return row


def soft_delete(db: Session, client: Client) -> Client:
    client.soft_delete()
    db.flush()
    return client


def _active_matching(db: Session, search: str | None):
    """Active clients matching search on first name, last name or email."""
    q = _active(db)
    if search and search.strip():
        term = f"%{search.strip()}%"
        q = q.filter(
            or_(
                Client.first_name.ilike(term),
                Client.last_name.ilike(term),
                Client.email.ilike(term),
            )
        )
    return q


def count_active_matching(db: Session, search: str | None = None) -> int:
    return _active_matching(db, search).count()


def get_active_page(
    db: Session,
    search: str | None = None,
    limit: int = 10,
    offset: int = 0,
) -> list[Client]:
    """One page of matching active clients, newest first."""
    return (
        _active_matching(db, search)
        .options(*_EAGER)
        .order_by(Client.created_at.desc(), Client.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def count_active(db: Session) -> int:
    return db.query(func.count(Client.id)).filter(Client.deleted_at.is_(None)).scalar() or 0


def count_active_by_education_name(db: Session, education_name: str) -> int:
    return (
        db.query(func.count(Client.id))
        .join(Education, Client.education_id == Education.id)
        .filter(Client.deleted_at.is_(None), Education.name == education_name)
        .scalar()
        or 0
    )
