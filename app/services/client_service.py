"""
Client lifecycle: add, update, soft delete, listing and stats.

Every write runs in one transaction. A client and its outcome row are
committed together or not at all, which keeps each active client at exactly
one outcome row matching its status. Concurrent updates of the same client
are last-writer-wins at the database's isolation level.
"""

import logging
import math

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.models.client import Client
from app.repos import client_repo, education_repo
from app.schemas.client import ClientPayload

logger = logging.getLogger(__name__)

STATS_EDUCATION_CATEGORIES = (
    "Software Development",
    "Data Science & AI",
    "Creative Technologies",
)


def _require_education(db: Session, education_id: str) -> None:
    if education_repo.get_by_id(db, education_id) is None:
        raise ValidationError.for_field("educationId", "Education not found")


def _get_active_or_404(db: Session, client_id: str) -> Client:
    client = client_repo.get_active_by_id(db, client_id)
    if client is None:
        raise NotFoundError("Client not found")
    return client


def add_client(db: Session, payload: ClientPayload) -> Client:
    if client_repo.get_active_by_email(db, payload.email):
        raise ConflictError("Client already exists")
    _require_education(db, payload.education_id)
    try:
        client_id = client_repo.create(db, payload.client_fields()).id
        client_repo.add_outcome(db, client_id, payload.outcome())
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Client already exists") from e
    except Exception:
        db.rollback()
        raise
    logger.info("Client created: id=%s status=%s", client_id, payload.status.value)
    return client_repo.get_active_by_id(db, client_id)


def get_client(db: Session, client_id: str) -> Client:
    return _get_active_or_404(db, client_id)


def update_client(db: Session, client_id: str, payload: ClientPayload) -> Client:
    """Replace the client's fields and outcome. Old outcome rows are dropped from every table."""
    client = _get_active_or_404(db, client_id)
    if client_repo.get_active_by_email(db, payload.email, exclude_id=client_id):
        raise ConflictError("Email already exists for another client", status_code=400)
    _require_education(db, payload.education_id)
    try:
        client_repo.update_fields(db, client, payload.client_fields())
        client_repo.delete_outcomes(db, client)
        client_repo.add_outcome(db, client.id, payload.outcome())
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Email already exists for another client", status_code=400) from e
    except Exception:
        db.rollback()
        raise
    logger.info("Client updated: id=%s status=%s", client_id, payload.status.value)
    return client_repo.get_active_by_id(db, client_id)


def delete_client(db: Session, client_id: str) -> Client:
    """Soft delete. Outcome rows stay in place; the client drops out of every active query."""
    client = _get_active_or_404(db, client_id)
    try:
        client_repo.soft_delete(db, client)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(client)
    logger.info("Client soft-deleted: id=%s", client_id)
    return client


def parse_page(raw) -> int:
    """Page number from a query string value; anything unusable means page 1."""
    try:
        page = int(raw)
    except (TypeError, ValueError):
        return 1
    return page if page >= 1 else 1


def list_clients(db: Session, search: str | None = None, page=None) -> dict:
    page = parse_page(page)
    page_size = settings.client_page_size
    total = client_repo.count_active_matching(db, search=search)
    total_pages = math.ceil(total / page_size)
    if page > total_pages:
        raise NotFoundError("No more results")
    items = client_repo.get_active_page(
        db, search=search, limit=page_size, offset=(page - 1) * page_size
    )
    return {
        "items": items,
        "current_page": page,
        "total_pages": total_pages,
        "total_items": total,
        "page_size": page_size,
    }


def _percentage(part: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(part / total * 100, 2)


def get_stats(db: Session) -> dict:
    """Active client total plus count and share per education category. Shares are 0.0 when there are no clients."""
    total = client_repo.count_active(db)
    categories = []
    for name in STATS_EDUCATION_CATEGORIES:
        count = client_repo.count_active_by_education_name(db, name)
        categories.append({"name": name, "count": count, "percentage": _percentage(count, total)})
    return {"total_clients": total, "categories": categories}
