import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.errors import AppError
from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.repos.education_repo import get_all as get_all_educations
from app.schemas.client import (
    ClientMutationResponse,
    ClientPage,
    ClientPayload,
    ClientResponse,
    ClientStats,
    EducationResponse,
    Pagination,
)
from app.services.client_service import (
    add_client,
    delete_client,
    get_client,
    get_stats,
    list_clients,
    update_client,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/client", tags=["client"])


def _internal_error(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


@router.post("/add", response_model=ClientMutationResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    data: ClientPayload,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        client = add_client(db, data)
        return ClientMutationResponse(message="Client created successfully", client=ClientResponse.from_model(client))
    except AppError:
        raise
    except Exception as e:
        logger.exception("Add client failed for email=%s: %s", data.email, e)
        raise _internal_error("Failed to create client") from e


@router.get("", response_model=ClientPage)
def search_clients(
    search: str | None = None,
    page: str | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Active clients, 10 per page by default, newest first. Search matches first name, last name or email."""
    try:
        result = list_clients(db, search=search, page=page)
        return ClientPage(
            data=[ClientResponse.from_model(c) for c in result["items"]],
            pagination=Pagination(
                current_page=result["current_page"],
                total_pages=result["total_pages"],
                total_items=result["total_items"],
                page_size=result["page_size"],
            ),
        )
    except AppError:
        raise
    except Exception as e:
        logger.exception("Client listing failed (search=%r page=%r): %s", search, page, e)
        raise _internal_error("Failed to list clients") from e


@router.get("/stats", response_model=ClientStats)
def client_stats(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return ClientStats(**get_stats(db))
    except Exception as e:
        logger.exception("Client stats failed: %s", e)
        raise _internal_error("Failed to load client stats") from e


@router.get("/educations", response_model=list[EducationResponse])
def list_educations(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return [EducationResponse.model_validate(e) for e in get_all_educations(db)]
    except Exception as e:
        logger.exception("Education listing failed: %s", e)
        raise _internal_error("Failed to list educations") from e


@router.get("/{client_id}", response_model=ClientResponse)
def read_client(
    client_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return ClientResponse.from_model(get_client(db, client_id))
    except AppError:
        raise
    except Exception as e:
        logger.exception("Get client failed for id=%s: %s", client_id, e)
        raise _internal_error("Failed to load client") from e


@router.put("/{client_id}", response_model=ClientMutationResponse)
def replace_client(
    client_id: str,
    data: ClientPayload,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        client = update_client(db, client_id, data)
        return ClientMutationResponse(message="Client updated successfully", client=ClientResponse.from_model(client))
    except AppError:
        raise
    except Exception as e:
        logger.exception("Update client failed for id=%s: %s", client_id, e)
        raise _internal_error("Failed to update client") from e


@router.delete("/{client_id}", response_model=ClientMutationResponse)
def remove_client(
    client_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        client = delete_client(db, client_id)
        logger.info("Client %s deleted by %s", client_id, user.email)
        return ClientMutationResponse(message="Client deleted successfully", client=ClientResponse.from_model(client))
    except AppError:
        raise
    except Exception as e:
        logger.exception("Delete client failed for id=%s: %s", client_id, e)
        raise _internal_error("Failed to delete client") from e
