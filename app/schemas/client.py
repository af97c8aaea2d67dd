from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import EmailStr, Field

from app.models.client import ClientStatus
from app.schemas.common import CamelModel


class RecruitedOutcome(CamelModel):
    status: Literal["RECRUITED"] = "RECRUITED"
    title: str | None = None
    company: str | None = None
    position: str | None = None
    start_year: str | None = None
    work_city: str | None = None


class FurtherOutcome(CamelModel):
    status: Literal["FARTHER"] = "FARTHER"
    school: str | None = None
    further_ed: str | None = None
    city: str | None = None


class SelfEmployedOutcome(CamelModel):
    status: Literal["EMPLOYED"] = "EMPLOYED"
    self_employed: str | None = None


class SearchingOutcome(CamelModel):
    status: Literal["SEARCHING"] = "SEARCHING"
    duration: str | None = None


Outcome = Annotated[
    Union[RecruitedOutcome, FurtherOutcome, SelfEmployedOutcome, SearchingOutcome],
    Field(discriminator="status"),
]

OUTCOME_VARIANTS: dict[ClientStatus, type[CamelModel]] = {
    ClientStatus.RECRUITED: RecruitedOutcome,
    ClientStatus.FARTHER: FurtherOutcome,
    ClientStatus.EMPLOYED: SelfEmployedOutcome,
    ClientStatus.SEARCHING: SearchingOutcome,
}


class ClientPayload(CamelModel):
    """Flat add/update body. Outcome fields outside the chosen status are ignored."""

    first_name: str = Field(min_length=3)
    last_name: str = Field(min_length=3)
    email: EmailStr
    phone: str = Field(min_length=10)
    education_id: str = Field(min_length=6)
    academic_year: str = Field(min_length=4)
    status: ClientStatus

    title: str | None = None
    company: str | None = None
    position: str | None = None
    start_year: str | None = None
    work_city: str | None = None
    school: str | None = None
    further_ed: str | None = None
    city: str | None = None
    self_employed: str | None = None
    duration: str | None = None

    def client_fields(self) -> dict:
        return self.model_dump(
            include={"first_name", "last_name", "email", "phone", "education_id", "academic_year", "status"}
        )

    def outcome(self) -> RecruitedOutcome | FurtherOutcome | SelfEmployedOutcome | SearchingOutcome:
        variant = OUTCOME_VARIANTS[self.status]
        fields = set(variant.model_fields) - {"status"}
        return variant.model_validate(self.model_dump(include=fields))


class EducationResponse(CamelModel):
    id: str
    name: str


class ClientResponse(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    education_id: str
    education: EducationResponse | None = None
    academic_year: str
    status: ClientStatus
    outcome: Outcome | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @classmethod
    def from_model(cls, client) -> "ClientResponse":
        outcome = None
        row = client.outcome
        if row is not None:
            outcome = OUTCOME_VARIANTS[ClientStatus(client.status)].model_validate(row, from_attributes=True)
        education = client.education
        return cls(
            id=client.id,
            first_name=client.first_name,
            last_name=client.last_name,
            email=client.email,
            phone=client.phone,
            education_id=client.education_id,
            education=EducationResponse.model_validate(education) if education is not None else None,
            academic_year=client.academic_year,
            status=client.status,
            outcome=outcome,
            created_at=client.created_at,
            updated_at=client.updated_at,
            deleted_at=client.deleted_at,
        )


class ClientMutationResponse(CamelModel):
    message: str
    client: ClientResponse


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    page_size: int


class ClientPage(CamelModel):
    data: list[ClientResponse]
    pagination: Pagination


class CategoryStat(CamelModel):
    name: str
    count: int
    percentage: float


class ClientStats(CamelModel):
    total_clients: int
    categories: list[CategoryStat]
