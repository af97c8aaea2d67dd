import enum
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Enum, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class ClientStatus(str, enum.Enum):
    RECRUITED = "RECRUITED"
    FARTHER = "FARTHER"  # further education
    EMPLOYED = "EMPLOYED"  # self-employed
    SEARCHING = "SEARCHING"


class Client(Base):
    __tablename__ = "clients"
    __table_args__ = (
        # Email is unique among active clients only; soft-deleted rows keep theirs.
        Index(
            "uq_clients_email_active",
            "email",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    id = Column(String, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=False)
    education_id = Column(String, ForeignKey("educations.id"), nullable=False)
    academic_year = Column(String, nullable=False)
    status = Column(Enum(ClientStatus, name="client_status"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    education = relationship("Education", back_populates="clients")
    recruited = relationship("Recruited", uselist=False, back_populates="client")
    further = relationship("Further", uselist=False, back_populates="client")
    self_employed = relationship("SelfEmployed", uselist=False, back_populates="client")
    searching = relationship("Searching", uselist=False, back_populates="client")

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        self.deleted_at = datetime.now(timezone.utc)

    @property
    def outcome(self):
        """The sub-record belonging to the current status, or None."""
        if self.status is None:
            return None
        return getattr(self, OUTCOME_RELATIONSHIPS[ClientStatus(self.status)])


OUTCOME_RELATIONSHIPS = {
    ClientStatus.RECRUITED: "recruited",
    ClientStatus.FARTHER: "further",
    ClientStatus.EMPLOYED: "self_employed",
    ClientStatus.SEARCHING: "searching",
}
