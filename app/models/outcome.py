"""Per-status outcome tables. Each row is keyed by the owning client's id."""

from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship

from app.database import Base


def _client_fk():
    return Column(String, ForeignKey("clients.id", ondelete="CASCADE"), primary_key=True)


class Recruited(Base):
    __tablename__ = "recruited"

    client_id = _client_fk()
    title = Column(String)
    company = Column(String)
    position = Column(String)
    start_year = Column(String)
    work_city = Column(String)

    client = relationship("Client", back_populates="recruited")


class Further(Base):
    __tablename__ = "further_education"

    client_id = _client_fk()
    school = Column(String)
    further_ed = Column(String)
    city = Column(String)

    client = relationship("Client", back_populates="further")


class SelfEmployed(Base):
    __tablename__ = "self_employed"

    client_id = _client_fk()
    self_employed = Column(String)

    client = relationship("Client", back_populates="self_employed")


class Searching(Base):
    __tablename__ = "searching"

    client_id = _client_fk()
    duration = Column(String)

    client = relationship("Client", back_populates="searching")


OUTCOME_MODELS = (Recruited, Further, SelfEmployed, Searching)
