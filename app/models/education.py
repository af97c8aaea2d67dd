from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from app.database import Base


class Education(Base):
    """Program a client attended. Reference data, seeded by app.scripts.seed_educations."""

    __tablename__ = "educations"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)

    clients = relationship("Client", back_populates="education")
