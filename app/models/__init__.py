from app.models.user import User, UserRole
from app.models.reset_token import ResetToken
from app.models.education import Education
from app.models.client import Client, ClientStatus
from app.models.outcome import Recruited, Further, SelfEmployed, Searching

__all__ = [
    "User",
    "UserRole",
    "ResetToken",
    "Education",
    "Client",
    "ClientStatus",
    "Recruited",
    "Further",
    "SelfEmployed",
    "Searching",
]
