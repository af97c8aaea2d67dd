from dataclasses import dataclass, field
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.database import Base, get_db
from app.dependencies import get_current_user
from app.main import app
from app.models.user import UserRole
from app.repos.education_repo import seed_default_educations


@dataclass
class StubUser:
    id: str = "user-1"
    user_name: str = "admin"
    email: str = "admin@example.com"
    role: UserRole = UserRole.ADMIN
    avatar: str | None = None
    password_hash: str = "hashed-password"
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@pytest.fixture
def stub_user() -> StubUser:
    return StubUser()


@pytest.fixture
def client(stub_user: StubUser):
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: stub_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Real in-memory SQLite session with the default educations seeded."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    seed_default_educations(db)
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_client(db_session, stub_user: StubUser):
    """App wired to the SQLite session, with authentication stubbed out."""
    def _db_override():
        yield db_session

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: stub_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(db_session):
    """App wired to the SQLite session with real cookie authentication."""
    def _db_override():
        yield db_session

    app.dependency_overrides[get_db] = _db_override
    yield TestClient(app)
    app.dependency_overrides.clear()
