import os

# Keep app start-up away from any real database file
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from app.auth import get_identity_provider  # noqa: E402
from app.database import configure_sqlite, get_session  # noqa: E402
from app.main import app  # noqa: E402

TEST_DATABASE_URL = "sqlite:///:memory:"

# ============================================================================
# Test Database Setup with StaticPool
# ============================================================================
# 1. sqlite:///:memory: with StaticPool so ALL sessions share the same DB
# 2. check_same_thread=False required for TestClient/threaded access
# 3. configure_sqlite: foreign keys ON and Unicode lower(), as in production
# 4. Tables dropped and recreated per test: every test starts empty
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
configure_sqlite(test_engine)


def override_get_session():
    """Override session to use test engine"""
    with Session(test_engine) as session:
        yield session


class FakeIdentityProvider:
    """Stands in for the external auth provider: token -> identity."""

    def __init__(self):
        self.identities = {}

    def register(self, token: str, user_id: str, email: str = None):
        self.identities[token] = {"id": user_id, "email": email}

    def resolve(self, token: str):
        return self.identities.get(token)


@pytest.fixture(name="session", scope="function")
def session_fixture():
    """Provide a test database session on a freshly created schema"""
    import app.models  # noqa: F401  (register every table before create_all)

    SQLModel.metadata.drop_all(test_engine)
    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="identity")
def identity_fixture():
    return FakeIdentityProvider()


@pytest.fixture(name="client")
def client_fixture(session: Session, identity: FakeIdentityProvider):
    """Provide a test client with overridden database session and auth provider

    Overrides MUST be set BEFORE TestClient() and stay in place for the
    entire duration so the app never touches its own engine or Supabase.
    """
    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_identity_provider] = lambda: identity

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
