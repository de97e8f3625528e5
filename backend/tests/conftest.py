import os

# Keep the app's own engine off disk; every test uses test_engine below
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from places_api.database import build_engine, create_tables, get_session  # noqa: E402
from places_api.main import app  # noqa: E402

TEST_DATABASE_URL = "sqlite:///:memory:"

# ============================================================================
# Test Database Setup with StaticPool
# ============================================================================
# 1. Use sqlite:///:memory: with StaticPool so ALL sessions share same DB
# 2. build_engine adds check_same_thread=False for TestClient/threaded access
# 3. create_tables registers the models before create_all()
# 4. App dependency overridden to use test_engine (see client_fixture)
# 5. Tables created and dropped per test, not relying on app startup
test_engine = build_engine(TEST_DATABASE_URL, poolclass=StaticPool, echo=False)


def override_get_session():
    """Override session to use test engine"""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="session", scope="function")
def session_fixture():
    """Provide a test database session on freshly created tables"""
    create_tables(test_engine)

    with Session(test_engine) as session:
        yield session

    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Provide a test client with overridden database session

    Override MUST be set BEFORE TestClient() and stay in place
    for the entire duration.
    """
    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def user(client: TestClient):
    """Sign up a user through the API"""
    response = client.post(
        "/api/users/signup",
        json={"username": "u1", "email": "a@x.com", "password": "secret123"},
    )
    assert response.status_code == 201
    return response.json()["user"]


@pytest.fixture
def place_payload(user):
    return {
        "title": "T",
        "description": "A tall building downtown",
        "coordinates": {"lat": 40.7484405, "lng": -73.9878584},
        "address": "20 W 34th St, New York, NY 10001",
        "creator": user["id"],
    }
