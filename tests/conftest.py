"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from roombnb import models  # noqa: F401
from roombnb.api.dependencies import get_image_store
from roombnb.database import Base, get_db
from roombnb.main import app
from roombnb.services.image_store import ImageStoreError, UploadedImage


class AuthHeaders(dict):
    """Dict subclass that also stores the account id and token."""

    def __init__(self, *args, account_id: int | None = None, token: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.account_id = account_id
        self.token = token


class FakeImageStore:
    """In-memory stand-in for the image host."""

    def __init__(self):
        self.assets: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_deletes = False
        self._counter = 0

    def folder(self, *parts) -> str:
        return "/".join(["airbnb", *(str(part) for part in parts)])

    async def upload(self, content, filename, folder, asset_id=None):
        if asset_id is None:
            self._counter += 1
            asset_id = f"{folder}/photo{self._counter}"
        self.assets[asset_id] = content
        return UploadedImage(url=f"https://images.test/{asset_id}.jpg", asset_id=asset_id)

    async def delete(self, asset_id):
        if self.fail_deletes:
            raise ImageStoreError("image host unavailable")
        self.assets.pop(asset_id, None)
        self.deleted.append(asset_id)


# Use test database - PostgreSQL when DATABASE_URL is set, SQLite otherwise
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").rstrip("/") + "_test"
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def image_store():
    """Fake image host shared by the app and the test."""
    return FakeImageStore()


@pytest.fixture(scope="function")
def client(db, image_store):
    """Create a test client with database and image host overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_store] = lambda: image_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def signup(client, email, username, password="testpass123"):
    response = client.post(
        "/user/signup",
        json={
            "email": email,
            "username": username,
            "password": password,
            "confirmPassword": password,
            "name": username.title(),
            "description": f"I am {username}",
        },
    )
    assert response.status_code == 200
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        account_id=data["id"],
        token=data["token"],
    )


@pytest.fixture
def auth_headers(client):
    """Create an account and return its auth headers."""
    return signup(client, "host@example.com", "host")


@pytest.fixture
def other_headers(client):
    """Create a second, unrelated account."""
    return signup(client, "guest@example.com", "guest")


@pytest.fixture
def make_room(client):
    """Publish a room for the given account and return the response body."""

    def _make_room(headers, **overrides):
        payload = {
            "title": "Cosy flat",
            "description": "Two rooms near the station",
            "price": 80,
            "location": {"lat": 48.86, "lng": 2.35},
        }
        payload.update(overrides)
        response = client.post("/room/publish", headers=headers, json=payload)
        assert response.status_code == 200, response.text
        return response.json()

    return _make_room
