"""
Test configuration and fixtures for the Closet API.
"""
import os

# Configure before the application is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["USE_CLOUDINARY"] = "false"
os.environ["REDIS_URL"] = ""
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from closet.main import app
from closet.database import Base, SessionLocal, engine
from closet.utils.cache import clear_all_caches

PASSWORD = "wardrobe123"


@pytest.fixture(autouse=True)
def reset_database():
    """Give every test an empty database and cold caches."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    clear_all_caches()
    yield
    clear_all_caches()


@pytest.fixture
def client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def register(client):
    """Sign up and log in a user, returning auth headers."""
    def _register(email="ana@example.com", username=None, password=PASSWORD):
        payload = {"email": email, "password": password}
        if username:
            payload["username"] = username
        response = client.post("/auth/signup", json=payload)
        assert response.status_code == 201, response.text
        login = client.post("/auth/login", data={"username": email, "password": password})
        assert login.status_code == 200, login.text
        return {"Authorization": f"Bearer {login.json()['access_token']}"}
    return _register


@pytest.fixture
def auth_headers(register):
    return register()


@pytest.fixture
def make_item(client, auth_headers):
    """Create a clothing item for the default user and return its JSON."""
    def _make_item(name="Tee", color="#FF0000", type="shirt", headers=None, image=None):
        payload = {"name": name, "color": color, "type": type}
        if image:
            payload["image"] = image
        response = client.post("/wardrobe", json=payload, headers=headers or auth_headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _make_item


@pytest.fixture
def make_outfit(client, auth_headers):
    """Create an outfit from item ids and return its JSON."""
    def _make_outfit(item_ids, name="Look", headers=None):
        response = client.post(
            "/outfits", json={"name": name, "item_ids": item_ids}, headers=headers or auth_headers
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _make_outfit
