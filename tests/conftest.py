import mongomock
import pytest
from fastapi.testclient import TestClient

from geed_api.app.main import create_app
from geed_api.app.stores import DataStore
from geed_api.app.stores.memory_store import MemoryStore
from geed_api.app.stores.mongo_store import MongoStore

ADMIN = {"email": "admin@geed.com", "password": "admin123"}
USER = {"email": "john@example.com", "password": "password123"}


@pytest.fixture
def memory_data_store():
    """A store that finds no MongoDB and falls back to seeded memory."""
    return DataStore(connect=lambda: None)


@pytest.fixture
def mongo_db():
    return mongomock.MongoClient()["geed_test"]


@pytest.fixture(params=["memory", "mongodb"])
def backend(request):
    """An empty backend of each kind, for query-semantics tests."""
    if request.param == "memory":
        return MemoryStore()
    return MongoStore(mongomock.MongoClient()["geed_test"])


@pytest.fixture
def client(memory_data_store):
    app = create_app(memory_data_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client):
    """Return a function that logs in and builds the auth header."""

    def _login(credentials):
        response = client.post("/api/auth/login", json=credentials)
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login


@pytest.fixture
def admin_headers(login):
    return login(ADMIN)


@pytest.fixture
def user_headers(login):
    return login(USER)
