# tests/conftest.py
import pytest
from asgi_lifespan import LifespanManager
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from bloodbridge.client import AppController
from bloodbridge.core.events import ChangeFeed
from bloodbridge.deps import get_feed, get_repo
from bloodbridge.main import app
from bloodbridge.repos.inmemory import InMemoryRepo

@pytest.fixture
def anyio_backend():
    return "asyncio"

@pytest.fixture
def repo():
    return InMemoryRepo()

@pytest.fixture
def feed():
    return ChangeFeed(maxlen=100)

@pytest.fixture(autouse=True)
def _fresh_store(repo, feed):
    # every test gets an empty store and event feed
    app.dependency_overrides[get_repo] = lambda: repo
    app.dependency_overrides[get_feed] = lambda: feed
    yield
    app.dependency_overrides.clear()

@pytest.fixture
async def test_client():
    async with LifespanManager(app):
        transport = ASGITransport(app=app, raise_app_exceptions=True)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac

@pytest.fixture
def notices():
    return []

@pytest.fixture
def make_controller(tmp_path, notices):
    """Client controllers talking to the in-process app."""
    def _make(name: str = "session"):
        return AppController(
            "http://testserver",
            session_file=tmp_path / f"{name}.json",
            http=TestClient(app),
            notify=lambda level, message: notices.append((level, message)),
            timeout=None,
        )
    return _make

@pytest.fixture
def controller(make_controller):
    return make_controller()

@pytest.fixture
def donor_signup():
    return {
        "role": "donor",
        "email": "d1@x.com",
        "password": "secret123",
        "name": "Dana Donor",
        "blood_group": "B+",
        "age": 30,
        "phone_number": "555-0000",
    }

@pytest.fixture
def hospital_signup():
    return {
        "role": "hospital",
        "email": "h1@x.com",
        "password": "secret123",
        "name": "City General Hospital",
        "address": "123 Medical Drive",
        "blood_group": "O-",
        "quantity": 3,
        "urgency": "High",
    }
