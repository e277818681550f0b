import pytest
from fastapi.testclient import TestClient

from dependencies import get_current_user, get_post_service
from fakes import InMemoryPostStore
from main import app
from models.user import User, UserProfile
from services.posts import PostService


@pytest.fixture
def store():
    """In-memory store with two known users"""
    return InMemoryPostStore(profiles={
        "alice": UserProfile(name="Alice", avatar="https://example.com/alice.png"),
        "bob": UserProfile(name="Bob", avatar=None),
    })


@pytest.fixture
def service(store):
    return PostService(store=store, users=store)


@pytest.fixture
def caller():
    """Mutable holder for the user id the API sees as authenticated"""
    return {"user_id": "alice"}


@pytest.fixture
def client(service, caller):
    """Test client authenticated as caller["user_id"], backed by the in-memory store"""
    app.dependency_overrides[get_post_service] = lambda: service
    app.dependency_overrides[get_current_user] = lambda: User(user_id=caller["user_id"])
    yield TestClient(app)
    app.dependency_overrides.clear()
