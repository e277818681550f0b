from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from dependencies import get_post_service
from main import app


@pytest.fixture
def anonymous_client(service):
    """Client with the real identity dependency and the in-memory post service"""
    app.dependency_overrides[get_post_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


@patch("dependencies.auth")
def test_bearer_token_identifies_caller(mock_auth, anonymous_client):
    mock_auth.verify_id_token.return_value = {"uid": "alice", "email": "alice@example.com"}

    response = anonymous_client.post(
        "/api/posts", json={"text": "hello"}, headers={"Authorization": "Bearer good-token"}
    )

    assert response.status_code == 200
    assert response.json()["user"] == "alice"
    mock_auth.verify_id_token.assert_called_once_with(
        "good-token", check_revoked=True, clock_skew_seconds=10
    )


@patch("dependencies.auth")
def test_invalid_bearer_token(mock_auth, anonymous_client, store):
    mock_auth.verify_id_token.side_effect = ValueError("expired")

    response = anonymous_client.post(
        "/api/posts", json={"text": "hello"}, headers={"Authorization": "Bearer stale"}
    )

    assert response.status_code == 401
    assert store.posts == {}


@patch("dependencies.auth")
def test_session_cookie_identifies_caller(mock_auth, anonymous_client):
    mock_auth.verify_session_cookie.return_value = {"uid": "bob"}
    anonymous_client.cookies.set("session", "cookie-value")

    response = anonymous_client.post("/api/posts", json={"text": "hi"})

    assert response.status_code == 200
    assert response.json()["name"] == "Bob"
    mock_auth.verify_session_cookie.assert_called_once_with(
        session_cookie="cookie-value", check_revoked=True, clock_skew_seconds=10
    )


def test_missing_credentials(anonymous_client):
    response = anonymous_client.get("/api/posts")
    assert response.status_code == 401
