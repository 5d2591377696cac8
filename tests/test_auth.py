"""Tests for bearer tokens backed by server-side sessions and the login callback."""

from datetime import datetime, timedelta
from urllib.parse import parse_qs, urlparse

import pytest

from vroommart.auth import service as auth_service
from vroommart.auth.models import UserSession
from vroommart.core.exceptions import AuthenticationError


def _token_for(db_session, user_id):
    session = auth_service.create_session(db_session, user_id)
    token = auth_service.create_access_token(user_id, session.sid, timedelta(minutes=5))
    return session, token


def test_token_resolves_to_user_and_session(db_session, alice):
    session, token = _token_for(db_session, "alice")

    token_data = auth_service.verify_token(db_session, token)

    assert token_data.user_id == "alice"
    assert token_data.session_id == session.sid


def test_deleted_session_revokes_token(db_session, alice):
    session, token = _token_for(db_session, "alice")
    auth_service.delete_session(db_session, session.sid)

    with pytest.raises(AuthenticationError):
        auth_service.verify_token(db_session, token)


def test_expired_session_is_rejected_and_pruned(db_session, alice):
    session, token = _token_for(db_session, "alice")
    session.expire = datetime(2000, 1, 1)
    db_session.commit()

    with pytest.raises(AuthenticationError):
        auth_service.verify_token(db_session, token)

    assert auth_service.prune_expired_sessions(db_session) == 1
    assert db_session.query(UserSession).count() == 0


def test_tampered_token_is_rejected(db_session, alice):
    _, token = _token_for(db_session, "alice")

    with pytest.raises(AuthenticationError):
        auth_service.verify_token(db_session, token + "x")


def test_claims_mapping_requires_subject():
    user = auth_service.user_from_claims(
        {"sub": "42", "email": "x@example.com", "given_name": "Ada", "family_name": "L", "picture": "http://img"}
    )
    assert (user.id, user.first_name, user.last_name, user.profile_image_url) == ("42", "Ada", "L", "http://img")

    with pytest.raises(AuthenticationError):
        auth_service.user_from_claims({"email": "x@example.com"})


def test_api_bearer_token_and_logout(client, db_session, alice):
    _, token = _token_for(db_session, "alice")
    headers = {"Authorization": f"Bearer {token}"}

    response = client.get("/api/auth/user", headers=headers)
    assert response.status_code == 200
    assert response.json()["id"] == "alice"
    assert "X-Request-ID" in response.headers

    assert client.post("/api/auth/logout", headers=headers).status_code == 204
    assert client.get("/api/auth/user", headers=headers).status_code == 401


def test_api_missing_token_is_401(client):
    response = client.get("/api/auth/user")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_FAILED"


def test_api_callback_upserts_user_and_redirects_with_token(client, db_session, mocker):
    oidc_client = mocker.MagicMock()
    oidc_client.authorize_access_token = mocker.AsyncMock(
        return_value={"userinfo": {"sub": "oidc-7", "email": "seven@example.com", "first_name": "Seven"}}
    )
    mocker.patch.object(auth_service, "get_oidc_client", return_value=oidc_client)

    response = client.get("/api/auth/callback", follow_redirects=False)

    assert response.status_code == 302
    token = parse_qs(urlparse(response.headers["location"]).query)["token"][0]
    me = client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert me.json()["email"] == "seven@example.com"
    assert db_session.query(UserSession).filter(UserSession.user_id == "oidc-7").count() == 1


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
