from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from supabase import AuthApiError as ProviderApiError

from infrastructure.identity.supabase_auth_client import (
    AuthApiError,
    AuthConfigurationError,
    AuthEvent,
    AuthSession,
    SupabaseAuthClient,
)

URL = "https://proj.supabase.co"
USER = {"id": "u-1", "email": "jane@example.com", "user_metadata": {"name": "Jane"}}


def _provider_session(access="jwt"):
    return SimpleNamespace(access_token=access, refresh_token="refresh", expires_at=1700000000, user=USER)


@pytest.fixture
def provider():
    with patch("infrastructure.identity.supabase_auth_client.create_client") as mock_create:
        auth = MagicMock()
        mock_create.return_value = SimpleNamespace(auth=auth)
        yield auth


@pytest.fixture
def client(provider):
    return SupabaseAuthClient(URL, "anon-key")


def test_missing_configuration_raises():
    with pytest.raises(AuthConfigurationError):
        SupabaseAuthClient("", "anon")
    with pytest.raises(AuthConfigurationError):
        SupabaseAuthClient(URL, None)


@patch("infrastructure.identity.supabase_auth_client.create_client")
def test_client_built_from_url_and_key(mock_create):
    SupabaseAuthClient(URL, "anon-key")
    mock_create.assert_called_once_with(URL, "anon-key")


def test_sign_in_converts_provider_session(provider, client):
    provider.sign_in_with_password.return_value = SimpleNamespace(session=_provider_session(), user=None)

    session = client.sign_in_with_password("jane@example.com", "secret123")

    assert session == AuthSession("jwt", "refresh", 1700000000, USER)
    provider.sign_in_with_password.assert_called_once_with({"email": "jane@example.com", "password": "secret123"})


def test_provider_error_is_mapped(provider, client):
    provider.sign_in_with_password.side_effect = ProviderApiError("Invalid login credentials", 400, "invalid_credentials")

    with pytest.raises(AuthApiError) as exc:
        client.sign_in_with_password("jane@example.com", "wrong")

    assert exc.value.status_code == 400
    assert exc.value.message == "Invalid login credentials"


def test_get_session_empty(provider, client):
    provider.get_session.return_value = None
    assert client.get_session() is None


def test_get_user_returns_plain_dict(provider, client):
    model = MagicMock()
    model.model_dump.return_value = USER
    provider.get_user.return_value = SimpleNamespace(user=model)

    assert client.get_user("jwt") == USER
    provider.get_user.assert_called_once_with("jwt")


def test_get_user_without_user(provider, client):
    provider.get_user.return_value = None
    assert client.get_user() is None


def test_sign_up_passes_metadata_and_handles_pending_confirmation(provider, client):
    provider.sign_up.return_value = SimpleNamespace(session=None, user=USER)

    assert client.sign_up("new@example.com", "secret123", {"name": "New"}) is None
    provider.sign_up.assert_called_once_with({
        "email": "new@example.com",
        "password": "secret123",
        "options": {"data": {"name": "New"}},
    })


def test_sign_out_swallows_remote_failure(provider, client):
    provider.sign_out.side_effect = ProviderApiError("boom", 500, None)
    client.sign_out()
    provider.sign_out.assert_called_once()


def test_only_known_events_reach_subscribers(gotrue):
    client = SupabaseAuthClient(URL, "anon-key")
    received = []
    client.on_auth_state_change(lambda event, session: received.append((event, session)))

    gotrue.emit("USER_UPDATED", _provider_session())
    gotrue.emit("SIGNED_IN", _provider_session("jwt-2"))
    gotrue.emit("SIGNED_OUT")

    assert received == [
        (AuthEvent.SIGNED_IN, AuthSession("jwt-2", "refresh", 1700000000, USER)),
        (AuthEvent.SIGNED_OUT, None),
    ]


def test_unsubscribe_releases_callback(gotrue):
    client = SupabaseAuthClient(URL, "anon-key")
    subscription = client.on_auth_state_change(lambda event, session: None)
    assert len(gotrue.subscribers) == 1
    subscription.unsubscribe()
    assert gotrue.subscribers == {}
