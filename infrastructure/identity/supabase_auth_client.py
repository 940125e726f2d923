import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

from supabase import AuthError, create_client

log = logging.getLogger(__name__)


class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


class AuthApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthConfigurationError(Exception):
    pass


def _as_dict(model) -> Dict[str, Any]:
    if model is None:
        return {}
    if hasattr(model, "model_dump"):
        return model.model_dump()
    return dict(model)


@dataclass(frozen=True)
class AuthSession:
    access_token: str
    refresh_token: Optional[str]
    expires_at: Optional[int]
    user: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_provider(cls, session) -> "AuthSession":
        return cls(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=session.expires_at,
            user=_as_dict(session.user),
        )


AuthCallback = Callable[[AuthEvent, Optional[AuthSession]], None]


def _provider_error(e: AuthError) -> AuthApiError:
    return AuthApiError(e.message, status_code=getattr(e, "status", None))


class SupabaseAuthClient:
    """Thin adapter over supabase-py's auth client.

    Provider sessions and users come back as `AuthSession` and plain dicts,
    provider errors as `AuthApiError`, and only the events in `AuthEvent`
    reach subscribers.
    """

    def __init__(self, url: str, anon_key: str):
        if not url or not anon_key:
            raise AuthConfigurationError("SUPABASE_URL and SUPABASE_ANON_KEY must be configured.")
        self.auth = create_client(url, anon_key).auth

    def on_auth_state_change(self, callback: AuthCallback):
        """Subscribe to sign-in/out and refresh events; returns the provider's subscription."""

        def relay(event, session):
            try:
                auth_event = AuthEvent(event)
            except ValueError:
                log.debug(f"Ignoring auth event {event}")
                return
            callback(auth_event, AuthSession.from_provider(session) if session is not None else None)

        return self.auth.on_auth_state_change(relay)

    def get_session(self) -> Optional[AuthSession]:
        """Returns the current session; the provider refreshes an expired one first."""
        try:
            session = self.auth.get_session()
        except AuthError as e:
            raise _provider_error(e) from e
        return AuthSession.from_provider(session) if session is not None else None

    def get_user(self, access_token: Optional[str] = None) -> Optional[Dict[str, Any]]:
        try:
            response = self.auth.get_user(access_token)
        except AuthError as e:
            raise _provider_error(e) from e
        if response is None or response.user is None:
            return None
        return _as_dict(response.user)

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        try:
            response = self.auth.sign_in_with_password({"email": email, "password": password})
        except AuthError as e:
            raise _provider_error(e) from e
        session = AuthSession.from_provider(response.session)
        log.info(f"✅ Signed in as {session.user.get('id', 'unknown user')}")
        return session

    def sign_up(self, email: str, password: str, metadata: Optional[Dict[str, Any]] = None) -> Optional[AuthSession]:
        """Registers a user. Returns a session only when the project auto-confirms e-mails."""
        try:
            response = self.auth.sign_up({
                "email": email,
                "password": password,
                "options": {"data": metadata or {}},
            })
        except AuthError as e:
            raise _provider_error(e) from e
        if response.session is None:
            return None
        return AuthSession.from_provider(response.session)

    def sign_out(self) -> None:
        try:
            self.auth.sign_out()
        except AuthError as e:
            # The provider drops the local session before the remote call; the token just expires.
            log.warning(f"⚠️ Remote sign-out failed: {e.message}")
