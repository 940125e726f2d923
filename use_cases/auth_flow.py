"""Authentication flow orchestration (application layer)."""

import logging
from typing import Callable, Optional, Tuple

from infrastructure.identity.supabase_auth_client import AuthEvent, AuthSession
from use_cases.session_models import HOME_PAGE, SiteState, User, user_from_provider

log = logging.getLogger(__name__)

AuthMessage = Tuple[AuthEvent, Optional[AuthSession]]


def _fetch_user(client) -> Optional[User]:
    user_data = client.get_user()
    if not user_data:
        return None
    return user_from_provider(user_data)


def bootstrap_session(client) -> Tuple[Optional[User], Optional[str]]:
    """Look for an existing provider session and validate it.

    Never raises: every failure degrades to an anonymous visitor.
    """
    try:
        session = client.get_session()
        if session is None:
            log.info("No existing session found")
            return None, None

        log.info("Found existing session, getting user details...")
        try:
            user = _fetch_user(client)
        except Exception as e:
            log.error(f"Session validation failed: {e}")
            return None, None

        if user is None:
            log.error("Session validation failed: provider returned no user")
            return None, None

        log.info(f"User session validated: {user.id} ({user.role})")
        return user, session.access_token
    except Exception as e:
        log.error(f"Session check error: {e}", exc_info=True)
        return None, None


def apply_auth_event(state: SiteState, event: AuthEvent, session: Optional[AuthSession], client) -> None:
    """Fold one provider event into the site state."""
    log.info(f"Auth state changed: {event.value}")

    if event == AuthEvent.SIGNED_IN and session is not None:
        try:
            user = _fetch_user(client)
        except Exception as e:
            log.error(f"Could not load user after sign-in: {e}")
            return
        if user is not None:
            state.user = user
            state.access_token = session.access_token
    elif event == AuthEvent.SIGNED_OUT:
        state.user = None
        state.access_token = None
        state.current_page = HOME_PAGE


class AuthStateListener:
    """Scoped subscription to provider auth events.

    Provider callbacks are turned into messages handed to `deliver`; the state
    owner applies them. Use as a context manager or call `start()`/`stop()`.
    """

    def __init__(self, client, deliver: Callable[[AuthEvent, Optional[AuthSession]], None]):
        self._client = client
        self._deliver = deliver
        self._subscription = None

    @property
    def client(self):
        return self._client

    @property
    def active(self) -> bool:
        return self._subscription is not None

    def start(self) -> "AuthStateListener":
        if self._subscription is None:
            self._subscription = self._client.on_auth_state_change(self._deliver)
        return self

    def stop(self) -> None:
        if self._subscription is not None:
            subscription, self._subscription = self._subscription, None
            subscription.unsubscribe()

    def __enter__(self) -> "AuthStateListener":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
