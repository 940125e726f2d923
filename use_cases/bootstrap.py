"""Startup orchestration: storage, session state, auth session bootstrap and listener."""

import logging
from dataclasses import dataclass
from typing import Literal, Tuple

import auth
from infrastructure.identity.supabase_auth_client import AuthConfigurationError
from use_cases import auth_flow
from utils import session_manager

log = logging.getLogger(__name__)

StartupStatus = Literal["CONTINUE", "STOP"]


@dataclass(frozen=True)
class StartupResult:
    """Result contract for startup/bootstrap orchestration."""

    status: StartupStatus
    planned_steps: Tuple[str, ...]


def run_startup() -> StartupResult:
    """Run startup bootstrap; the session check happens once per browser session."""
    executed_steps = []

    auth.init_site_db()
    executed_steps.append("init_site_db")

    session_manager.init_session_state()
    executed_steps.append("init_session_state")
    state = session_manager.st.session_state
    controller = session_manager.get_controller()

    try:
        client = auth.get_auth_client()
    except AuthConfigurationError as e:
        log.warning(f"⚠️ Auth provider not configured, running anonymous: {e}")
        state.auth_unavailable = True
        client = None
        session_manager.release_auth_listener()
        executed_steps.append("auth_unavailable")

    if not state.session_checked:
        user, token = auth_flow.bootstrap_session(client) if client is not None else (None, None)
        controller.finish_loading(user, token)
        state.session_checked = True
        executed_steps.append("bootstrap_session")

    if client is not None:
        session_manager.ensure_auth_listener(client)
        executed_steps.append("ensure_auth_listener")
        if session_manager.dispatch_auth_events():
            executed_steps.append("dispatch_auth_events")

    return StartupResult(status="CONTINUE", planned_steps=tuple(executed_steps))
