import logging
from typing import Optional

import streamlit as st

import auth
from use_cases.auth_flow import AuthStateListener
from use_cases.session_models import User
from use_cases.site_controller import SiteController

"""
SESSION STATE CONTRACT

Streamlit session keys owned by this module (one browser tab = one session).

site_controller: SiteController
    single owner of page/user/token/loading state
    default: SiteController() with loading=True
    owner: session_manager

auth_client: SupabaseAuthClient | None
    provider client holding the auth session for this tab
    default: absent until first use
    owner: auth

auth_listener: AuthStateListener | None
    active provider subscription feeding the controller inbox
    default: None
    owner: session_manager

session_checked: bool
    session bootstrap already ran for this tab
    default: False
    owner: bootstrap

auth_unavailable: bool
    provider is not configured or unreachable at bootstrap
    default: False
    owner: bootstrap
"""

log = logging.getLogger(__name__)


def init_session_state():
    if "site_controller" not in st.session_state:
        st.session_state.site_controller = SiteController()
    if "auth_listener" not in st.session_state:
        st.session_state.auth_listener = None
    if "session_checked" not in st.session_state:
        st.session_state.session_checked = False
    if "auth_unavailable" not in st.session_state:
        st.session_state.auth_unavailable = False


def get_controller() -> SiteController:
    init_session_state()
    return st.session_state.site_controller


def navigate(page: str, plan: Optional[str] = None):
    get_controller().navigate(page, plan)


def select_plan(plan_id: str):
    get_controller().select_plan(plan_id)


def ensure_auth_listener(client) -> AuthStateListener:
    """Subscribe the controller to provider events once per session."""
    listener = st.session_state.get("auth_listener")
    if listener is not None and listener.client is not client:
        release_auth_listener()
        listener = None
    if listener is None or not listener.active:
        listener = AuthStateListener(client, get_controller().post).start()
        st.session_state.auth_listener = listener
    return listener


def release_auth_listener():
    listener = st.session_state.get("auth_listener")
    if listener is not None:
        listener.stop()
    st.session_state.auth_listener = None


def dispatch_auth_events() -> int:
    client = st.session_state.get("auth_client")
    if client is None:
        return 0
    return get_controller().dispatch_pending(client)


def login_success(user: User, token: str):
    get_controller().login_success(user, token)


def logout():
    controller = get_controller()
    auth.sign_out(controller.state.user)
    # The provider's SIGNED_OUT message is already queued; apply it now so nothing renders as the old user.
    dispatch_auth_events()
    controller.logout()
