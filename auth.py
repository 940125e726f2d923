import logging
import os
from typing import Optional, Tuple

import streamlit as st
from streamlit.errors import StreamlitAPIException

from infrastructure.identity.supabase_auth_client import (
    AuthApiError,
    AuthConfigurationError,
    SupabaseAuthClient,
)
from infrastructure.repositories.sqlite_audit_repository import AuditAction, SQLiteAuditRepository
from infrastructure.repositories.sqlite_lead_repository import SQLiteLeadRepository
from use_cases.session_models import DEFAULT_ROLE, User, user_from_provider

log = logging.getLogger(__name__)


class UserAlreadyExistsError(Exception):
    pass


class InvalidCredentialsError(Exception):
    pass


SITE_DB = os.getenv("SITE_DB", "site.db")
MIN_PASSWORD_LENGTH = 8


def get_secret(key):
    try:
        value = st.secrets.get(key)
    except (FileNotFoundError, StreamlitAPIException):
        value = None
    return value or os.getenv(key)


_audit_repo = None
_lead_repo = None


def get_audit_repo() -> SQLiteAuditRepository:
    global _audit_repo
    if _audit_repo is None or _audit_repo.db_path != SITE_DB:
        _audit_repo = SQLiteAuditRepository(SITE_DB)
    return _audit_repo


def get_lead_repo() -> SQLiteLeadRepository:
    global _lead_repo
    if _lead_repo is None or _lead_repo.db_path != SITE_DB:
        _lead_repo = SQLiteLeadRepository(SITE_DB)
    return _lead_repo


def init_site_db():
    get_lead_repo().init_db()
    get_audit_repo().init_db()


def create_auth_client() -> SupabaseAuthClient:
    """Builds a provider client; raises AuthConfigurationError when Supabase is not configured."""
    return SupabaseAuthClient(get_secret("SUPABASE_URL"), get_secret("SUPABASE_ANON_KEY"))


def get_auth_client() -> SupabaseAuthClient:
    """One provider client per browser session, kept in Streamlit session state."""
    client = st.session_state.get("auth_client")
    if client is None:
        client = create_auth_client()
        st.session_state.auth_client = client
    return client


def sign_in(email: str, password: str) -> Tuple[User, str]:
    email = (email or "").strip().lower()
    if not email or not password:
        raise InvalidCredentialsError("Enter your email and password.")

    try:
        session = get_auth_client().sign_in_with_password(email, password)
    except AuthConfigurationError:
        log.error("Sign-in attempted but the auth provider is not configured.")
        raise InvalidCredentialsError("Sign-in is temporarily unavailable.")
    except AuthApiError as e:
        get_audit_repo().log_action(
            AuditAction.LOGIN_FAIL,
            target_type="auth",
            metadata={"reason": e.message},
            result="deny",
        )
        if e.status_code in (400, 401, 422):
            raise InvalidCredentialsError("Invalid email or password.")
        raise InvalidCredentialsError("Sign-in is temporarily unavailable.")

    user = user_from_provider(session.user) if session.user.get("id") else None
    if user is None:
        user_data = get_auth_client().get_user(session.access_token)
        if not user_data:
            raise InvalidCredentialsError("Could not load your account.")
        user = user_from_provider(user_data)

    get_audit_repo().log_action(
        AuditAction.LOGIN_SUCCESS,
        target_type="auth",
        actor_user_id=user.id,
        actor_role=user.role,
    )
    return user, session.access_token


def sign_up(full_name: str, email: str, password: str) -> Optional[Tuple[User, str]]:
    """Registers a visitor. Returns (user, token) when the provider signs them in right away."""
    email = (email or "").strip().lower()
    try:
        session = get_auth_client().sign_up(
            email,
            password,
            metadata={"name": full_name.strip(), "role": DEFAULT_ROLE},
        )
    except AuthConfigurationError:
        log.error("Sign-up attempted but the auth provider is not configured.")
        raise AuthApiError("Sign-up is temporarily unavailable.")
    except AuthApiError as e:
        if "already" in e.message.lower():
            raise UserAlreadyExistsError("An account with this email already exists.")
        raise

    get_audit_repo().log_action(
        AuditAction.SIGNUP,
        target_type="auth",
        metadata={"role": DEFAULT_ROLE},
    )
    if session is None or not session.user.get("id"):
        return None
    return user_from_provider(session.user), session.access_token


def sign_out(user: Optional[User] = None):
    client = st.session_state.get("auth_client")
    if client is not None:
        client.sign_out()
    get_audit_repo().log_action(
        AuditAction.LOGOUT,
        target_type="auth",
        actor_user_id=user.id if user else None,
        actor_role=user.role if user else None,
    )
