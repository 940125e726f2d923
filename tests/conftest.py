import itertools
from types import SimpleNamespace

import pytest
import streamlit as st

import auth
from infrastructure.identity import supabase_auth_client


class FakeSessionState(dict):
    """Attribute-style dict standing in for st.session_state outside `streamlit run`."""

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __setattr__(self, name, value):
        self[name] = value

    def __delattr__(self, name):
        del self[name]


class FakeGoTrue:
    """In-memory stand-in for supabase-py's auth client: subscriptions and event fan-out."""

    def __init__(self):
        self.subscribers = {}
        self._ids = itertools.count(1)

    def on_auth_state_change(self, callback):
        sub_id = next(self._ids)
        self.subscribers[sub_id] = callback
        return SimpleNamespace(id=sub_id, unsubscribe=lambda: self.subscribers.pop(sub_id, None))

    def emit(self, event, session=None):
        for callback in list(self.subscribers.values()):
            callback(event, session)

    def sign_out(self):
        self.emit("SIGNED_OUT")


@pytest.fixture
def session_state(monkeypatch):
    state = FakeSessionState()
    monkeypatch.setattr(st, "session_state", state)
    return state


@pytest.fixture
def gotrue(monkeypatch):
    """Makes every SupabaseAuthClient talk to one FakeGoTrue."""
    provider = FakeGoTrue()
    monkeypatch.setattr(supabase_auth_client, "create_client", lambda url, key: SimpleNamespace(auth=provider))
    return provider


@pytest.fixture
def site_db(tmp_path, monkeypatch):
    """Points the site repositories at a fresh database file."""
    db_file = str(tmp_path / "site.db")
    monkeypatch.setattr(auth, "SITE_DB", db_file)
    auth.init_site_db()
    return db_file
