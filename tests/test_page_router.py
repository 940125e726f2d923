import pytest

from use_cases.page_router import KNOWN_PAGES, PageRoute, select_view
from use_cases.session_models import User

ADMIN = User(id="1", email="a@9lmnts.com", name="Admin", role="admin")
SUPER_ADMIN = User(id="2", email="s@9lmnts.com", name="Root", role="super_admin")
CLIENT = User(id="3", email="c@example.com", name="Client", role="user")


@pytest.mark.parametrize("page", ["home", "admin", "crm", "client-portal", "nope"])
def test_loading_always_shows_interstitial(page) -> None:
    decision = select_view(page, True, ADMIN)
    assert decision.view == PageRoute.LOADING
    assert decision.denied is False


@pytest.mark.parametrize("page", ["home", "services", "pricing", "about", "portfolio", "start-project", "login", "signup"])
def test_public_pages_render_for_anyone(page) -> None:
    decision = select_view(page, False, None)
    assert decision.view == PageRoute(page)
    assert decision.redirect_to is None


def test_unknown_page_falls_back_to_home() -> None:
    decision = select_view("does-not-exist", False, CLIENT)
    assert decision.view == PageRoute.HOME
    assert decision.denied is False


def test_loading_is_not_a_navigable_page() -> None:
    assert "loading" not in KNOWN_PAGES
    assert select_view("loading", False, None).view == PageRoute.HOME


@pytest.mark.parametrize("page", ["admin", "crm"])
@pytest.mark.parametrize("user", [None, CLIENT])
def test_admin_pages_redirect_home_without_admin_role(page, user) -> None:
    decision = select_view(page, False, user)
    assert decision.view == PageRoute.HOME
    assert decision.redirect_to == "home"
    assert decision.denied_reason == "insufficient_rights"


@pytest.mark.parametrize("page", ["admin", "crm"])
@pytest.mark.parametrize("user", [ADMIN, SUPER_ADMIN])
def test_admin_pages_render_for_admin_roles(page, user) -> None:
    decision = select_view(page, False, user)
    assert decision.view == PageRoute(page)
    assert decision.denied is False


def test_client_portal_requires_login() -> None:
    decision = select_view("client-portal", False, None)
    assert decision.view == PageRoute.LOGIN
    assert decision.redirect_to == "login"
    assert decision.denied_reason == "auth_required"

    assert select_view("client-portal", False, CLIENT).view == PageRoute.CLIENT_PORTAL
