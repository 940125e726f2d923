"""Page-name routing for the site shell (application layer)."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from use_cases import rbac_policy
from use_cases.session_models import User


class PageRoute(str, Enum):
    LOADING = "loading"
    HOME = "home"
    SERVICES = "services"
    PRICING = "pricing"
    ABOUT = "about"
    PORTFOLIO = "portfolio"
    START_PROJECT = "start-project"
    ADMIN = "admin"
    CRM = "crm"
    CLIENT_PORTAL = "client-portal"
    LOGIN = "login"
    SIGNUP = "signup"


KNOWN_PAGES = tuple(route.value for route in PageRoute if route is not PageRoute.LOADING)


@dataclass(frozen=True)
class RouteDecision:
    view: PageRoute
    redirect_to: Optional[str] = None
    denied_reason: str = ""

    @property
    def denied(self) -> bool:
        return self.redirect_to is not None


def select_view(current_page: str, loading: bool, user: Optional[User]) -> RouteDecision:
    """Map the page name to the view to render.

    Gated pages that the user may not see render their fallback view and carry
    the page name the caller must switch to (`redirect_to`).
    """
    if loading:
        return RouteDecision(PageRoute.LOADING)

    if current_page not in KNOWN_PAGES:
        return RouteDecision(PageRoute.HOME)

    decision = rbac_policy.check_access(user, current_page)
    if not decision.allowed:
        return RouteDecision(
            PageRoute(decision.redirect_to),
            redirect_to=decision.redirect_to,
            denied_reason=decision.reason,
        )

    return RouteDecision(PageRoute(current_page))
