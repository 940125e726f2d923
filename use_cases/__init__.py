"""Application layer contracts for orchestrating high-level flows.

Only storage-free modules are re-exported here; `bootstrap` and `project_flow`
depend on `auth` and are imported by module path.
"""

from .auth_flow import AuthStateListener, apply_auth_event, bootstrap_session
from .page_router import KNOWN_PAGES, PageRoute, RouteDecision, select_view
from .rbac_policy import AccessDecision, check_access
from .session_models import ADMIN_ROLES, Role, SiteState, User, is_admin
from .site_controller import SiteController

__all__ = [
    "ADMIN_ROLES",
    "AccessDecision",
    "AuthStateListener",
    "KNOWN_PAGES",
    "PageRoute",
    "Role",
    "RouteDecision",
    "SiteController",
    "SiteState",
    "User",
    "apply_auth_event",
    "bootstrap_session",
    "check_access",
    "is_admin",
    "select_view",
]
