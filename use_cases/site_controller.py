"""Single owner of the per-session site state.

All mutations go through the methods below; auth events arrive as messages in
the inbox and are applied in order by `dispatch_pending`.
"""

import logging
from collections import deque
from typing import Deque, Optional

from use_cases import auth_flow, page_router, rbac_policy
from use_cases.auth_flow import AuthMessage
from use_cases.session_models import HOME_PAGE, SiteState, User

log = logging.getLogger(__name__)

START_PROJECT_PAGE = "start-project"


class SiteController:
    def __init__(self, state: Optional[SiteState] = None):
        self.state = state or SiteState()
        self._inbox: Deque[AuthMessage] = deque()

    # --- Navigation ---

    def navigate(self, page: str, plan: Optional[str] = None) -> None:
        log.info(f"Navigating to: {page}" + (f" with plan: {plan}" if plan else ""))
        self.state.current_page = page
        if plan:
            self.state.selected_plan = plan

    def select_plan(self, plan_id: str) -> None:
        self.state.selected_plan = plan_id
        self.state.current_page = START_PROJECT_PAGE

    # --- Session ---

    def finish_loading(self, user: Optional[User], access_token: Optional[str]) -> None:
        self.state.user = user
        self.state.access_token = access_token if user is not None else None
        self.state.loading = False

    def login_success(self, user: User, access_token: str) -> None:
        self.state.user = user
        self.state.access_token = access_token
        self.state.current_page = HOME_PAGE

    def logout(self) -> None:
        self.state.user = None
        self.state.access_token = None
        self.state.current_page = HOME_PAGE

    # --- Auth messages ---

    def post(self, event, session) -> None:
        self._inbox.append((event, session))

    @property
    def pending(self) -> int:
        return len(self._inbox)

    def dispatch_pending(self, client) -> int:
        handled = 0
        while self._inbox:
            event, session = self._inbox.popleft()
            auth_flow.apply_auth_event(self.state, event, session, client)
            handled += 1
        return handled

    # --- Routing ---

    def resolve_view(self) -> page_router.RouteDecision:
        """Pick the view for the current page, switching pages when a gate redirects."""
        decision = page_router.select_view(self.state.current_page, self.state.loading, self.state.user)
        if decision.denied:
            denied_page = self.state.current_page
            self.state.current_page = decision.redirect_to
            rbac_policy.record_denial(
                self.state.user,
                denied_page,
                rbac_policy.AccessDecision(False, decision.redirect_to, decision.denied_reason),
            )
        return decision
