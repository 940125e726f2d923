"""Centralized Role-Based Access Control logic for site pages."""

import logging
from dataclasses import dataclass
from typing import Optional

from use_cases.session_models import ADMIN_ROLES, User

log = logging.getLogger(__name__)

# Pages that need a specific role, and where an unauthorized visitor lands instead.
ROLE_GATES = {
    "admin": (ADMIN_ROLES, "home"),
    "crm": (ADMIN_ROLES, "home"),
}

# Pages that only need a signed-in user.
LOGIN_GATES = {
    "client-portal": "login",
}


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    redirect_to: Optional[str] = None
    reason: str = ""


def check_access(user: Optional[User], page: str) -> AccessDecision:
    """Evaluates whether `user` may see `page`. Pure, no side effects."""
    if page in ROLE_GATES:
        roles, fallback = ROLE_GATES[page]
        if user is not None and user.role in roles:
            return AccessDecision(allowed=True)
        return AccessDecision(allowed=False, redirect_to=fallback, reason="insufficient_rights")

    if page in LOGIN_GATES:
        if user is not None:
            return AccessDecision(allowed=True)
        return AccessDecision(allowed=False, redirect_to=LOGIN_GATES[page], reason="auth_required")

    return AccessDecision(allowed=True)


def record_denial(user: Optional[User], page: str, decision: AccessDecision) -> None:
    """Writes a denied page visit to the audit log."""
    import auth
    from infrastructure.repositories.sqlite_audit_repository import AuditAction

    log.info(f"Access to '{page}' denied ({decision.reason}), redirecting to '{decision.redirect_to}'")
    auth.get_audit_repo().log_action(
        AuditAction.RBAC_DENIED,
        target_type="page",
        target_id=page,
        actor_user_id=user.id if user else None,
        actor_role=user.role if user else None,
        metadata={"target_page": page, "reason": decision.reason},
        result="deny",
    )
