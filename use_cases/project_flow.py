"""Start-project inquiries: validation, storage, notification (application layer)."""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

import auth
import telegram_utils
from infrastructure.repositories.sqlite_audit_repository import AuditAction
from infrastructure.repositories.sqlite_lead_repository import LEAD_STATUSES
from services import catalog_service, payment_service
from use_cases.session_models import User

log = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MAX_MESSAGE_LENGTH = 5000


@dataclass(frozen=True)
class ProjectRequest:
    full_name: str
    email: str
    service: str
    message: str
    company: str = ""
    phone: str = ""
    plan: Optional[str] = None
    budget: str = ""


def validate_project_request(request: ProjectRequest) -> List[str]:
    errors = []
    if not request.full_name.strip():
        errors.append("Please tell us your name.")
    if not EMAIL_RE.match(request.email.strip()):
        errors.append("Please enter a valid email address.")
    if not request.service:
        errors.append("Pick the service you are interested in.")
    if not request.message.strip():
        errors.append("Describe your project in a few words.")
    elif len(request.message) > MAX_MESSAGE_LENGTH:
        errors.append(f"Project description is limited to {MAX_MESSAGE_LENGTH} characters.")
    if request.plan and catalog_service.get_plan(request.plan) is None:
        errors.append("The selected plan no longer exists.")
    return errors


def submit_project_request(request: ProjectRequest, user: Optional[User] = None) -> int:
    """Store a validated inquiry and notify the studio. Returns the new lead id."""
    errors = validate_project_request(request)
    if errors:
        raise ValueError("; ".join(errors))

    service_id = catalog_service.map_service_id(request.service)
    now_iso = datetime.utcnow().isoformat()
    lead_id = auth.get_lead_repo().create_lead(
        full_name=request.full_name.strip(),
        email=request.email.strip().lower(),
        service=service_id,
        message=request.message.strip(),
        created_at=now_iso,
        company=request.company.strip() or None,
        phone=request.phone.strip() or None,
        plan=request.plan or None,
        budget=request.budget.strip() or None,
        user_id=user.id if user else None,
    )
    log.info(f"New inquiry #{lead_id} for service '{service_id}'")

    auth.get_audit_repo().log_action(
        AuditAction.LEAD_CREATE,
        target_type="lead",
        target_id=str(lead_id),
        actor_user_id=user.id if user else None,
        actor_role=user.role if user else None,
        metadata={"service": service_id, "plan": request.plan},
    )
    _notify_studio(auth.get_lead_repo().get_lead(lead_id))
    return lead_id


def _notify_studio(lead) -> None:
    token = auth.get_secret("TG_BOT_TOKEN") or auth.get_secret("TELEGRAM_TOKEN")
    chat_id = auth.get_secret("TG_CHAT_ID") or auth.get_secret("TELEGRAM_CHAT_ID")
    if not token or not chat_id or lead is None:
        return
    success, msg = telegram_utils.send_telegram_message(token, chat_id, telegram_utils.format_lead_message(lead))
    if not success:
        log.warning(f"⚠️ Inquiry notification not delivered: {msg}")


def update_lead_status(lead_id: int, status: str, actor: Optional[User]) -> bool:
    if status not in LEAD_STATUSES:
        raise ValueError(f"Unknown lead status: {status}")

    repo = auth.get_lead_repo()
    lead = repo.get_lead(lead_id)
    if lead is None:
        return False
    updated = repo.update_status(lead_id, status, datetime.utcnow().isoformat())
    if updated:
        auth.get_audit_repo().log_action(
            AuditAction.LEAD_STATUS_CHANGE,
            target_type="lead",
            target_id=str(lead_id),
            actor_user_id=actor.id if actor else None,
            actor_role=actor.role if actor else None,
            metadata={"old_status": lead["status"], "new_status": status},
        )
    return updated


def plan_payment_link(plan_id: Optional[str], site_url: Optional[str] = None) -> Optional[payment_service.PaymentLink]:
    """PayPal checkout link for a priced plan, or None when the plan is quote-only."""
    plan = catalog_service.get_plan(plan_id)
    if plan is None or not plan.is_priced:
        return None
    base = (site_url or auth.get_secret("SITE_URL") or "").rstrip("/")
    return payment_service.create_payment_link(
        {
            "amount": f"{plan.price:.2f}",
            "currency": plan.currency,
            "description": f"9LMNTS {plan.name} plan",
            "returnUrl": f"{base}/?payment=success&plan={plan.id}" if base else None,
            "cancelUrl": f"{base}/?payment=cancelled&plan={plan.id}" if base else None,
        },
        business_email=auth.get_secret("PAYPAL_BUSINESS_EMAIL") or payment_service.DEFAULT_BUSINESS_EMAIL,
    )


def inquiry_payment_link(lead_id: int, plan_id: Optional[str], user: Optional[User] = None) -> Optional[payment_service.PaymentLink]:
    """Checkout link offered right after an inquiry; the offer is audited against the lead."""
    link = plan_payment_link(plan_id)
    if link is not None:
        auth.get_audit_repo().log_action(
            AuditAction.PAYMENT_LINK,
            target_type="lead",
            target_id=str(lead_id),
            actor_user_id=user.id if user else None,
            actor_role=user.role if user else None,
            metadata={"plan": plan_id, "amount": link.amount, "currency": link.currency},
        )
    return link
