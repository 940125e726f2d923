import streamlit as st

import auth
import ui
from services import catalog_service
from services.errors import ValidationError
from use_cases import project_flow

STATUS_LABELS = {
    "new": "📬 Received",
    "contacted": "💬 In discussion",
    "proposal": "📝 Proposal sent",
    "won": "🚀 In production",
    "lost": "📁 Closed",
}


def render_client_portal(navigate, user):
    st.title(f"Welcome back, {user.name}")

    leads = auth.get_lead_repo().list_leads_for_client(user.email, user.id)
    if not leads:
        ui.render_empty_state("No projects yet", "Tell us what you are planning and it will show up here.", key="portal_empty")
        st.button("Start a project", key="portal_cta", on_click=navigate, args=("start-project",), type="primary")
        return

    for lead in leads:
        service = catalog_service.get_service(lead["service"])
        plan = catalog_service.get_plan(lead["plan"])
        with st.container(border=True):
            c1, c2 = st.columns([3, 1])
            c1.markdown(f"**{service.icon} {service.name}**" + (f" · {plan.name}" if plan else ""))
            c1.caption(f"Inquiry #{lead['id']} · {lead['created_at'][:10]}")
            c2.markdown(STATUS_LABELS.get(lead["status"], lead["status"]))
            if plan is not None and plan.is_priced and lead["status"] not in ("won", "lost"):
                try:
                    link = project_flow.plan_payment_link(plan.id)
                except ValidationError:
                    link = None
                if link is not None:
                    st.link_button(f"💳 Pay {plan.currency} {plan.price:,.0f}", link.payment_url)

    st.button("Start another project", key="portal_new", on_click=navigate, args=("start-project",))
