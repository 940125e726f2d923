import logging

import streamlit as st

from services import catalog_service
from services.errors import ValidationError
from use_cases import project_flow

log = logging.getLogger(__name__)


def _render_payment_link(lead_id, plan, user):
    try:
        link = project_flow.inquiry_payment_link(lead_id, plan.id, user)
    except ValidationError as e:
        log.error(f"Payment link for plan {plan.id} rejected: {e.message}")
        return
    if link is not None:
        st.link_button(f"💳 Pay {plan.currency} {plan.price:,.0f} with PayPal", link.payment_url, type="primary")
        st.caption("You can also pay later from your client portal.")


def render_start_project(navigate, user=None, selected_plan=None):
    st.title("Start a project")
    plan = catalog_service.get_plan(selected_plan)
    if plan is not None:
        st.info(f"Selected plan: **{plan.name}**. {plan.tagline}")
    else:
        st.button("Compare plans first", key="start_pricing", on_click=navigate, args=("pricing",))

    services = catalog_service.SERVICES
    default_service = catalog_service.map_service_id(plan.service_id) if plan else "web"
    service_ids = [s.id for s in services]

    with st.form("start_project_form", clear_on_submit=False):
        c1, c2 = st.columns(2)
        full_name = c1.text_input("Full name", value=user.name if user else "")
        email = c2.text_input("Email", value=user.email if user else "")
        company = c1.text_input("Company (optional)")
        phone = c2.text_input("Phone (optional)")
        service = c1.selectbox(
            "Service",
            service_ids,
            index=service_ids.index(default_service),
            format_func=lambda sid: catalog_service.get_service(sid).name,
        )
        budget = c2.selectbox("Budget", ["", "< $1k", "$1k – $5k", "$5k – $15k", "$15k+"])
        message = st.text_area("Tell us about your project", height=160)
        submitted = st.form_submit_button("Send inquiry", type="primary")

    if not submitted:
        return

    request = project_flow.ProjectRequest(
        full_name=full_name,
        email=email,
        service=service,
        message=message,
        company=company,
        phone=phone,
        plan=plan.id if plan else None,
        budget=budget,
    )
    errors = project_flow.validate_project_request(request)
    if errors:
        for error in errors:
            st.error(error)
        return

    lead_id = project_flow.submit_project_request(request, user)
    st.success(f"Thanks, {request.full_name.split()[0]}! Inquiry #{lead_id} is in. We reply within one business day.")
    if plan is not None and plan.is_priced:
        _render_payment_link(lead_id, plan, user)
