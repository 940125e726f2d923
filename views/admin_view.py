import json

import pandas as pd
import plotly.express as px
import streamlit as st

import auth
import ui
from infrastructure.repositories.sqlite_audit_repository import AuditAction
from infrastructure.repositories.sqlite_lead_repository import LEAD_STATUSES
from services import qr_service

AUDIT_COLUMNS = ["ID", "Time", "User", "Role", "Action", "Target", "Target ID", "Details", "Result"]
QR_FEATURES = ["check-in", "live-board", "photo-wall", "voting", "merch"]


def _render_kpis():
    counts = auth.get_lead_repo().count_by_status()
    total = sum(counts.values())
    closed = counts["won"] + counts["lost"]
    win_rate = (counts["won"] / closed * 100) if closed else 0

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("📥 Inquiries", f"{total}")
    c2.metric("🆕 New", f"{counts['new']}")
    c3.metric("🔄 In progress", f"{counts['contacted'] + counts['proposal']}")
    c4.metric("🏆 Win rate", f"{win_rate:.0f} %")


def _render_leads_chart():
    leads = auth.get_lead_repo().list_leads()
    if not leads:
        ui.render_empty_state("No inquiries yet", "They will show up here as soon as the form is used.", key="admin_empty")
        return

    df = pd.DataFrame(leads)
    df["day"] = pd.to_datetime(df["created_at"]).dt.date
    daily = df.groupby(["day", "status"]).size().reset_index(name="count")
    fig = px.bar(
        daily, x="day", y="count", color="status",
        category_orders={"status": list(LEAD_STATUSES)},
        title="Inquiries per day",
    )
    st.plotly_chart(ui.update_chart_layout(fig), use_container_width=True)


def _render_audit_log():
    actions = ["All"] + [a.value for a in AuditAction]
    action_filter = st.selectbox("Action", actions, key="audit_filter")
    rows = auth.get_audit_repo().get_logs(limit=200, action_filter=action_filter)
    df = pd.DataFrame(rows, columns=AUDIT_COLUMNS)
    ui.render_aggrid(df, height=360, pagination=True)


def _render_qr_generator(user):
    with st.form("qr_form"):
        c1, c2 = st.columns(2)
        event_id = c1.text_input("Event ID", placeholder="auto")
        event_type = c2.text_input("Event type", placeholder="conference, wedding, festival...")
        location = st.text_input("Event page URL", placeholder=qr_service.DEFAULT_LOCATION)
        features = st.multiselect("Features", QR_FEATURES)
        submitted = st.form_submit_button("Generate QR", type="primary")

    if not submitted:
        return

    default_location = auth.get_secret("QR_DEFAULT_LOCATION") or qr_service.DEFAULT_LOCATION
    result = qr_service.generate_qr_code(
        {"eventId": event_id, "eventType": event_type, "location": location, "features": features},
        default_location=default_location,
    )
    auth.get_audit_repo().log_action(
        AuditAction.QR_GENERATED,
        target_type="event",
        target_id=result["data"]["eventId"],
        actor_user_id=user.id if user else None,
        actor_role=user.role if user else None,
        metadata={"event_type": result["data"]["eventType"]},
    )
    c1, c2 = st.columns([1, 2])
    c1.image(result["qrCode"], width=200)
    c2.code(json.dumps(result["data"], indent=2), language="json")


def render_admin(navigate, user, logout):
    st.title("⚙️ Studio dashboard")
    st.caption(f"Signed in as {user.name} · {user.role}")

    _render_kpis()

    tab_leads, tab_audit, tab_qr = st.tabs(["📈 Inquiries", "🛡 Audit log", "🔳 Event QR"])
    with tab_leads:
        _render_leads_chart()
        st.button("Open CRM →", key="admin_crm", on_click=navigate, args=("crm",))
    with tab_audit:
        _render_audit_log()
    with tab_qr:
        _render_qr_generator(user)

    st.divider()
    st.button("Sign out", key="admin_logout", on_click=logout)
