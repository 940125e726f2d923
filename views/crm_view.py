import pandas as pd
import streamlit as st

import auth
import ui
from infrastructure.repositories.sqlite_lead_repository import LEAD_STATUSES
from services import catalog_service
from use_cases import project_flow

GRID_COLUMNS = ["id", "created_at", "full_name", "email", "company", "service", "plan", "budget", "status"]


def render_crm(navigate, user):
    st.title("🗂 CRM")

    status_filter = st.pills(
        "Status",
        options=["all"] + list(LEAD_STATUSES),
        default="all",
        key="crm_status_filter",
        label_visibility="collapsed",
    )
    status = None if status_filter in (None, "all") else status_filter
    leads = auth.get_lead_repo().list_leads(status=status)
    if not leads:
        ui.render_empty_state("No inquiries in this stage", key="crm_empty")
        return

    df = pd.DataFrame(leads)[GRID_COLUMNS]
    df["service"] = df["service"].map(lambda sid: catalog_service.get_service(sid).name)
    selected = ui.render_aggrid(df, height=420, pagination=True, selectable=True)

    if selected is None or selected.empty:
        st.caption("Select an inquiry to see the details and move it through the pipeline.")
        return

    lead = auth.get_lead_repo().get_lead(int(selected.iloc[0]["id"]))
    if lead is None:
        st.warning("This inquiry no longer exists.")
        return

    st.subheader(f"#{lead['id']} · {lead['full_name']}")
    st.write(lead["message"])
    c1, c2 = st.columns([2, 1])
    new_status = c1.selectbox(
        "Stage",
        LEAD_STATUSES,
        index=LEAD_STATUSES.index(lead["status"]),
        key=f"crm_status_{lead['id']}",
    )
    if c2.button("Update", key=f"crm_update_{lead['id']}", type="primary", disabled=new_status == lead["status"]):
        if project_flow.update_lead_status(lead["id"], new_status, user):
            st.success(f"Moved to '{new_status}'.")
            st.rerun()
        else:
            st.error("Could not update this inquiry.")
