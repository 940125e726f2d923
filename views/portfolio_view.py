import streamlit as st

import ui
from services import catalog_service


def render_portfolio(navigate):
    st.title("Portfolio")

    service_names = {s.id: s.name for s in catalog_service.SERVICES}
    used = sorted({item.service_id for item in catalog_service.PORTFOLIO})
    choice = st.pills(
        "Filter",
        options=["all"] + used,
        format_func=lambda sid: "All" if sid == "all" else service_names[sid],
        default="all",
        key="portfolio_filter",
        label_visibility="collapsed",
    )
    items = [i for i in catalog_service.PORTFOLIO if choice in (None, "all") or i.service_id == choice]
    if not items:
        ui.render_empty_state("No projects here yet", key="portfolio_empty")
        return

    cols = st.columns(2)
    for idx, item in enumerate(items):
        with cols[idx % 2]:
            service = catalog_service.get_service(item.service_id)
            ui.card(service.icon, f"{item.title} · {item.year}", f"{item.client}. {item.summary}")

    st.button("Start something similar", key="portfolio_cta", on_click=navigate, args=("start-project",), type="primary")
