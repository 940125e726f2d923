import streamlit as st

import ui
from services import catalog_service


def render_services(navigate):
    st.title("Services")
    st.caption("Pick a starting point. Every project is scoped with you before any work begins.")

    services = catalog_service.SERVICES
    for row_start in range(0, len(services), 3):
        cols = st.columns(3)
        for col, service in zip(cols, services[row_start:row_start + 3]):
            with col:
                ui.card(service.icon, service.name, service.summary)
                st.button(
                    "Request a quote",
                    key=f"service_{service.id}",
                    on_click=navigate,
                    args=("start-project",),
                    use_container_width=True,
                )
