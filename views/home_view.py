import streamlit as st

import ui
from services import catalog_service


def render_home(navigate):
    st.markdown(
        """
        <div class="nl-hero">
          <h1>We build the digital<br/>elements of your brand.</h1>
          <p>Websites, identities, event technology and automation, designed and shipped by one studio.</p>
        </div>
        """,
        unsafe_allow_html=True,
    )
    c1, c2, _ = st.columns([1, 1, 3])
    c1.button("Start a project", key="home_cta", on_click=navigate, args=("start-project",), type="primary", use_container_width=True)
    c2.button("See pricing", key="home_pricing", on_click=navigate, args=("pricing",), use_container_width=True)

    st.markdown("### What we do")
    featured = [s for s in catalog_service.SERVICES if s.id != "other"][:3]
    cols = st.columns(len(featured))
    for col, service in zip(cols, featured):
        with col:
            ui.card(service.icon, service.name, service.summary)
    st.button("All services →", key="home_services", on_click=navigate, args=("services",))

    st.markdown("### Recent work")
    latest = catalog_service.PORTFOLIO[0]
    ui.card(catalog_service.get_service(latest.service_id).icon, latest.title, latest.summary)
    st.button("View portfolio →", key="home_portfolio", on_click=navigate, args=("portfolio",))
