import streamlit as st


def render_about(navigate):
    st.title("About 9LMNTS")
    st.markdown(
        """
        9LMNTS is a small, senior studio working across the nine elements a modern brand
        needs online: strategy, identity, web, content, events, marketing, data, automation
        and support.

        We keep teams small and timelines short. Every engagement starts with a scoped
        proposal, and every deliverable ships with the source.
        """
    )
    c1, c2, c3 = st.columns(3)
    c1.metric("Projects shipped", "120+")
    c2.metric("Events powered", "45")
    c3.metric("Avg. launch time", "4 weeks")
    st.button("Work with us", key="about_cta", on_click=navigate, args=("start-project",), type="primary")
