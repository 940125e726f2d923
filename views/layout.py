"""Site chrome shared by every page: navbar, footer and the loading interstitial."""

from datetime import datetime

import streamlit as st

import ui
from use_cases.session_models import User, is_admin

PUBLIC_LINKS = (
    ("home", "Home"),
    ("services", "Services"),
    ("pricing", "Pricing"),
    ("portfolio", "Portfolio"),
    ("about", "About"),
)
ADMIN_LINKS = (("admin", "Dashboard"), ("crm", "CRM"))


def nav_links(user):
    """Navbar entries visible to this visitor, in display order."""
    links = list(PUBLIC_LINKS)
    if user is not None:
        links.append(("client-portal", "My projects"))
    if is_admin(user):
        links.extend(ADMIN_LINKS)
    return links


def render_navbar(user: User, current_page, navigate, logout):
    links = nav_links(user)
    cols = st.columns([2] + [1] * len(links) + [1.3, 1.1])
    cols[0].markdown("<div class='nl-brand'>9LMNTS</div>", unsafe_allow_html=True)
    for col, (page, label) in zip(cols[1:], links):
        col.button(
            label,
            key=f"nav_{page}",
            on_click=navigate,
            args=(page,),
            type="primary" if page == current_page else "secondary",
            use_container_width=True,
        )
    cols[-2].button("Start a project", key="nav_cta", on_click=navigate, args=("start-project",), type="primary", use_container_width=True)
    if user is None:
        cols[-1].button("Sign in", key="nav_login", on_click=navigate, args=("login",), use_container_width=True)
    else:
        cols[-1].button("Sign out", key="nav_logout", on_click=logout, use_container_width=True, help=user.email)


def render_footer(user, navigate):
    st.markdown("<div class='nl-footer'></div>", unsafe_allow_html=True)
    links = nav_links(user)
    cols = st.columns(len(links) + 1)
    for col, (page, label) in zip(cols, links):
        col.button(label, key=f"footer_{page}", on_click=navigate, args=(page,), type="tertiary")
    cols[-1].caption(f"© {datetime.utcnow().year} 9LMNTS Studio")


def render_loading():
    ui.show_loading_screen("Loading...")
