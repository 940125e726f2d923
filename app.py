from datetime import datetime

import sentry_sdk
import streamlit as st

from infrastructure.observability import setup_observability
setup_observability()

import ui
from use_cases import bootstrap
from use_cases.page_router import PageRoute
from utils import session_manager
from views import (
    about_view, admin_view, client_portal_view, crm_view, home_view, layout,
    login_view, portfolio_view, pricing_view, services_view, start_project_view,
)

# --- PAGE SETTINGS ---
st.set_page_config(page_title="9LMNTS Studio", page_icon="✨", layout="wide", initial_sidebar_state="collapsed")

# Health Check (Basic load-balancer heartbeat)
if st.query_params.get("health") == "1":
    st.write({"status": "ok", "version": "1.0", "uptime": datetime.utcnow().isoformat()})
    st.stop()

ui.setup_style()

# --- STARTUP ORCHESTRATION ---
# The interstitial covers the first run, while the stored session is being checked.
controller = session_manager.get_controller()
loading_slot = st.empty()
if controller.state.loading:
    with loading_slot.container():
        layout.render_loading()

startup_result = bootstrap.run_startup()
if startup_result.status == "STOP":
    st.stop()

decision = controller.resolve_view()
if decision.view is not PageRoute.LOADING:
    loading_slot.empty()

state = controller.state
user = state.user

if user is not None and sentry_sdk.get_client().is_active():
    sentry_sdk.set_user({"id": user.id, "role": user.role})

navigate = session_manager.navigate
logout = session_manager.logout

# --- SHELL ---
if decision.view is not PageRoute.LOADING:
    layout.render_navbar(user, state.current_page, navigate, logout)
    st.markdown("<div style='height: 12px;'></div>", unsafe_allow_html=True)

view = decision.view
if view is PageRoute.LOADING:
    pass
elif view is PageRoute.SERVICES:
    services_view.render_services(navigate)
elif view is PageRoute.PRICING:
    pricing_view.render_pricing(session_manager.select_plan)
elif view is PageRoute.ABOUT:
    about_view.render_about(navigate)
elif view is PageRoute.PORTFOLIO:
    portfolio_view.render_portfolio(navigate)
elif view is PageRoute.START_PROJECT:
    start_project_view.render_start_project(navigate, user, state.selected_plan)
elif view is PageRoute.ADMIN:
    admin_view.render_admin(navigate, user, logout)
elif view is PageRoute.CRM:
    crm_view.render_crm(navigate, user)
elif view is PageRoute.CLIENT_PORTAL:
    client_portal_view.render_client_portal(navigate, user)
elif view is PageRoute.LOGIN:
    login_view.render_login(navigate, session_manager.login_success)
elif view is PageRoute.SIGNUP:
    login_view.render_signup(navigate, session_manager.login_success)
else:
    home_view.render_home(navigate)

if view is not PageRoute.LOADING:
    layout.render_footer(user, navigate)
