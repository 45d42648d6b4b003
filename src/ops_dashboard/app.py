"""
Ops Dashboard - Main Application

Streamlit operator UI for the dealership and school-trip back office.
"""

import streamlit as st
from pydantic import ValidationError
from streamlit_cookies_manager import EncryptedCookieManager

from ops_dashboard.adapters.supabase_client import get_supabase_client
from ops_dashboard.components.sidebar import sidebar
from ops_dashboard.constants import PAGE_TITLE
from ops_dashboard.domain.constants import SIGNUP_ROLES
from ops_dashboard.domain.metrics import parse_week_start
from ops_dashboard.domain.models import SignupInput, collect_errors
from ops_dashboard.errors import Conflict, OpsDashboardError
from ops_dashboard.logging_config import setup_logging
from ops_dashboard.page.cars import run as cars
from ops_dashboard.page.dashboard import run as dashboard
from ops_dashboard.page.explore import run as explore
from ops_dashboard.page.payouts import run as payouts
from ops_dashboard.page.shops import run as shops
from ops_dashboard.services.auth import sign_in, sign_up

PAGE_RENDERERS = {
    "dashboard": dashboard,
    "cars": cars,
    "shops": shops,
    "explore": explore,
    "payouts": payouts,
}


def initialize_session():
    """Initialize Supabase client, cookies, and session state."""
    setup_logging(st.secrets.get("log_level"))
    st.session_state["week_start"] = parse_week_start(st.secrets.get("week_start"))
    st.session_state["supabase"] = get_supabase_client(
        st.secrets["supabase_url"], st.secrets["supabase_key"]
    )

    cookies = EncryptedCookieManager(
        prefix="ops_dashboard",
        password=st.secrets["cookie_secret"],
    )
    st.session_state["cookies"] = cookies
    if not cookies.ready():
        st.stop()

    if "user" not in st.session_state:
        st.session_state["user"] = cookies.get("user_id")
    if "role" not in st.session_state:
        st.session_state["role"] = cookies.get("role")
    if "session" not in st.session_state:
        st.session_state["session"] = None
    if "page" not in st.session_state:
        st.session_state["page"] = None


def render_login_form():
    email = st.text_input("Email", key="login_email")
    password = st.text_input("Password", type="password", key="login_password")
    if not st.button("Log in", type="primary"):
        return
    try:
        user = sign_in(st.session_state["supabase"], email, password)
    except OpsDashboardError as exc:
        st.error(f"Login failed: {exc}")
        return

    st.session_state["user"] = user["id"]
    st.session_state["role"] = user["role"]
    st.session_state["email"] = user["email"]
    cookies = st.session_state["cookies"]
    cookies["user_id"] = user["id"]
    cookies["role"] = user["role"] or ""
    cookies.save()
    st.rerun()


def render_signup_form():
    with st.form("signup"):
        full_name = st.text_input("Full name")
        email = st.text_input("Email")
        phone = st.text_input("Phone")
        role = st.selectbox("Role", SIGNUP_ROLES, index=SIGNUP_ROLES.index("trip_planner"))
        school_id = st.text_input("School ID (school managers)")
        password = st.text_input("Password", type="password")
        confirm_password = st.text_input("Confirm password", type="password")
        submitted = st.form_submit_button("Create account", type="primary")

    if not submitted:
        return
    try:
        payload = SignupInput(
            full_name=full_name,
            email=email,
            phone=phone or None,
            role=role,
            school_id=school_id or None,
            password=password,
            confirm_password=confirm_password,
        )
    except ValidationError as exc:
        for field, message in collect_errors(exc).items():
            st.error(f"{field}: {message}")
        return
    try:
        sign_up(st.session_state["supabase"], payload)
    except Conflict:
        st.error("This email is already registered.")
    except OpsDashboardError as exc:
        st.error(f"Signup failed: {exc}")
    else:
        st.success("Account created. You can log in now.")


def render_main_app():
    sidebar()
    PAGE_RENDERERS[st.session_state["page"]]()


def main():
    """Main application entry point."""
    st.set_page_config(page_title=PAGE_TITLE, layout="wide")
    initialize_session()

    if st.session_state["user"] is None:
        st.title(PAGE_TITLE)
        login_tab, signup_tab = st.tabs(["Log in", "Sign up"])
        with login_tab:
            render_login_form()
        with signup_tab:
            render_signup_form()
        st.stop()

    render_main_app()


if __name__ == "__main__":
    main()
