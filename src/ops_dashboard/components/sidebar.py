"""
Main Sidebar Component

Role-based navigation and logout.
"""

import streamlit as st

from ops_dashboard.constants import PAGES, pages_for_role


def logout() -> None:
    st.session_state["user"] = None
    st.session_state["role"] = None
    st.session_state["session"] = None
    cookies = st.session_state["cookies"]
    for key in ("user_id", "role"):
        if key in cookies:
            del cookies[key]
    cookies.save()


def sidebar() -> None:
    """Render one navigation button per page the signed-in role may open."""
    allowed = pages_for_role(st.session_state.get("role"))
    if st.session_state.get("page") not in allowed:
        st.session_state["page"] = allowed[0]

    with st.sidebar:
        st.caption(st.session_state.get("email") or "")
        for page in allowed:
            if st.button(
                PAGES[page],
                key=f"{page}_btn",
                use_container_width=True,
                type="primary" if st.session_state["page"] == page else "secondary",
            ):
                st.session_state["page"] = page
                st.rerun()
        st.markdown("---")
        if st.button("➜ Log out", key="logout_btn", use_container_width=True):
            logout()
            st.success("Logged out.")
            st.rerun()
