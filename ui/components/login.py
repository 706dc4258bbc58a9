"""Login page: username/password form in front of the notes page."""

from __future__ import annotations

import streamlit as st


def render() -> None:
    """Render the login form."""
    st.title("Sign in to Pinboard")

    with st.form("login", clear_on_submit=False):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in", use_container_width=True)

    if submitted:
        result = st.session_state.gate.login(username, password)
        if result.ok:
            st.rerun()
        else:
            st.error(result.message)
