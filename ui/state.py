"""Per-session objects kept in ``st.session_state``.

Streamlit reruns the script on every interaction; the store and login gate
are built once per browser session and reused across reruns.
"""

from __future__ import annotations

import logging

import streamlit as st

from pinboard.config import Settings, build_login_gate, build_store, configure_logging

logger = logging.getLogger(__name__)

_FAILURE_MESSAGES = {
    "save": "Could not save your notes",
    "load": "Could not read your saved notes",
}


def _notify_storage_failure(operation: str, exc: Exception) -> None:
    """Surface a persistence failure without interrupting the page."""
    message = _FAILURE_MESSAGES.get(operation, "Note storage failed")
    st.toast(f"{message}: {exc}", icon="⚠️")


def ensure_session() -> None:
    """Initialize session state on first load."""
    if "settings" not in st.session_state:
        settings = Settings()
        configure_logging(settings)
        st.session_state.settings = settings
        logger.info("Starting session with %s storage", settings.storage_backend)
    if "gate" not in st.session_state:
        st.session_state.gate = build_login_gate(st.session_state.settings)
    if "store" not in st.session_state:
        st.session_state.store = build_store(
            st.session_state.settings, on_failure=_notify_storage_failure
        )
    if "editing_id" not in st.session_state:
        st.session_state.editing_id = None
