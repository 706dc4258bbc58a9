"""Pinboard — Streamlit notes interface.

Run with:
    streamlit run ui/app.py
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so `ui.*` and `pinboard.*` imports
# resolve regardless of the working directory Streamlit uses.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

st.set_page_config(
    page_title="Pinboard",
    page_icon="📌",
    layout="centered",
)

from ui import state  # noqa: E402
from ui.components import login, notes  # noqa: E402

state.ensure_session()

if st.session_state.gate.authenticated:
    notes.render()
else:
    login.render()
