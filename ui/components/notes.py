"""Notes page: pinned and unpinned sections, sort picker, add/edit form."""

from __future__ import annotations

from typing import Optional

import streamlit as st
from pydantic import ValidationError

from pinboard.formatting import format_timestamp, preview
from pinboard.models import Note, NoteDraft, SortOption
from pinboard.store import NotesStore

_SORT_OPTIONS: list[SortOption] = list(SortOption)


def _store() -> NotesStore:
    return st.session_state.store


def _draft_errors(exc: ValidationError) -> str:
    """Turn a NoteDraft validation error into one readable line."""
    fields = sorted({str(err["loc"][0]) for err in exc.errors()})
    return "Please fill in: " + ", ".join(fields)


def _render_sort_picker(store: NotesStore) -> None:
    choice = st.selectbox(
        "Sort by",
        _SORT_OPTIONS,
        index=_SORT_OPTIONS.index(store.sort_option),
        format_func=lambda option: option.label,
    )
    if choice is not store.sort_option:
        store.set_sort_option(choice)


def _render_row(note: Note) -> None:
    """One note: title, preview, timestamps and row actions."""
    store = _store()
    with st.container(border=True):
        head, pin_col = st.columns([8, 1])
        with head:
            st.markdown(f"**{note.title}**")
        with pin_col:
            if st.button(
                "📌" if note.is_pinned else "📍",
                key=f"pin_{note.id}",
                help="Unpin" if note.is_pinned else "Pin",
            ):
                store.toggle_pin(note.id)
                st.rerun()

        st.caption(preview(note.content))
        st.caption(f"Updated: {format_timestamp(note.updated_at)}")

        edit_col, delete_col, _ = st.columns([1, 1, 4])
        with edit_col:
            if st.button("Edit", key=f"edit_{note.id}"):
                st.session_state.editing_id = note.id
                st.rerun()
        with delete_col:
            if st.button("Delete", key=f"delete_{note.id}", type="primary"):
                store.delete_by_id(note.id)
                if st.session_state.editing_id == note.id:
                    st.session_state.editing_id = None
                st.rerun()


def _render_form(existing: Optional[Note]) -> None:
    """Add form, or edit form when ``existing`` is given."""
    store = _store()
    heading = "Edit note" if existing else "New note"
    form_key = f"note_form_{existing.id}" if existing else "note_form_new"
    with st.form(form_key, clear_on_submit=True):
        st.subheader(heading)
        title = st.text_input("Title", value=existing.title if existing else "")
        content = st.text_area(
            "Content", value=existing.content if existing else "", height=120
        )
        is_pinned = st.checkbox("Pin", value=existing.is_pinned if existing else False)

        if existing:
            st.caption(f"Created: {format_timestamp(existing.created_at, 'medium')}")
            st.caption(f"Updated: {format_timestamp(existing.updated_at, 'medium')}")

        save_col, cancel_col = st.columns(2)
        with save_col:
            submitted = st.form_submit_button("Update" if existing else "Add")
        with cancel_col:
            cancelled = st.form_submit_button("Cancel") if existing else False

    if cancelled:
        st.session_state.editing_id = None
        st.rerun()
    if not submitted:
        return

    try:
        draft = NoteDraft(title=title, content=content, is_pinned=is_pinned)
    except ValidationError as exc:
        st.warning(_draft_errors(exc))
        return

    if existing:
        store.update(draft.apply_to(existing))
        st.session_state.editing_id = None
    else:
        store.add(draft.to_note())
    st.rerun()


def render() -> None:
    """Render the notes page."""
    store = _store()

    header, logout_col = st.columns([5, 1])
    with header:
        st.title("📝 Notes")
    with logout_col:
        if st.button("Sign out"):
            st.session_state.gate.logout()
            st.rerun()

    _render_sort_picker(store)

    editing: Optional[Note] = None
    if st.session_state.editing_id is not None:
        editing = store.get(st.session_state.editing_id)
        if editing is None:
            st.session_state.editing_id = None
    label = "Edit note" if editing else "Add a note"
    with st.expander(label, expanded=editing is not None):
        _render_form(editing)

    pinned, unpinned = store.sections()

    # The pinned section only appears when something is pinned
    if pinned:
        st.subheader("Pinned notes")
        for note in pinned:
            _render_row(note)

    st.subheader("Notes")
    if not unpinned and not pinned:
        st.caption("No notes yet.")
    for note in unpinned:
        _render_row(note)
