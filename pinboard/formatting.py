"""Display helpers for note rows and the edit form."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

_FORMATS = {
    "short": "%d/%m/%Y %H:%M",
    "medium": "%d %b %Y, %H:%M",
}


def format_timestamp(
    value: datetime, style: Literal["short", "medium"] = "short"
) -> str:
    """Render ``value`` in local time.

    ``short`` is used for list-row captions, ``medium`` for the
    created/updated lines of the edit form.
    """
    return value.astimezone().strftime(_FORMATS[style])


def preview(content: str, max_lines: int = 2) -> str:
    """First ``max_lines`` lines of ``content`` as written, with an ellipsis if cut."""
    lines = content.splitlines()
    if len(lines) <= max_lines:
        return "\n".join(lines)
    return "\n".join(lines[:max_lines]) + " …"
