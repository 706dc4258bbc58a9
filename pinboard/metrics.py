"""Prometheus metrics for Pinboard.

All metric objects are defined here so they can be imported from any module.
"""

from prometheus_client import Counter, Gauge

# ---------------------------------------------------------------------------
# Note store metrics
# ---------------------------------------------------------------------------

NOTE_OPERATIONS = Counter(
    "pinboard_note_operations_total",
    "Total number of note mutations",
    ["operation"],  # add, update, toggle_pin, delete
)

NOTES_TOTAL = Gauge(
    "pinboard_notes",
    "Number of notes in the collection",
)

# ---------------------------------------------------------------------------
# Persistence metrics
# ---------------------------------------------------------------------------

PERSISTENCE_FAILURES = Counter(
    "pinboard_persistence_failures_total",
    "Failed snapshot reads and writes",
    ["operation"],  # save, load
)

# ---------------------------------------------------------------------------
# Login metrics
# ---------------------------------------------------------------------------

LOGIN_ATTEMPTS = Counter(
    "pinboard_login_attempts_total",
    "Login attempts at the gate",
    ["result"],  # success, failure
)
