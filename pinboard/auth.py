"""Login gate in front of the notes screen.

This is a convenience gate, not security: credentials are compared in plain
text and there is no lockout or rate limiting.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from pinboard.metrics import LOGIN_ATTEMPTS

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Incorrect username or password"


class CredentialVerifier(Protocol):
    """Anything that can check a username/password pair."""

    def verify(self, username: str, password: str) -> bool: ...


class FixedCredentialVerifier:
    """Accepts exactly one username/password pair (case-sensitive)."""

    def __init__(self, username: str = "User", password: str = "user") -> None:
        self._username = username
        self._password = password

    def verify(self, username: str, password: str) -> bool:
        return username == self._username and password == self._password


@dataclass(frozen=True)
class LoginResult:
    ok: bool
    message: str = ""


class LoginGate:
    """Tracks whether the current session has passed the login screen."""

    def __init__(self, verifier: CredentialVerifier) -> None:
        self._verifier = verifier
        self._authenticated = False

    @property
    def authenticated(self) -> bool:
        return self._authenticated

    def login(self, username: str, password: str) -> LoginResult:
        """Check the credentials; a failure leaves the gate unchanged."""
        if self._verifier.verify(username, password):
            self._authenticated = True
            LOGIN_ATTEMPTS.labels(result="success").inc()
            logger.info("Login succeeded for %r", username)
            return LoginResult(ok=True)

        LOGIN_ATTEMPTS.labels(result="failure").inc()
        logger.warning("Login failed for %r", username)
        return LoginResult(ok=False, message=FAILURE_MESSAGE)

    def logout(self) -> None:
        self._authenticated = False
