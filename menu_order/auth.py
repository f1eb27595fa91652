"""Application authentication state and its transitions."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable

from menu_order.config import TOKEN_VALIDITY_DAYS
from menu_order.errors import SessionExpiredError
from menu_order.models import Session
from menu_order.session import SessionStore

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AuthState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class AuthController:
    """Owns the session record and the authenticated/unauthenticated state.

    UNAUTHENTICATED -> AUTHENTICATED on login; AUTHENTICATED ->
    UNAUTHENTICATED on logout or when the stored expiry has passed.
    """

    def __init__(
        self,
        store: SessionStore,
        validity: timedelta = timedelta(days=TOKEN_VALIDITY_DAYS),
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.store = store
        self.validity = validity
        self.clock = clock
        self._session: Session | None = None

    @property
    def state(self) -> AuthState:
        if self._session is None:
            return AuthState.UNAUTHENTICATED
        return AuthState.AUTHENTICATED

    @property
    def is_authenticated(self) -> bool:
        return self.state is AuthState.AUTHENTICATED

    def restore(self) -> AuthState:
        """Pick up a stored session at start-up, discarding it if expired."""
        session = self.store.load()
        if session is None:
            self.store.clear()
            self._session = None
        elif session.is_expired(self.clock()):
            logger.info("Stored session expired at %s; discarding", session.expiry.isoformat())
            self.store.clear()
            self._session = None
        else:
            self._session = session
        return self.state

    def login(self, token: str) -> Session:
        session = Session(token=token, expiry=self.clock() + self.validity)
        self.store.save(session)
        self._session = session
        logger.info("Signed in; session valid until %s", session.expiry.isoformat())
        return session

    def logout(self) -> None:
        self.store.clear()
        self._session = None
        logger.info("Signed out")

    def require_token(self) -> str:
        """Return the bearer token, or expire the session and raise."""
        session = self._session
        if session is None:
            raise SessionExpiredError("Session not found. Please log in again.")
        if session.is_expired(self.clock()):
            self.store.clear()
            self._session = None
            raise SessionExpiredError("Session expired. Please log in again.")
        return session.token

    def expire(self) -> None:
        """Drop the session after the server stopped accepting its token."""
        if self._session is not None:
            self.store.clear()
            self._session = None
