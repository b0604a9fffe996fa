# shop_admin/api/session.py
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..database.repositories.session_repo import SessionRepo

_log = logging.getLogger(__name__)

DEFAULT_DISPLAY_NAME = "Admin User"
DEFAULT_DISPLAY_EMAIL = "admin@goweloshop.com"


class SessionContext:
    """
    The signed-in identity, passed explicitly to the API client and to any
    widget that displays the user.

    Lifecycle:
      - restore(): pick up a credential persisted by a previous run
      - begin(token, user): after a successful sign-in
      - end(): on logout or when the backend rejects the credential

    Listeners registered with add_listener() are called with this context
    after begin() and end().
    """

    def __init__(self, store: Optional[SessionRepo] = None) -> None:
        self._store = store
        self._token: Optional[str] = None
        self._user: dict = {}
        self._listeners: List[Callable[["SessionContext"], None]] = []

    # ------------------------------ state ------------------------------

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def user(self) -> dict:
        return dict(self._user)

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    @property
    def display_name(self) -> str:
        return str(self._user.get("name") or self._user.get("fullName") or DEFAULT_DISPLAY_NAME)

    @property
    def display_email(self) -> str:
        return str(self._user.get("email") or DEFAULT_DISPLAY_EMAIL)

    # ---------------------------- lifecycle ----------------------------

    def restore(self) -> bool:
        if self._store is None:
            return False
        stored = self._store.load()
        if stored is None:
            return False
        self._token = stored.token
        self._user = dict(stored.user)
        _log.info("Restored session for %s", self.display_email)
        return True

    def begin(self, token: str, user: Optional[dict] = None, *, persist: bool = True) -> None:
        if not token:
            raise ValueError("Cannot begin a session without a token")
        self._token = token
        self._user = dict(user or {})
        if self._store is not None:
            if persist:
                self._store.save(token, self._user)
            else:
                self._store.clear()
        _log.info("Session started for %s", self.display_email)
        self._notify()

    def end(self) -> None:
        was_active = self.is_authenticated
        self._token = None
        self._user = {}
        if self._store is not None:
            self._store.clear()
        if was_active:
            _log.info("Session ended")
            self._notify()

    # ---------------------------- listeners ----------------------------

    def add_listener(self, fn: Callable[["SessionContext"], None]) -> None:
        self._listeners.append(fn)

    def remove_listener(self, fn: Callable[["SessionContext"], None]) -> None:
        try:
            self._listeners.remove(fn)
        except ValueError:
            pass

    def _notify(self) -> None:
        for fn in list(self._listeners):
            fn(self)
