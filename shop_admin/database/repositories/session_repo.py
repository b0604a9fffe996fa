# shop_admin/database/repositories/session_repo.py
from __future__ import annotations

import json
import logging
import sqlite3
from dataclasses import dataclass, field
from typing import Optional

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredSession:
    token: str
    user: dict = field(default_factory=dict)
    signed_in: Optional[str] = None


class SessionRepo:
    """
    Persists the signed-in credential and user profile between runs.

    The table holds at most one row (id = 1). save() replaces it, clear()
    removes it.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn
        self.conn.row_factory = sqlite3.Row

    def load(self) -> Optional[StoredSession]:
        row = self.conn.execute(
            "SELECT token, user_json, signed_in FROM app_session WHERE id = 1"
        ).fetchone()
        if row is None or not row["token"]:
            return None
        try:
            user = json.loads(row["user_json"] or "{}")
        except json.JSONDecodeError:
            _log.warning("Stored user profile is not valid JSON; ignoring it")
            user = {}
        if not isinstance(user, dict):
            user = {}
        return StoredSession(token=row["token"], user=user, signed_in=row["signed_in"])

    def save(self, token: str, user: dict | None = None) -> None:
        with self.conn:
            self.conn.execute(
                """
                INSERT INTO app_session(id, token, user_json, signed_in)
                VALUES (1, ?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(id) DO UPDATE SET
                    token = excluded.token,
                    user_json = excluded.user_json,
                    signed_in = excluded.signed_in
                """,
                (token, json.dumps(user or {})),
            )

    def clear(self) -> None:
        with self.conn:
            self.conn.execute("DELETE FROM app_session WHERE id = 1")

    # ---------------------------- settings ----------------------------

    def get_setting(self, key: str, default: str | None = None) -> str | None:
        row = self.conn.execute("SELECT value FROM app_settings WHERE key = ?", (key,)).fetchone()
        return default if row is None else row["value"]

    def set_setting(self, key: str, value: str | None) -> None:
        with self.conn:
            self.conn.execute(
                "INSERT INTO app_settings(key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
