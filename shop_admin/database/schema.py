from pathlib import Path
import logging
import sqlite3

_log = logging.getLogger(__name__)

SQL = r"""
/* ======================== CLIENT STORAGE ======================== */

/* -------- signed-in session (single row) -------- */
CREATE TABLE IF NOT EXISTS app_session (
    id          INTEGER PRIMARY KEY CHECK (id = 1),
    token       TEXT NOT NULL,
    user_json   TEXT NOT NULL DEFAULT '{}',
    signed_in   TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
);

/* -------- simple key/value preferences -------- */
CREATE TABLE IF NOT EXISTS app_settings (
    key    TEXT PRIMARY KEY,
    value  TEXT
);
"""


def init_schema(db_path: Path | str = "shop_admin.db") -> None:
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    with sqlite3.connect(db_path) as conn:
        conn.executescript(SQL)
        conn.commit()
    _log.debug("Client storage schema applied to %s", db_path)
