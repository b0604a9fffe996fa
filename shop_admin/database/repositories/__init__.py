# database/repositories/__init__.py
"""Local client-storage repositories."""

from .session_repo import SessionRepo, StoredSession

__all__ = [
    "SessionRepo",
    "StoredSession",
]
