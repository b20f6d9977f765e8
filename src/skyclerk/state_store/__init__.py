"""
State Store (SQLite-based).

Lightweight persistent key/value DB for the local session:
bearer token, user id, user email and active workspace id.
"""

from .sqlite_store import CredentialKey, CredentialStore

__all__ = [
    "CredentialKey",
    "CredentialStore",
]
