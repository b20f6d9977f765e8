"""
Process-wide session state.

Holds the bearer token and the active workspace id. Mutated only by the
authentication and ping flows; every outgoing request reads it through
snapshot() so a concurrent logout or workspace switch can never produce a
half-updated request.
"""

import logging
import threading
from dataclasses import dataclass

from .state_store import CredentialKey, CredentialStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable view of the session taken at request-build time."""

    bearer_token: str | None = None
    user_id: int | None = None
    user_email: str | None = None
    active_workspace_id: int | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.bearer_token)


class Session:
    """
    Bearer token and active workspace holder.

    If a CredentialStore is given, the session restores itself from it on
    construction and writes every change through to it.
    """

    def __init__(self, store: CredentialStore | None = None):
        self._store = store
        self._lock = threading.Lock()
        self._state = SessionSnapshot()
        if store is not None:
            self._restore()

    def _restore(self) -> None:
        stored = self._store.all()
        self._state = SessionSnapshot(
            bearer_token=stored.get(CredentialKey.ACCESS_TOKEN.value) or None,
            user_id=_parse_id(stored.get(CredentialKey.USER_ID.value)),
            user_email=stored.get(CredentialKey.USER_EMAIL.value) or None,
            active_workspace_id=_parse_id(stored.get(CredentialKey.ACCOUNT_ID.value)),
        )
        if self._state.is_authenticated:
            logger.debug(
                "Restored session for user_id=%s workspace=%s",
                self._state.user_id,
                self._state.active_workspace_id,
            )

    def snapshot(self) -> SessionSnapshot:
        """Return the current state as one consistent value."""
        with self._lock:
            return self._state

    @property
    def bearer_token(self) -> str | None:
        return self.snapshot().bearer_token

    @property
    def user_id(self) -> int | None:
        return self.snapshot().user_id

    @property
    def user_email(self) -> str | None:
        return self.snapshot().user_email

    @property
    def active_workspace_id(self) -> int | None:
        return self.snapshot().active_workspace_id

    def is_authenticated(self) -> bool:
        """True iff a non-empty bearer token is present."""
        return self.snapshot().is_authenticated

    def set_credentials(self, token: str, user_id: int, email: str | None = None) -> None:
        """Store the credentials issued by a successful login or registration."""
        with self._lock:
            self._state = SessionSnapshot(
                bearer_token=token,
                user_id=user_id,
                user_email=email,
                active_workspace_id=self._state.active_workspace_id,
            )
            if self._store is not None:
                self._store.set(CredentialKey.ACCESS_TOKEN, token)
                self._store.set(CredentialKey.USER_ID, user_id)
                if email:
                    self._store.set(CredentialKey.USER_EMAIL, email)
                else:
                    self._store.delete(CredentialKey.USER_EMAIL)
        logger.info("Session authenticated for user_id=%s", user_id)

    def set_active_workspace(self, workspace_id: int | None) -> None:
        """Select the workspace that namespaces every resource path."""
        # 0 is the persisted "no workspace" sentinel
        workspace_id = workspace_id or None
        with self._lock:
            self._state = SessionSnapshot(
                bearer_token=self._state.bearer_token,
                user_id=self._state.user_id,
                user_email=self._state.user_email,
                active_workspace_id=workspace_id,
            )
            if self._store is not None:
                if workspace_id is None:
                    self._store.delete(CredentialKey.ACCOUNT_ID)
                else:
                    self._store.set(CredentialKey.ACCOUNT_ID, workspace_id)
        logger.debug("Active workspace set to %s", workspace_id)

    def clear(self) -> None:
        """Forget token, user and workspace. Safe to call repeatedly."""
        with self._lock:
            self._state = SessionSnapshot()
            if self._store is not None:
                self._store.delete_many(list(CredentialKey))
        logger.info("Session cleared")


def _parse_id(raw: str | None) -> int | None:
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric stored id: %r", raw)
        return None
    return value or None
