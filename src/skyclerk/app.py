"""
Application wiring.

Builds the credential store, session, API client and services once from a
Config and hands them out as attributes. Callers pass the app (or single
services) around instead of reaching for module-level globals.
"""

import logging

from .api_client import SkyclerkClient
from .config import Config
from .services import (
    AccountService,
    AuthService,
    CategoryService,
    ContactService,
    FileService,
    LabelService,
    LedgerService,
    MeService,
    PingService,
    ReportService,
    SnapClerkService,
)
from .session import Session
from .state_store import CredentialStore

logger = logging.getLogger(__name__)


class SkyclerkApp:
    """Container for one configured client and its services."""

    def __init__(self, config: Config, store: CredentialStore | None = None):
        self.config = config

        self.store = store if store is not None else CredentialStore(config.state_db_path)
        self.session = Session(self.store)
        self.client = SkyclerkClient(
            base_url=config.server.base_url,
            session=self.session,
            timeout=config.server.timeout_seconds,
        )

        self.me = MeService(self.client)
        self.ping = PingService(self.client, interval_seconds=config.ping.interval_seconds)
        self.auth = AuthService(
            self.client,
            self.session,
            self.me,
            client_id=config.server.client_id,
            ping_service=self.ping,
        )
        self.ping.on_logout = self.auth.logout

        self.ledgers = LedgerService(self.client)
        self.contacts = ContactService(self.client)
        self.categories = CategoryService(self.client)
        self.labels = LabelService(self.client)
        self.files = FileService(self.client)
        self.snapclerks = SnapClerkService(self.client)
        self.accounts = AccountService(self.client)
        self.reports = ReportService(self.client)

    def start_ping(self) -> None:
        """Start the health-ping if enabled and a user is logged in."""
        if not self.config.ping.enabled:
            logger.debug("Health-ping disabled in config")
            return
        if not self.session.is_authenticated():
            logger.debug("Not logged in; health-ping not started")
            return
        self.ping.start()

    def close(self) -> None:
        self.ping.stop()
        self.client.close()

    def __enter__(self) -> "SkyclerkApp":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def create_app(config: Config) -> SkyclerkApp:
    config.require_valid()
    return SkyclerkApp(config)
