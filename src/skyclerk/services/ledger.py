"""
Ledger entry service (GET/POST/DELETE /api/v3/{workspace}/ledger).
"""

import logging

from ..api_client import PaginatedResult, SkyclerkClient
from ..schemas import Ledger, LedgerType, list_of

logger = logging.getLogger(__name__)


class LedgerService:
    """CRUD operations on income and expense entries."""

    def __init__(self, client: SkyclerkClient):
        self.client = client

    def get_ledgers(
        self,
        page: int,
        type: LedgerType | str | None = None,
        search: str | None = None,
    ) -> PaginatedResult[list[Ledger]]:
        """
        Fetch one page of ledger entries.

        Args:
            page: 1-indexed page number
            type: Optional Income/Expense filter; empty means all types
            search: Optional text filter (contact, note, category)

        Returns:
            PaginatedResult with the entries and the last-page flag
        """
        params: list[tuple[str, str]] = [("page", str(page))]
        if type:
            params.append(("type", type.value if isinstance(type, LedgerType) else type))
        if search:
            params.append(("search", search))

        return self.client.get_paginated(
            self.client.workspace_url("ledger"), params, decoder=list_of(Ledger)
        )

    def get_ledger(self, ledger_id: int) -> Ledger:
        return self.client.get(
            self.client.workspace_url(f"ledger/{ledger_id}"),
            decoder=Ledger.from_api_response,
        )

    def create_ledger(self, ledger: Ledger) -> Ledger:
        """Create an entry; the server assigns the id and returns the stored entry."""
        created = self.client.post(
            self.client.workspace_url("ledger"), ledger, decoder=Ledger.from_api_response
        )
        logger.info(f"Created ledger entry id={created.id}")
        return created

    def delete_ledger(self, ledger_id: int) -> None:
        """Permanently delete an entry."""
        self.client.delete(self.client.workspace_url(f"ledger/{ledger_id}"))
        logger.info(f"Deleted ledger entry id={ledger_id}")
