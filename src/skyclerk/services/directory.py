"""
Contacts, categories and labels of the active workspace.
"""

from ..api_client import SkyclerkClient
from ..schemas import Category, Contact, CreateLabelRequest, LedgerLabel, list_of

CONTACTS_LIMIT = 500


class ContactService:
    """Payees and payers, fetched in one large page for pickers."""

    def __init__(self, client: SkyclerkClient):
        self.client = client

    def get_contacts(self, search: str | None = None) -> list[Contact]:
        params: list[tuple[str, str]] = [("limit", str(CONTACTS_LIMIT))]
        if search:
            params.append(("search", search))
        return self.client.get(
            self.client.workspace_url("contacts"), params, decoder=list_of(Contact)
        )

    def create_contact(self, contact: Contact) -> Contact:
        return self.client.post(
            self.client.workspace_url("contacts"), contact, decoder=Contact.from_api_response
        )


class CategoryService:
    """Read-only category list; categories are managed on the web."""

    def __init__(self, client: SkyclerkClient):
        self.client = client

    def get_categories(self) -> list[Category]:
        return self.client.get(
            self.client.workspace_url("categories"), decoder=list_of(Category)
        )


class LabelService:
    def __init__(self, client: SkyclerkClient):
        self.client = client

    def get_labels(self) -> list[LedgerLabel]:
        return self.client.get(self.client.workspace_url("labels"), decoder=list_of(LedgerLabel))

    def create_label(self, name: str) -> LedgerLabel:
        return self.client.post(
            self.client.workspace_url("labels"),
            CreateLabelRequest(name=name),
            decoder=LedgerLabel.from_api_response,
        )
