"""
Account (workspace), billing and user DTOs.

The user profile arrives in two casings: /oauth/me answers in snake_case,
the workspace-scoped profile endpoint in PascalCase. Each has its own
decoder and key table.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar

from .wire import INT, OPTIONAL_STR, STR, ListOf, Nested, WireField, WireModel


@dataclass
class Account(WireModel):
    """A workspace; every resource path is namespaced by its id."""

    id: int = 0
    name: str = ""
    owner_id: int = 0
    locale: str = "en-US"
    currency: str = "USD"

    WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = (
        WireField("id", "id", INT),
        WireField("name", "name", STR),
        WireField("owner_id", "owner_id", INT),
        WireField("locale", "locale", STR),
        WireField("currency", "currency", STR),
    )


@dataclass
class Billing(WireModel):
    """Subscription and payment details of the active workspace."""

    id: int = 0
    subscription: str = ""
    status: str = ""
    payment_processor: str = ""
    # None when the workspace is not trialing ("" on the wire)
    trial_expire: str | None = None
    card_brand: str = ""
    card_last_4: str = ""
    card_exp_month: int = 0
    card_exp_year: int = 0
    current_period_start: str = ""
    current_period_end: str = ""

    WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = (
        WireField("id", "id", INT),
        WireField("subscription", "subscription", STR),
        WireField("status", "status", STR),
        WireField("payment_processor", "payment_processor", STR),
        WireField("trial_expire", "trial_expire", OPTIONAL_STR),
        WireField("card_brand", "card_brand", STR),
        WireField("card_last_4", "card_last_4", STR),
        WireField("card_exp_month", "card_exp_month", INT),
        WireField("card_exp_year", "card_exp_year", INT),
        WireField("current_period_start", "current_period_start", STR),
        WireField("current_period_end", "current_period_end", STR),
    )


@dataclass
class User(WireModel):
    """The authenticated user and the workspaces they belong to."""

    id: int = 0
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    accounts: list[Account] = field(default_factory=list)

    WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = (
        WireField("id", "Id", INT),
        WireField("email", "Email", STR),
        WireField("first_name", "FirstName", STR),
        WireField("last_name", "LastName", STR),
        WireField("accounts", "Accounts", ListOf(Nested(Account))),
    )

    # /oauth/me payload
    ME_WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = (
        WireField("id", "id", INT),
        WireField("email", "email", STR),
        WireField("first_name", "first_name", STR),
        WireField("last_name", "last_name", STR),
        WireField("accounts", "accounts", ListOf(Nested(Account))),
    )

    @classmethod
    def from_me_response(cls, data: Any) -> "User":
        """Decode the snake_case /oauth/me payload."""
        return cls(**cls._decode_fields(data, cls.ME_WIRE_FIELDS))

    def find_account(self, account_id: int | None) -> Account | None:
        for account in self.accounts:
            if account.id == account_id:
                return account
        return None


@dataclass
class UpdateProfileRequest(WireModel):
    first_name: str
    last_name: str
    email: str

    WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = (
        WireField("first_name", "FirstName", STR),
        WireField("last_name", "LastName", STR),
        WireField("email", "Email", STR),
    )


@dataclass
class ChangePasswordRequest(WireModel):
    current_password: str
    password: str
    confirm_password: str

    WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = (
        WireField("current_password", "CurrentPassword", STR),
        WireField("password", "Password", STR),
        WireField("confirm_password", "ConfirmPassword", STR),
    )
