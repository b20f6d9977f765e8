"""
Ledger-side DTOs: entries, contacts, categories, labels, files and
SnapClerk receipt submissions.

All of these use snake_case JSON keys.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar

from .wire import (
    FLOAT,
    INT,
    OPTIONAL_FLOAT,
    OPTIONAL_INT,
    OPTIONAL_STR,
    STR,
    ListOf,
    Nested,
    WireField,
    WireModel,
)

LEDGER_DATE_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%fZ",
    "%Y-%m-%dT%H:%M:%SZ",
    "%Y-%m-%d",
)


class LedgerType(str, Enum):
    """Filter accepted by the ledger list endpoint."""

    INCOME = "Income"
    EXPENSE = "Expense"


class StatusLevel(str, Enum):
    """Display level of a SnapClerk processing status."""

    WARNING = "warning"
    DANGER = "danger"
    SUCCESS = "success"


@dataclass
class Contact(WireModel):
    """Payee or payer referenced by ledger entries."""

    id: int = 0
    account_id: int = 0
    name: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""

    WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = (
        WireField("id", "id", INT),
        WireField("account_id", "account_id", INT),
        WireField("name", "name", STR),
        WireField("first_name", "first_name", STR),
        WireField("last_name", "last_name", STR),
        WireField("email", "email", STR),
    )

    @property
    def display_name(self) -> str:
        """Name if set, otherwise the non-empty parts of first and last name."""
        if self.name:
            return self.name
        return " ".join(part for part in (self.first_name, self.last_name) if part)


@dataclass
class Category(WireModel):
    """Income or expense category.

    The API reports the type either numerically ("1" income, "2" expense)
    or descriptively ("income", "expense"); type_label normalizes both.
    """

    id: int = 0
    account_id: int = 0
    name: str = ""
    category_type: str = ""

    WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = (
        WireField("id", "id", INT),
        WireField("account_id", "account_id", INT),
        WireField("name", "name", STR),
        WireField("category_type", "type", STR),
    )

    @property
    def type_label(self) -> str:
        if self.category_type in ("1", "income"):
            return "income"
        if self.category_type in ("2", "expense"):
            return "expense"
        return self.category_type

    @property
    def is_income(self) -> bool:
        return self.type_label == "income"

    @property
    def is_expense(self) -> bool:
        return self.type_label == "expense"


@dataclass
class LedgerLabel(WireModel):
    """Tag applied to ledger entries."""

    id: int = 0
    account_id: int = 0
    name: str = ""

    WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = (
        WireField("id", "id", INT),
        WireField("account_id", "account_id", INT),
        WireField("name", "name", STR),
    )


@dataclass
class CreateLabelRequest(WireModel):
    name: str

    WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = (WireField("name", "Name", STR),)


@dataclass
class FileModel(WireModel):
    """Uploaded file metadata as returned by the files endpoint."""

    id: int = 0
    account_id: int = 0
    name: str = ""
    file_type: str = ""
    size: int = 0
    url: str = ""
    thumb_600_by_600_url: str = ""

    WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = (
        WireField("id", "id", INT),
        WireField("account_id", "account_id", INT),
        WireField("name", "name", STR),
        WireField("file_type", "type", STR),
        WireField("size", "size", INT),
        WireField("url", "url", STR),
        WireField("thumb_600_by_600_url", "thumb_600_by_600_url", STR),
    )


@dataclass
class Ledger(WireModel):
    """A single income or expense entry.

    Expenses carry a negative amount. lat/lon are None when no location was
    recorded (0.0 on the wire).
    """

    id: int = 0
    account_id: int = 0
    date: str = ""
    amount: float = 0.0
    note: str = ""
    lat: float | None = None
    lon: float | None = None
    contact: Contact = field(default_factory=Contact)
    category: Category = field(default_factory=Category)
    labels: list[LedgerLabel] = field(default_factory=list)
    files: list[FileModel] = field(default_factory=list)

    WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = (
        WireField("id", "id", INT),
        WireField("account_id", "account_id", INT),
        WireField("date", "date", STR),
        WireField("amount", "amount", FLOAT),
        WireField("note", "note", STR),
        WireField("lat", "lat", OPTIONAL_FLOAT),
        WireField("lon", "lon", OPTIONAL_FLOAT),
        WireField("contact", "contact", Nested(Contact)),
        WireField("category", "category", Nested(Category)),
        WireField("labels", "labels", ListOf(Nested(LedgerLabel))),
        WireField("files", "files", ListOf(Nested(FileModel))),
    )

    @property
    def parsed_date(self) -> datetime | None:
        """The entry date as a UTC datetime, or None if no known format matches."""
        for fmt in LEDGER_DATE_FORMATS:
            try:
                return datetime.strptime(self.date, fmt).replace(tzinfo=timezone.utc)
            except ValueError:
                continue
        return None

    @property
    def contact_display_name(self) -> str:
        return self.contact.display_name


@dataclass
class SnapClerk(WireModel):
    """A receipt submitted for server-side OCR processing."""

    id: int = 0
    account_id: int = 0
    status: str = ""
    file: FileModel = field(default_factory=FileModel)
    # None until the server has created a ledger entry (0 on the wire)
    ledger_id: int | None = None
    amount: float = 0.0
    contact: str = ""
    category: str = ""
    labels: str = ""
    note: str = ""
    lat: str = ""
    lon: str = ""
    created_at: str = ""
    processed_at: str | None = None

    WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = (
        WireField("id", "id", INT),
        WireField("account_id", "account_id", INT),
        WireField("status", "status", STR),
        WireField("file", "file", Nested(FileModel)),
        WireField("ledger_id", "ledger_id", OPTIONAL_INT),
        WireField("amount", "amount", FLOAT),
        WireField("contact", "contact", STR),
        WireField("category", "category", STR),
        WireField("labels", "labels", STR),
        WireField("note", "note", STR),
        WireField("lat", "lat", STR),
        WireField("lon", "lon", STR),
        WireField("created_at", "created_at", STR),
        WireField("processed_at", "processed_at", OPTIONAL_STR),
    )

    @property
    def created_date(self) -> datetime | None:
        try:
            return datetime.strptime(self.created_at, "%Y-%m-%dT%H:%M:%SZ").replace(
                tzinfo=timezone.utc
            )
        except ValueError:
            return None

    @property
    def status_level(self) -> StatusLevel:
        status = self.status.lower()
        if status in ("rejected", "error"):
            return StatusLevel.DANGER
        if status in ("success", "complete"):
            return StatusLevel.SUCCESS
        return StatusLevel.WARNING
