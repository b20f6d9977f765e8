"""Workspace-scoped resource services built on the API client."""

from .account import AccountService, MeService, ReportService
from .auth import AuthService
from .directory import CategoryService, ContactService, LabelService
from .ledger import LedgerService
from .ping import PingService
from .uploads import FileService, SnapClerkService, mime_type_for_extension

__all__ = [
    "AccountService",
    "AuthService",
    "CategoryService",
    "ContactService",
    "FileService",
    "LabelService",
    "LedgerService",
    "MeService",
    "PingService",
    "ReportService",
    "SnapClerkService",
    "mime_type_for_extension",
]
