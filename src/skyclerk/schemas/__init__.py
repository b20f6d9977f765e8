"""
Data schemas for the Skyclerk API.

Provides:
- Wire mapping (explicit key tables, strict decoding, sentinel handling)
- Ledger, contact, category, label, file and SnapClerk DTOs
- Account, billing and user DTOs
- Auth, report and ping response payloads
"""

from .account import (
    Account,
    Billing,
    ChangePasswordRequest,
    UpdateProfileRequest,
    User,
)
from .ledger import (
    Category,
    Contact,
    CreateLabelRequest,
    FileModel,
    Ledger,
    LedgerLabel,
    LedgerType,
    SnapClerk,
    StatusLevel,
)
from .responses import (
    LoginResponse,
    PingResponse,
    PingStatus,
    PnlCurrentYear,
    RegisterResponse,
)
from .wire import WireField, WireModel, list_of

__all__ = [
    # Wire mapping
    "WireField",
    "WireModel",
    "list_of",
    # Ledger side
    "Category",
    "Contact",
    "CreateLabelRequest",
    "FileModel",
    "Ledger",
    "LedgerLabel",
    "LedgerType",
    "SnapClerk",
    "StatusLevel",
    # Accounts
    "Account",
    "Billing",
    "ChangePasswordRequest",
    "UpdateProfileRequest",
    "User",
    # Responses
    "LoginResponse",
    "PingResponse",
    "PingStatus",
    "PnlCurrentYear",
    "RegisterResponse",
]
