"""
Response payloads of the auth, report and ping endpoints.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from .wire import FLOAT, INT, STR, WireField, WireModel


class PingStatus(str, Enum):
    """Subscription state reported by the health-ping."""

    ACTIVE = "active"
    DELINQUENT = "delinquent"
    EXPIRED = "expired"
    LOGOUT = "logout"


@dataclass
class LoginResponse(WireModel):
    user_id: int
    access_token: str

    WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = (
        WireField("user_id", "user_id", INT),
        WireField("access_token", "access_token", STR),
    )


@dataclass
class RegisterResponse(WireModel):
    user_id: int
    access_token: str
    account_id: int

    WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = (
        WireField("user_id", "user_id", INT),
        WireField("access_token", "access_token", STR),
        WireField("account_id", "account_id", INT),
    )


@dataclass
class PnlCurrentYear(WireModel):
    """Net profit (positive) or loss (negative) for one calendar year."""

    year: int = 0
    value: float = 0.0

    WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = (
        WireField("year", "year", INT),
        WireField("value", "value", FLOAT),
    )


@dataclass
class PingResponse(WireModel):
    status: str

    WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = (WireField("status", "Status", STR),)

    @property
    def normalized_status(self) -> str:
        return self.status.lower()
