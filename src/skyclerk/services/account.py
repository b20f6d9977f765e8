"""
Account, profile and report services.
"""

import logging

from ..api_client import SkyclerkClient
from ..schemas import (
    Account,
    Billing,
    ChangePasswordRequest,
    PnlCurrentYear,
    UpdateProfileRequest,
    User,
)

logger = logging.getLogger(__name__)


class AccountService:
    """Settings, deletion and billing of the active workspace."""

    def __init__(self, client: SkyclerkClient):
        self.client = client

    def get_account(self) -> Account:
        return self.client.get(
            self.client.workspace_url("account"), decoder=Account.from_api_response
        )

    def update_account(self, account: Account) -> Account:
        """Save name, currency and locale; returns the account as stored."""
        return self.client.put(
            self.client.workspace_url("account"), account, decoder=Account.from_api_response
        )

    def delete_account(self) -> None:
        """Permanently delete the workspace and all of its data."""
        self.client.post_empty(self.client.workspace_url("account/delete"))
        logger.warning(f"Deleted workspace {self.client.session.active_workspace_id}")

    def get_billing(self) -> Billing:
        return self.client.get(
            self.client.workspace_url("account/billing"), decoder=Billing.from_api_response
        )


class MeService:
    """The authenticated user's profile."""

    def __init__(self, client: SkyclerkClient):
        self.client = client

    def get_me(self) -> User:
        """Fetch the profile and workspace list from /oauth/me (snake_case payload)."""
        return self.client.get(
            self.client.server_url("oauth/me"), decoder=User.from_me_response
        )

    def update_profile(self, first_name: str, last_name: str, email: str) -> User:
        body = UpdateProfileRequest(first_name=first_name, last_name=last_name, email=email)
        return self.client.put(
            self.client.workspace_url("me"), body, decoder=User.from_api_response
        )

    def change_password(
        self, current_password: str, new_password: str, confirm_password: str
    ) -> None:
        body = ChangePasswordRequest(
            current_password=current_password,
            password=new_password,
            confirm_password=confirm_password,
        )
        self.client.post(self.client.workspace_url("me/change-password"), body)


class ReportService:
    def __init__(self, client: SkyclerkClient):
        self.client = client

    def get_pnl_current_year(self) -> PnlCurrentYear:
        """Profit and loss for the current calendar year."""
        return self.client.get(
            self.client.workspace_url("reports/pnl-current-year"),
            decoder=PnlCurrentYear.from_api_response,
        )
