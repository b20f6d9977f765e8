"""
Authentication, registration and workspace selection.
"""

import logging

from ..api_client import SkyclerkClient
from ..schemas import Account, LoginResponse, RegisterResponse, User
from ..session import Session
from .account import MeService
from .ping import PingService

logger = logging.getLogger(__name__)


class AuthService:
    """
    Login / register / logout against the OAuth endpoints.

    Login uses the OAuth password grant, then reads /oauth/me to find the
    user's workspaces because the token endpoint does not return one.
    """

    def __init__(
        self,
        client: SkyclerkClient,
        session: Session,
        me_service: MeService,
        client_id: str,
        ping_service: PingService | None = None,
    ):
        self.client = client
        self.session = session
        self.me_service = me_service
        self.client_id = client_id
        self.ping_service = ping_service

    def is_authenticated(self) -> bool:
        return self.session.is_authenticated()

    def login(self, email: str, password: str) -> User:
        """
        Log in with email and password.

        Stores the credentials, then selects the first workspace of the user.

        Returns:
            The user profile with its workspace list

        Raises:
            SkyclerkAPIError: Invalid credentials or server error
        """
        params = {
            "grant_type": "password",
            "username": email,
            "password": password,
            "client_id": self.client_id,
        }
        response = self.client.post_form(
            self.client.server_url("oauth/token"),
            params,
            decoder=LoginResponse.from_api_response,
        )
        self.session.set_credentials(response.access_token, response.user_id, email)

        user = self.me_service.get_me()
        if user.accounts:
            self.session.set_active_workspace(user.accounts[0].id)
        else:
            logger.warning(f"User {response.user_id} has no workspaces")

        return user

    def register(
        self, email: str, password: str, first_name: str, last_name: str
    ) -> RegisterResponse:
        """Create a user and workspace; the new user is logged in immediately."""
        params = {
            "email": email,
            "password": password,
            "first": first_name,
            "last": last_name,
            "client_id": self.client_id,
            "token": "",
        }
        response = self.client.post_form(
            self.client.server_url("register"),
            params,
            decoder=RegisterResponse.from_api_response,
        )
        self.session.set_credentials(response.access_token, response.user_id, email)
        self.session.set_active_workspace(response.account_id)
        return response

    def logout(self) -> None:
        """Clear the session and stop background pinging."""
        self.session.clear()
        if self.ping_service is not None:
            self.ping_service.stop()

    def resolve_workspace(self, user: User) -> Account | None:
        """
        Pick the workspace to use for this user.

        Keeps the stored workspace if the user still belongs to it, otherwise
        falls back to the first one.
        """
        account = user.find_account(self.session.active_workspace_id)
        if account is None and user.accounts:
            account = user.accounts[0]
        if account is not None:
            self.session.set_active_workspace(account.id)
        return account

    def switch_workspace(self, account_id: int) -> None:
        self.session.set_active_workspace(account_id)
        logger.info(f"Switched to workspace {account_id}")
