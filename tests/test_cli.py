"""Tests for CLI commands.

Argument parsing is checked through create_cli(); command handlers run
against a mocked server through main().
"""

import pytest
import responses
from conftest import (
    BASE_URL,
    TOKEN,
    USER_ID,
    WORKSPACE_ID,
    account_payload,
    ledger_payload,
    me_payload,
)

from skyclerk.runner.main import create_cli, main, parse_label_ids
from skyclerk.state_store import CredentialKey, CredentialStore

WORKSPACE_URL = f"{BASE_URL}/api/v3/{WORKSPACE_ID}"


class TestCLICommandRegistry:
    """Tests for CLI command registration."""

    def test_all_commands_registered(self):
        parser = create_cli()

        subparsers_action = None
        for action in parser._actions:
            if action.dest == "command":
                subparsers_action = action
                break

        assert subparsers_action is not None
        commands = set(subparsers_action.choices.keys())

        assert commands == {
            "init",
            "login",
            "register",
            "logout",
            "status",
            "account",
            "switch",
            "ledger",
            "receipts",
            "upload-receipt",
            "categories",
            "labels",
            "pnl",
            "ping",
        }

    def test_ledger_options(self):
        parser = create_cli()

        args = parser.parse_args(["ledger"])
        assert (args.page, args.type, args.search) == (1, None, None)

        args = parser.parse_args(["ledger", "--page", "3", "--type", "Income", "--search", "rent"])
        assert (args.page, args.type, args.search) == (3, "Income", "rent")

    def test_ledger_type_is_restricted(self):
        with pytest.raises(SystemExit):
            create_cli().parse_args(["ledger", "--type", "Transfer"])

    def test_upload_receipt_options(self):
        args = create_cli().parse_args(
            ["upload-receipt", "r.jpg", "--note", "lunch", "--category", "3", "--labels", "1,2",
             "--lat", "47.07"]
        )
        assert args.path.name == "r.jpg"
        assert args.category == 3
        assert args.lat == 47.07
        assert args.lon == 0.0

    def test_switch_requires_numeric_id(self):
        assert create_cli().parse_args(["switch", "43"]).account_id == 43
        with pytest.raises(SystemExit):
            create_cli().parse_args(["switch", "side-project"])

    def test_login_requires_email(self):
        with pytest.raises(SystemExit):
            create_cli().parse_args(["login"])

    def test_parse_label_ids(self):
        assert parse_label_ids("") == []
        assert parse_label_ids("1, 2,3,") == [1, 2, 3]


class TestCLICommands:
    @pytest.fixture
    def config_path(self, tmp_path, monkeypatch):
        for name in ("SKYCLERK_URL", "SKYCLERK_CLIENT_ID", "SKYCLERK_STATE_DB"):
            monkeypatch.delenv(name, raising=False)
        path = tmp_path / "config.yaml"
        path.write_text(
            f"""
server:
  base_url: "{BASE_URL}"
  client_id: "cli-test"
state_db_path: "{tmp_path / 'state.db'}"
"""
        )
        return path

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage:" in capsys.readouterr().out

    def test_init_writes_config(self, tmp_path):
        path = tmp_path / "new.yaml"
        assert main(["-c", str(path), "init"]) == 0
        assert path.exists()
        # refuses to overwrite
        assert main(["-c", str(path), "init"]) == 1

    def test_status_when_logged_out(self, config_path, capsys):
        assert main(["-c", str(config_path), "status"]) == 0
        assert "Authenticated:     no" in capsys.readouterr().out

    def test_ledger_requires_login(self, config_path, capsys):
        assert main(["-c", str(config_path), "ledger"]) == 1
        assert "Not authenticated. Please log in." in capsys.readouterr().out

    @responses.activate
    def test_login_persists_session(self, config_path, capsys):
        responses.add(
            responses.POST,
            f"{BASE_URL}/oauth/token",
            json={"user_id": 7, "access_token": "cli-token"},
        )
        responses.add(responses.GET, f"{BASE_URL}/oauth/me", json=me_payload())
        responses.add(
            responses.GET,
            f"{WORKSPACE_URL}/ledger",
            json=[ledger_payload()],
            headers={"X-Last-Page": "true"},
        )

        assert main(["-c", str(config_path), "login", "--email", "jane@example.com",
                     "--password", "pw"]) == 0
        assert main(["-c", str(config_path), "ledger"]) == 0

        out = capsys.readouterr().out
        assert "Logged in as jane@example.com" in out
        assert "Blue Bottle Coffee" in out
        assert "(last page)" in out
        assert responses.calls[2].request.headers["Authorization"] == "Bearer cli-token"

        assert main(["-c", str(config_path), "logout"]) == 0
        assert main(["-c", str(config_path), "ledger"]) == 1

    @responses.activate
    def test_api_error_is_printed(self, config_path, capsys):
        responses.add(
            responses.POST, f"{BASE_URL}/oauth/token", body="invalid credentials", status=401
        )

        code = main(["-c", str(config_path), "login", "--email", "jane@example.com",
                     "--password", "wrong"])

        assert code == 1
        assert "HTTP Error 401: invalid credentials" in capsys.readouterr().out

    def test_upload_missing_file(self, config_path, tmp_path, capsys):
        code = main(["-c", str(config_path), "upload-receipt", str(tmp_path / "none.jpg")])

        assert code == 1
        assert "File not found" in capsys.readouterr().out

    @pytest.fixture
    def logged_in(self, tmp_path):
        store = CredentialStore(tmp_path / "state.db")
        store.set(CredentialKey.ACCESS_TOKEN, TOKEN)
        store.set(CredentialKey.USER_ID, USER_ID)
        store.set(CredentialKey.ACCOUNT_ID, WORKSPACE_ID)
        return store

    @responses.activate
    def test_account_shows_profile_and_billing(self, config_path, logged_in, capsys):
        responses.add(responses.GET, f"{BASE_URL}/oauth/me", json=me_payload())
        responses.add(responses.GET, f"{WORKSPACE_URL}/account", json=account_payload())
        responses.add(
            responses.GET,
            f"{WORKSPACE_URL}/account/billing",
            json={
                "id": WORKSPACE_ID,
                "subscription": "Monthly",
                "status": "Trial",
                "payment_processor": "stripe",
                "trial_expire": "2024-12-31T00:00:00Z",
                "card_brand": "",
                "card_last_4": "",
                "card_exp_month": 0,
                "card_exp_year": 0,
                "current_period_start": "",
                "current_period_end": "",
            },
        )

        assert main(["-c", str(config_path), "account"]) == 0

        out = capsys.readouterr().out
        assert "Jane Doe <jane@example.com>" in out
        assert f"* [{WORKSPACE_ID}] Jane's Bakery" in out
        assert "  [43] Side Project" in out
        assert "Monthly (Trial)" in out
        assert "Trial ends:    2024-12-31T00:00:00Z" in out
        assert "Card:" not in out

    @responses.activate
    def test_switch_changes_active_workspace(self, config_path, logged_in, capsys):
        responses.add(responses.GET, f"{BASE_URL}/oauth/me", json=me_payload())

        assert main(["-c", str(config_path), "switch", "43"]) == 0
        assert logged_in.get(CredentialKey.ACCOUNT_ID) == "43"

        assert main(["-c", str(config_path), "status"]) == 0
        out = capsys.readouterr().out
        assert "Switched to [43] Side Project" in out
        assert "Active workspace:  43" in out

    @responses.activate
    def test_switch_to_foreign_workspace_refused(self, config_path, logged_in, capsys):
        responses.add(responses.GET, f"{BASE_URL}/oauth/me", json=me_payload())

        assert main(["-c", str(config_path), "switch", "99"]) == 1
        assert "Workspace 99 is not available" in capsys.readouterr().out
        assert logged_in.get(CredentialKey.ACCOUNT_ID) == str(WORKSPACE_ID)
