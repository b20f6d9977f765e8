"""
CLI main entry point.
"""

import argparse
import getpass
import logging
import sys
from pathlib import Path

from ..api_client import SkyclerkError
from ..app import SkyclerkApp, create_app
from ..config import Config, ConfigValidationError, create_default_config, load_config
from ..schemas import LedgerType

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_cli() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="skyclerk",
        description="Command-line client for the Skyclerk bookkeeping API",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("config.yaml"),
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("init", help="Write a default config file")

    # login command
    login_parser = subparsers.add_parser("login", help="Log in with email and password")
    login_parser.add_argument("--email", type=str, required=True, help="Account email")
    login_parser.add_argument(
        "--password",
        type=str,
        help="Password (prompted if omitted)",
    )

    # register command
    register_parser = subparsers.add_parser(
        "register", help="Create a user and workspace, then log in"
    )
    register_parser.add_argument("--email", type=str, required=True, help="Account email")
    register_parser.add_argument("--first", type=str, required=True, help="First name")
    register_parser.add_argument("--last", type=str, required=True, help="Last name")
    register_parser.add_argument(
        "--password",
        type=str,
        help="Password (prompted if omitted)",
    )

    subparsers.add_parser("logout", help="Forget the stored session")
    subparsers.add_parser("status", help="Show the stored session")
    subparsers.add_parser("account", help="Show the profile, active workspace and billing")

    # switch command
    switch_parser = subparsers.add_parser("switch", help="Select another workspace")
    switch_parser.add_argument("account_id", type=int, help="Workspace id to activate")

    # ledger command
    ledger_parser = subparsers.add_parser("ledger", help="List ledger entries")
    ledger_parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="Page number (default: 1)",
    )
    ledger_parser.add_argument(
        "--type",
        type=str,
        choices=[t.value for t in LedgerType],
        help="Only show Income or Expense entries",
    )
    ledger_parser.add_argument(
        "--search",
        type=str,
        help="Text filter (contact, note, category)",
    )

    # receipts command
    receipts_parser = subparsers.add_parser("receipts", help="List SnapClerk receipt submissions")
    receipts_parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="Page number (default: 1)",
    )

    # upload-receipt command
    upload_parser = subparsers.add_parser(
        "upload-receipt", help="Submit a receipt photo for processing"
    )
    upload_parser.add_argument("path", type=Path, help="JPEG file to upload")
    upload_parser.add_argument("--note", type=str, default="", help="Free-text note")
    upload_parser.add_argument(
        "--category",
        type=int,
        help="Category id to pre-assign",
    )
    upload_parser.add_argument(
        "--labels",
        type=str,
        default="",
        help="Comma-separated label ids",
    )
    upload_parser.add_argument("--lat", type=float, default=0.0, help="Latitude")
    upload_parser.add_argument("--lon", type=float, default=0.0, help="Longitude")

    subparsers.add_parser("categories", help="List categories")
    subparsers.add_parser("labels", help="List labels")
    subparsers.add_parser("pnl", help="Show profit and loss for the current year")
    subparsers.add_parser("ping", help="Check the subscription status once")

    return parser


def parse_label_ids(raw: str) -> list[int]:
    """Parse "1, 2,3" into [1, 2, 3]; empty input gives []."""
    return [int(part) for part in raw.split(",") if part.strip()]


def cmd_init(config_path: Path) -> int:
    """Write a default config file."""
    if config_path.exists():
        print(f"❌ {config_path} already exists")
        return 1
    create_default_config(config_path)
    print(f"✓ Wrote {config_path}")
    return 0


def cmd_login(app: SkyclerkApp, email: str, password: str | None) -> int:
    """Log in and select the first workspace."""
    if not app.config.server.client_id:
        print("❌ server.client_id is not configured")
        return 1

    password = password if password is not None else getpass.getpass("Password: ")
    user = app.auth.login(email, password)

    print(f"✓ Logged in as {user.email} (user {user.id})")
    for account in user.accounts:
        marker = "*" if account.id == app.session.active_workspace_id else " "
        print(f"  {marker} [{account.id}] {account.name} ({account.currency})")
    return 0


def cmd_register(
    app: SkyclerkApp, email: str, first: str, last: str, password: str | None
) -> int:
    """Register a new user and workspace."""
    if not app.config.server.client_id:
        print("❌ server.client_id is not configured")
        return 1

    password = password if password is not None else getpass.getpass("Password: ")
    response = app.auth.register(email, password, first, last)

    print(f"✓ Registered user {response.user_id} with workspace {response.account_id}")
    return 0


def cmd_logout(app: SkyclerkApp) -> int:
    app.auth.logout()
    print("✓ Logged out")
    return 0


def cmd_status(app: SkyclerkApp) -> int:
    """Show the stored session."""
    snapshot = app.session.snapshot()

    print("\n🔐 Session")
    print("=" * 40)
    print(f"  Server:            {app.config.server.base_url}")
    print(f"  Authenticated:     {'yes' if snapshot.is_authenticated else 'no'}")
    print(f"  User:              {snapshot.user_email or '-'} ({snapshot.user_id or '-'})")
    print(f"  Active workspace:  {snapshot.active_workspace_id or '-'}")
    print()
    return 0


def cmd_account(app: SkyclerkApp) -> int:
    """Show the profile, the active workspace and its billing."""
    user = app.me.get_me()
    account = app.accounts.get_account()
    billing = app.accounts.get_billing()

    print(f"\n👤 {user.first_name} {user.last_name} <{user.email}>")
    print("=" * 40)
    for workspace in user.accounts:
        marker = "*" if workspace.id == account.id else " "
        print(f"  {marker} [{workspace.id}] {workspace.name}")

    print(f"\n  Workspace:     {account.name} ({account.currency}, {account.locale})")
    print(f"  Subscription:  {billing.subscription or '-'} ({billing.status or '-'})")
    if billing.trial_expire:
        print(f"  Trial ends:    {billing.trial_expire}")
    if billing.card_last_4:
        print(f"  Card:          {billing.card_brand} ending {billing.card_last_4}")
    print()
    return 0


def cmd_switch(app: SkyclerkApp, account_id: int) -> int:
    """Activate another workspace the user belongs to."""
    user = app.me.get_me()
    account = user.find_account(account_id)
    if account is None:
        print(f"❌ Workspace {account_id} is not available to {user.email}")
        return 1

    app.auth.switch_workspace(account.id)
    print(f"✓ Switched to [{account.id}] {account.name}")
    return 0


def cmd_ledger(app: SkyclerkApp, page: int, type: str | None, search: str | None) -> int:
    """List one page of ledger entries."""
    result = app.ledgers.get_ledgers(page, type=type, search=search)

    for ledger in result.items:
        print(
            f"  [{ledger.id}] {ledger.date[:10]}  {ledger.amount:>12.2f}  "
            f"{ledger.contact_display_name:<30}  {ledger.category.name}"
        )

    suffix = " (last page)" if result.is_last_page else ""
    print(f"\n✓ {len(result.items)} entry(ies) on page {page}{suffix}")
    return 0


def cmd_receipts(app: SkyclerkApp, page: int) -> int:
    """List one page of SnapClerk submissions."""
    result = app.snapclerks.get_snapclerks(page)

    for snapclerk in result.items:
        print(
            f"  [{snapclerk.id}] {snapclerk.created_at}  {snapclerk.status:<12} "
            f"{snapclerk.note}"
        )

    suffix = " (last page)" if result.is_last_page else ""
    print(f"\n✓ {len(result.items)} receipt(s) on page {page}{suffix}")
    return 0


def cmd_upload_receipt(
    app: SkyclerkApp,
    path: Path,
    note: str,
    category: int | None,
    labels: list[int],
    lat: float,
    lon: float,
) -> int:
    """Upload a receipt photo."""
    if not path.is_file():
        print(f"❌ File not found: {path}")
        return 1

    print(f"📤 Uploading {path.name}...")
    app.snapclerks.upload_receipt(
        path.read_bytes(),
        note=note,
        category_id=category,
        label_ids=labels,
        lat=lat,
        lon=lon,
    )
    print("✓ Receipt submitted")
    return 0


def cmd_categories(app: SkyclerkApp) -> int:
    for category in app.categories.get_categories():
        print(f"  [{category.id}] {category.name} ({category.type_label})")
    return 0


def cmd_labels(app: SkyclerkApp) -> int:
    for label in app.labels.get_labels():
        print(f"  [{label.id}] {label.name}")
    return 0


def cmd_pnl(app: SkyclerkApp) -> int:
    pnl = app.reports.get_pnl_current_year()
    print(f"  {pnl.year}: {pnl.value:.2f}")
    return 0


def cmd_ping(app: SkyclerkApp) -> int:
    """Run one health-ping tick and report the flags."""
    status = app.ping.ping()
    if status is None:
        print("❌ Ping failed")
        return 1

    print(f"  Status:        {status}")
    print(f"  Paywall:       {'yes' if app.ping.should_show_paywall else 'no'}")
    print(f"  Forced logout: {'yes' if app.ping.should_logout else 'no'}")
    return 0


def run_command(app: SkyclerkApp, parsed: argparse.Namespace) -> int:
    """Route a parsed command to its handler."""
    if parsed.command == "login":
        return cmd_login(app, parsed.email, parsed.password)
    elif parsed.command == "register":
        return cmd_register(app, parsed.email, parsed.first, parsed.last, parsed.password)
    elif parsed.command == "logout":
        return cmd_logout(app)
    elif parsed.command == "status":
        return cmd_status(app)
    elif parsed.command == "account":
        return cmd_account(app)
    elif parsed.command == "switch":
        return cmd_switch(app, parsed.account_id)
    elif parsed.command == "ledger":
        return cmd_ledger(app, parsed.page, parsed.type, parsed.search)
    elif parsed.command == "receipts":
        return cmd_receipts(app, parsed.page)
    elif parsed.command == "upload-receipt":
        return cmd_upload_receipt(
            app,
            parsed.path,
            parsed.note,
            parsed.category,
            parse_label_ids(parsed.labels),
            parsed.lat,
            parsed.lon,
        )
    elif parsed.command == "categories":
        return cmd_categories(app)
    elif parsed.command == "labels":
        return cmd_labels(app)
    elif parsed.command == "pnl":
        return cmd_pnl(app)
    elif parsed.command == "ping":
        return cmd_ping(app)
    return 1


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_cli()
    parsed = parser.parse_args(args)

    setup_logging(parsed.verbose)

    if not parsed.command:
        parser.print_help()
        return 1

    if parsed.command == "init":
        return cmd_init(parsed.config)

    # Load config
    try:
        config: Config = load_config(parsed.config)
        app = create_app(config)
    except (ConfigValidationError, OSError, ValueError) as e:
        print(f"❌ Failed to load config: {e}")
        return 1

    with app:
        try:
            return run_command(app, parsed)
        except ValueError as e:
            print(f"❌ Invalid argument: {e}")
            return 1
        except SkyclerkError as e:
            logger.debug(f"Command {parsed.command} failed", exc_info=True)
            print(f"❌ {e}")
            return 1


if __name__ == "__main__":
    sys.exit(main())
