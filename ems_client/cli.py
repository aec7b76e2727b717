"""Command-line client.

Usage:
    ems-client login -u alice              # prompts for the password
    ems-client whoami
    ems-client documents --expiry expiring30
    ems-client notifications
    ems-client logout

The session is kept in ``SESSION_FILE`` so a login persists between runs.
"""

import argparse
import asyncio
import getpass
import sys
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from ems_client.auth.views import LoginView
from ems_client.common.constants import ExpiryFilter
from ems_client.config import Settings
from ems_client.documents.views import DocumentListView, document_type_label
from ems_client.main import EmsApp, configure_logging, create_app
from ems_client.notifications.views import NotificationDropdownView, icon_for, time_ago

# Working directory first, then the per-user config directory
ENV_FILES = [Path.cwd() / ".env", Path.home() / ".ems_client" / ".env"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ems-client", description="Employee Management System client")
    parser.add_argument("--log-level", type=str, help="Override LOG_LEVEL for this run")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Sign in and store the session")
    login.add_argument("-u", "--username", required=True)
    login.add_argument("-p", "--password", help="Password (prompted when omitted)")

    sub.add_parser("logout", help="Clear the stored session")
    sub.add_parser("whoami", help="Show the signed-in user")

    documents = sub.add_parser("documents", help="List documents with their expiry status")
    documents.add_argument(
        "--expiry",
        choices=[f.value for f in ExpiryFilter],
        default=ExpiryFilter.all.value,
        help="Expiry filter (default: all)",
    )
    documents.add_argument("--employee", type=int, help="Only this employee's documents")

    sub.add_parser("notifications", help="Show recent notifications")
    return parser


async def _login(app: EmsApp, args: argparse.Namespace) -> int:
    password = args.password if args.password is not None else getpass.getpass("Password: ")
    view = LoginView(app.auth)
    route = await view.submit(args.username, password)
    if route is None:
        print(f"❌ {view.error}")
        return 1
    user = app.session.user
    print(f"✅ Logged in as {user.username} ({', '.join(user.roles)})")
    print(f"   Next screen: {route.value}")
    return 0


def _logout(app: EmsApp, args: argparse.Namespace) -> int:
    if not app.session.is_logged_in:
        print("Not logged in.")
        return 0
    app.auth.logout()
    print("Logged out.")
    return 0


def _whoami(app: EmsApp, args: argparse.Namespace) -> int:
    user = app.session.user
    if not app.session.is_logged_in or user is None:
        print("Not logged in.")
        return 1
    print(f"{'Username':<16} {user.username}")
    print(f"{'Email':<16} {user.email}")
    print(f"{'Roles':<16} {', '.join(user.roles)}")
    print(f"{'Organization':<16} {user.organization_uuid or '-'}")
    print(f"{'Employee':<16} {user.employee_id if user.employee_id is not None else '-'}")
    return 0


async def _documents(app: EmsApp, args: argparse.Namespace) -> int:
    view = DocumentListView(app.documents)
    view.set_expiry_filter(args.expiry)
    await view.load(args.employee)
    if view.error:
        print(f"❌ {view.error}")
        return 1

    rows = view.filtered_documents
    print(f"{view.expiry_filter_label} ({len(rows)})")
    print(f"\n{'ID':<6} {'Type':<22} {'Number':<18} {'Expiry':<12} {'Status'}")
    print("-" * 80)
    for doc in rows:
        print(
            f"{doc.id!s:<6} {document_type_label(doc.document_type):<22} "
            f"{doc.document_number or '-':<18} {doc.expiry_date or '-':<12} {view.expiry(doc).text}"
        )
    return 0


async def _notifications(app: EmsApp, args: argparse.Namespace) -> int:
    view = NotificationDropdownView(app.notifications)
    await view.load()
    if not view.error:
        await view.refresh_count()
    if view.error:
        print(f"❌ {view.error}")
        return 1
    print(f"Unread: {view.unread_count}")
    for item in view.notifications:
        marker = " " if item.is_read else "•"
        print(f" {marker} {icon_for(item.type)} {item.title} — {time_ago(item.created_at)}")
    return 0


async def run(app: EmsApp, args: argparse.Namespace) -> int:
    """Execute one parsed command inside the app's lifespan."""
    async with app.lifespan():
        if args.command == "login":
            return await _login(app, args)
        if args.command == "logout":
            return _logout(app, args)
        if args.command == "whoami":
            return _whoami(app, args)

        if not app.session.is_logged_in:
            print("Not logged in. Run `ems-client login` first.")
            return 1
        if args.command == "documents":
            return await _documents(app, args)
        return await _notifications(app, args)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    for env_path in ENV_FILES:
        if env_path.exists():
            load_dotenv(env_path)
    settings = Settings()
    configure_logging(args.log_level or settings.LOG_LEVEL)
    return asyncio.run(run(create_app(settings), args))


if __name__ == "__main__":
    sys.exit(main())
