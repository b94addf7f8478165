"""
Command line entry point.

    lumastack create-admin --email admin@example.com --username root
    lumastack serve --port 3000
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys
from typing import Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from lumastack import __version__
from lumastack.core.config import Settings, get_settings
from lumastack.core.container import ApplicationContainer
from lumastack.core.logging_config import configure_logging
from lumastack.infrastructure.database.repositories import AccountStore
from lumastack.modules.accounts import AccountError, AccountView, create_admin

logger = logging.getLogger(__name__)


class TerminalPrompter:
    """Ask for missing admin credentials on the terminal."""

    def ask_email(self) -> str:
        return input("Admin email: ").strip()

    def ask_username(self) -> str:
        return input("Admin username: ").strip()

    def ask_password(self) -> tuple[str, str]:
        password = getpass.getpass("Admin password: ")
        confirmation = getpass.getpass("Confirm password: ")
        return password, confirmation


async def run_create_admin(
    container: ApplicationContainer,
    *,
    email: Optional[str],
    username: Optional[str],
    password: Optional[str],
    interactive: bool = True,
) -> AccountView:
    await container.startup()
    try:
        return await create_admin(
            AccountStore(container.database),
            container.hasher,
            email=email,
            username=username,
            password=password,
            prompter=TerminalPrompter() if interactive else None,
        )
    finally:
        await container.shutdown()


def print_account(view: AccountView) -> None:
    print("Administrator account created")
    print(f"   ID: {view.id}")
    print(f"   Username: {view.username}")
    print(f"   Email: {view.email}")
    print(f"   Role: {view.role}")
    print(f"   Active: {view.is_active}")


def handle_create_admin(settings: Settings, args: argparse.Namespace) -> int:
    container = ApplicationContainer.from_settings(settings)
    try:
        view = asyncio.run(
            run_create_admin(
                container,
                email=args.email,
                username=args.username,
                password=args.password,
                interactive=not args.no_input,
            )
        )
    except AccountError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (SQLAlchemyError, OSError) as exc:
        logger.error("Cannot reach the database: %s", exc)
        return 2
    print_account(view)
    return 0


def handle_serve(settings: Settings, args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "lumastack.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.server.reload,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lumastack", description="LumaStack backend")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    admin_parser = subparsers.add_parser("create-admin", help="Create the administrator account")
    admin_parser.add_argument("-e", "--email", help="Administrator email")
    admin_parser.add_argument("-u", "--username", help="Administrator username")
    admin_parser.add_argument("-p", "--password", help="Administrator password")
    admin_parser.add_argument(
        "--no-input",
        action="store_true",
        help="Fail instead of prompting for missing values",
    )
    admin_parser.set_defaults(handler=handle_create_admin)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP server")
    serve_parser.add_argument("--host", help="Bind address")
    serve_parser.add_argument("--port", type=int, help="Bind port")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve_parser.set_defaults(handler=handle_serve)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings)
    return args.handler(settings, args)


if __name__ == "__main__":
    sys.exit(main())
