"""Operator CLI over the client.

The token slot persists between invocations, so `login` in one run is restored
by the next. Results go to stdout as JSON; logs go to stderr.
"""
from __future__ import annotations

import argparse
import asyncio
import getpass
import json
import sys
from typing import Any

from .client import LeagueClient
from .domain.phases import phase_label
from .errors import ClientError
from .logging_conf import get_logger, setup_logging
from .settings import ClientSettings

logger = get_logger("league_client.cli")


def parse_args(argv: list[str], settings: ClientSettings) -> argparse.Namespace:
    """Parse CLI arguments; defaults come from LEAGUE_* settings."""
    parser = argparse.ArgumentParser(prog="league-client", description="League game service client")
    parser.add_argument("--base-url", default=settings.base_url)
    parser.add_argument("--token-path", default=str(settings.token_path))
    parser.add_argument("--log-level", default=settings.log_level)

    sub = parser.add_subparsers(dest="command", required=True)
    login = sub.add_parser("login", help="start a session and persist its token")
    login.add_argument("--username", required=True)
    login.add_argument("--password", help="prompted for when omitted")
    sub.add_parser("logout", help="forget the persisted session")
    sub.add_parser("whoami", help="show the profile of the persisted session")
    sub.add_parser("phase", help="show the current season phase")
    return parser.parse_args(argv)


def _emit(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2, default=str))


async def run(args: argparse.Namespace) -> int:
    settings = ClientSettings(base_url=args.base_url, token_path=args.token_path)
    async with LeagueClient(settings) as client:
        if args.command == "login":
            password = args.password or getpass.getpass("password: ")
            user = await client.session.login({"username": args.username, "password": password})
            _emit(user.model_dump())
        elif args.command == "logout":
            client.session.logout()
            _emit({"authenticated": False})
        elif args.command == "whoami":
            user = client.session.user
            if user is None:
                _emit({"authenticated": False})
                return 1
            _emit({**user.model_dump(), "remaining_space": user.remaining_space})
        elif args.command == "phase":
            phase = await client.game.get_phase()
            current = phase.get("current_phase") if isinstance(phase, dict) else None
            _emit({"phase": phase, "label": phase_label(current) if current else None})
    return 0


def main(argv: list[str] | None = None) -> None:
    settings = ClientSettings()
    args = parse_args(sys.argv[1:] if argv is None else argv, settings)
    setup_logging(args.log_level)
    try:
        code = asyncio.run(run(args))
    except ClientError as e:
        logger.error("cli.failed", extra={"event": "cli_failed", "code": e.code, "error": str(e)})
        code = 1
    raise SystemExit(code)


if __name__ == "__main__":
    main()
