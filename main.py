#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py login --email EMAIL [--password PASSWORD]
    python main.py register --email EMAIL [--password PASSWORD]
    python main.py play [--difficulty {easy,medium,hard}]
    python main.py whoami
    python main.py logout
"""
import argparse
import getpass
import logging
import sys
from pathlib import Path

from src.minesweeper.auth import (
    AuthError,
    CookieJar,
    LOGIN_PATH,
    HOME_PATH,
    MockSession,
    resolve_route,
)
from src.minesweeper.board import Difficulty
from src.minesweeper.console import HELP_TEXT, play as play_console
from src.minesweeper.engine import GameEngine


DEFAULT_COOKIE_FILE = Path.home() / ".minesweeper" / "cookies.json"


def _session(args: argparse.Namespace) -> MockSession:
    return MockSession(CookieJar(args.cookie_file))


def play(args: argparse.Namespace) -> int:
    """Start an interactive game if a session is active."""
    session = _session(args)
    if resolve_route(HOME_PATH, session.is_active()) == LOGIN_PATH:
        print("Not logged in. Run `python main.py login` first.")
        return 1

    print(f"Welcome back, {session.identity()}!")
    print(HELP_TEXT)
    engine = GameEngine(Difficulty(args.difficulty))
    play_console(engine)
    return 0


def login(args: argparse.Namespace) -> int:
    """Store a mock session cookie after checking the form input."""
    session = _session(args)
    if resolve_route(LOGIN_PATH, session.is_active()) == HOME_PATH:
        print(f"Already logged in as {session.identity()}.")
        return 0

    password = args.password
    if password is None:
        password = getpass.getpass("Password: ")
    try:
        session.login(args.email, password)
    except AuthError as error:
        print(error)
        return 1
    print(f"Logged in as {args.email}.")
    return 0


def register(args: argparse.Namespace) -> int:
    """Register (mock) and log in."""
    session = _session(args)
    password = args.password
    if password is None:
        password = getpass.getpass("Password: ")
        confirm = getpass.getpass("Confirm password: ")
    else:
        confirm = password
    try:
        session.register(args.email, password, confirm)
    except AuthError as error:
        print(error)
        return 1
    print(f"Registered and logged in as {args.email}.")
    return 0


def logout(args: argparse.Namespace) -> int:
    _session(args).logout()
    print("Logged out.")
    return 0


def whoami(args: argparse.Namespace) -> int:
    identity = _session(args).identity()
    print(identity or "Not logged in.")
    return 0 if identity else 1


def main() -> int:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper in the terminal")
    parser.add_argument(
        "--cookie-file",
        type=Path,
        default=DEFAULT_COOKIE_FILE,
        help="Where the login cookie is kept",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game")
    play_parser.add_argument(
        "--difficulty",
        choices=[difficulty.value for difficulty in Difficulty],
        default=Difficulty.EASY.value,
        help="Board preset",
    )

    # Login / register commands
    for name, help_text in (
        ("login", "Log in (mock session)"),
        ("register", "Register and log in (mock session)"),
    ):
        auth_parser = subparsers.add_parser(name, help=help_text)
        auth_parser.add_argument("--email", required=True, help="Player email")
        auth_parser.add_argument(
            "--password", default=None, help="Password (prompted if omitted)"
        )

    subparsers.add_parser("logout", help="Remove the session cookie")
    subparsers.add_parser("whoami", help="Show the logged-in player")

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    commands = {
        "play": play,
        "login": login,
        "register": register,
        "logout": logout,
        "whoami": whoami,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return 2
    return command(args)


if __name__ == "__main__":
    sys.exit(main())
