"""Command line entry point.

Usage:
    python -m accountauth generate [--words 12|24]
    python -m accountauth validate            (phrase on stdin)
    python -m accountauth login --device NAME [--backend-url URL] [--keep]

Any command accepts --log-dir DIR (before the command) for file logging.

The phrase is read from stdin (or prompted for without echo), never from argv.
"""

import argparse
import asyncio
import getpass
import logging
import sys

from .config import AuthConfig
from .crypto import generate_mnemonic, validate_mnemonic
from .errors import AuthError
from .lifecycle import SessionLifecycle
from .logging import get_logger, setup_logging
from .models import LoginData

logger = get_logger("cli", console_level=logging.INFO)

WORDS_TO_STRENGTH = {12: 128, 15: 160, 18: 192, 21: 224, 24: 256}


def _read_phrase() -> str:
    if sys.stdin.isatty():
        return getpass.getpass("Mnemonic: ")
    return sys.stdin.readline()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="accountauth", description="Account service authentication")
    parser.add_argument("--log-dir", default=None, help="Also write debug logs to this directory")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate a new mnemonic")
    gen.add_argument("--words", type=int, choices=sorted(WORDS_TO_STRENGTH), default=12)

    sub.add_parser("validate", help="Validate a mnemonic read from stdin")

    login = sub.add_parser("login", help="Log in with a mnemonic read from stdin")
    login.add_argument("--device", required=True, help="Device name stored (encrypted) with the session")
    login.add_argument("--backend-url", default="", help="Account service URL")
    login.add_argument("--keep", action="store_true", help="Do not revoke the session afterwards")

    return parser.parse_args(argv)


async def run_login(args: argparse.Namespace) -> int:
    lifecycle = SessionLifecycle.from_config(AuthConfig(backend_url=args.backend_url))
    try:
        session = await lifecycle.login(LoginData(mnemonic=_read_phrase(), device=args.device))
        print(f"user_id={session.user_id} session_id={session.session_id}")
        if not args.keep:
            await lifecycle.logout()
        return 0
    except AuthError as e:
        logger.error(f"Login failed: {type(e).__name__}: {e}")
        return 1
    finally:
        await lifecycle.close()


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.log_dir:
        setup_logging(args.log_dir)

    if args.command == "generate":
        print(generate_mnemonic(WORDS_TO_STRENGTH[args.words]))
        return 0
    if args.command == "validate":
        valid = validate_mnemonic(_read_phrase())
        print("valid" if valid else "invalid")
        return 0 if valid else 1
    return asyncio.run(run_login(args))


if __name__ == "__main__":
    sys.exit(main())
