"""
Command line entry point.

Every option can also be set through an environment variable, which suits CI
workflows where the key and passphrase are injected as secrets.
"""

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

import structlog

from gpg_import import __version__
from gpg_import.backends.git import Git
from gpg_import.backends.gnupg_backend import GnupgKeyTool
from gpg_import.config import MAX_TRUST_LEVEL, MIN_TRUST_LEVEL, ImportConfig
from gpg_import.exceptions import GpgImportError
from gpg_import.services.import_service import ImportService

logger = structlog.get_logger(__name__)

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_LOG_LEVELS = ("debug", "info", "warning", "error")


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


def _trust_level(value: str) -> int:
    try:
        level = int(value)
    except ValueError:
        level = 0
    if not MIN_TRUST_LEVEL <= level <= MAX_TRUST_LEVEL:
        msg = f"must be a number between {MIN_TRUST_LEVEL} and {MAX_TRUST_LEVEL}"
        raise argparse.ArgumentTypeError(msg)
    return level


def build_parser() -> argparse.ArgumentParser:
    env = os.environ
    parser = argparse.ArgumentParser(
        prog="gpg-import",
        description="Import a GPG private key and configure git to sign with it.",
    )
    parser.add_argument(
        "-k",
        "--key",
        default=env.get("GPG_PRIVATE_KEY"),
        help="base64 encoded private key [env: GPG_PRIVATE_KEY]",
    )
    parser.add_argument(
        "-p",
        "--passphrase",
        default=env.get("GPG_PASSPHRASE"),
        help="passphrase of the private key [env: GPG_PASSPHRASE]",
    )
    parser.add_argument(
        "-f",
        "--fingerprint",
        default=env.get("GPG_FINGERPRINT"),
        help="fingerprint of the key or subkey to sign with [env: GPG_FINGERPRINT]",
    )
    parser.add_argument(
        "-t",
        "--trust-level",
        type=_trust_level,
        default=env.get("GPG_TRUST_LEVEL") or None,
        help="owner trust level to assign, 1-5 [env: GPG_TRUST_LEVEL]",
    )
    scope = parser.add_mutually_exclusive_group()
    scope.add_argument(
        "--skip-git",
        action="store_true",
        default=_env_flag("GPG_SKIP_GIT"),
        help="do not configure git signing [env: GPG_SKIP_GIT]",
    )
    scope.add_argument(
        "--git-global-config",
        action="store_true",
        default=_env_flag("GPG_GIT_GLOBAL_CONFIG"),
        help="write signing config to the global git config [env: GPG_GIT_GLOBAL_CONFIG]",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=_env_flag("GPG_DRY_RUN"),
        help="show what would be done without changing anything [env: GPG_DRY_RUN]",
    )
    parser.add_argument(
        "--homedir",
        type=Path,
        default=env.get("GNUPGHOME") or None,
        help="GnuPG home directory [env: GNUPGHOME]",
    )
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default=env.get("GPG_IMPORT_LOG_LEVEL", "warning").lower(),
        help="log verbosity, logs go to stderr [env: GPG_IMPORT_LOG_LEVEL]",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(level: str) -> None:
    """Send structlog output to stderr, keeping stdout for the report."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper())),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.key:
        parser.error("a private key is required, use --key or GPG_PRIVATE_KEY")

    try:
        config = ImportConfig.create(
            key=args.key,
            passphrase=args.passphrase,
            fingerprint=args.fingerprint or None,
            trust_level=args.trust_level,
            skip_git=args.skip_git,
            git_global=args.git_global_config,
            dry_run=args.dry_run,
            home_dir=args.homedir,
        )
    except ValueError as e:
        parser.error(str(e))

    try:
        key_tool = GnupgKeyTool(
            home_dir=config.home_dir,
            gpg_binary=config.gpg_binary,
            agent_binary=config.agent_binary,
        )
        service = ImportService(key_tool, Git(config.git_binary))
        service.run(config)
    except GpgImportError as e:
        logger.error("Import failed", error_type=type(e).__name__)
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        config.clear()

    return 0
