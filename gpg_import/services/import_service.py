"""
Import pipeline.

Decodes and imports a private key, validates it, prepares GnuPG and gpg-agent
for non-interactive use and configures git to sign with it.
"""

import sys
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import TextIO

import structlog

from gpg_import.backends.defaults import write_agent_defaults, write_gpg_defaults
from gpg_import.backends.protocol import KeyTool, VersionControl
from gpg_import.config import ImportConfig
from gpg_import.crypto.encoding import decode_key
from gpg_import.crypto.secure_bytes import SecureBytes
from gpg_import.exceptions import FingerprintMismatchError, KeyNotFoundError
from gpg_import.lifecycle import check_expiration, utc_now
from gpg_import.models.keys import PrivateKeyRecord, ToolInfo
from gpg_import.models.outcome import ImportOutcome
from gpg_import.models.signing import SigningConfigDraft
from gpg_import.parsing.banner import parse_tool_info
from gpg_import.parsing.builder import parse_private_key
from gpg_import.parsing.diagnostics import parse_imported_key_id
from gpg_import.parsing.listing import find_public_only_key_id
from gpg_import.report import (
    DRY_RUN_NOTICE,
    format_keygrip,
    format_private_key,
    format_signing_config,
    format_tool_info,
    format_trust_level,
)

logger = structlog.get_logger(__name__)


class ImportService:
    """
    Runs an import as a fixed sequence of steps:

    1. decode the base64 key
    2. import it (or, in dry-run, preview it without touching the keyring)
    3. list and validate the key, rejecting expired keys
    4. write gpg and gpg-agent defaults, reload the agent
    5. cache the passphrase for the key and subkey, when given
    6. assign an owner trust level, when given
    7. configure git signing, unless skipped

    The first failing step aborts the import and its error propagates as is.
    Every step reports what it does; in dry-run only the change itself is
    skipped, so the report matches that of a real run.
    """

    def __init__(
        self,
        key_tool: KeyTool,
        git: VersionControl,
        *,
        out: TextIO | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Args:
            key_tool: GnuPG operations.
            git: Git repository lookup and config stores.
            out: Stream the report is written to. Defaults to stdout.
            clock: Source of the current time for expiry checks.
        """
        self._key_tool = key_tool
        self._git = git
        self._out = out if out is not None else sys.stdout
        self._clock = clock

    def run(self, config: ImportConfig) -> ImportOutcome:
        """
        Import the configured key.

        The caller keeps ownership of the secrets in `config` and should
        clear it afterwards.

        Returns:
            Details of the imported key and any git config applied.

        Raises:
            KeyInputError: If the key is empty or not valid base64.
            InvalidKeyDataError: If gpg rejected the key.
            KeyNotFoundError: If the imported key cannot be listed.
            ParseError: If gpg output could not be parsed.
            KeyExpiredError: If the key or its subkey has expired.
            FingerprintMismatchError: If the signing fingerprint is not part of the key.
            KeyToolError: If gpg, gpg-connect-agent or git failed.
        """
        logger.info("Starting import", dry_run=config.dry_run)
        if config.dry_run:
            self._write(DRY_RUN_NOTICE)

        info = self.detect_tool()
        key = self.import_key(config.key, dry_run=config.dry_run)

        self.configure_defaults(info.home_dir, dry_run=config.dry_run)

        if config.passphrase:
            self.cache_passphrase(key, config.passphrase, dry_run=config.dry_run)

        if config.trust_level is not None:
            self.assign_trust(key, config.trust_level, dry_run=config.dry_run)

        signing_config = None
        if config.skip_git:
            logger.info("Skipping git configuration")
        else:
            signing_config = self.configure_signing(key, config)

        logger.info("Import complete", key_id=key.primary.key_id, dry_run=config.dry_run)
        return ImportOutcome(
            tool_info=info,
            key=key,
            signing_config=signing_config,
            dry_run=config.dry_run,
        )

    def detect_tool(self) -> ToolInfo:
        info = parse_tool_info(self._key_tool.version_banner())
        logger.debug("Detected GnuPG", version=info.version, home_dir=str(info.home_dir))
        self._section("Detected GnuPG", format_tool_info(info))
        return info

    def import_key(self, key: SecureBytes, *, dry_run: bool) -> PrivateKeyRecord:
        """Decode, import (or preview) and validate a key."""
        with decode_key(key) as key_data:
            if dry_run:
                logger.debug("Previewing key without importing")
                listing = self._key_tool.show_secret_key(key_data)
                # a public key export previews fine but imports no secret key
                public_key_id = find_public_only_key_id(listing)
                if public_key_id is not None:
                    raise KeyNotFoundError(key_id=public_key_id)
            else:
                diagnostics = self._key_tool.import_secret_key(key_data)
                key_id = parse_imported_key_id(diagnostics)
                logger.info("Key imported", key_id=key_id)
                listing = self._key_tool.list_secret_key(key_id)

        private_key = parse_private_key(listing)
        now = self._clock()
        check_expiration(private_key, now)

        self._section("Imported GPG key", format_private_key(private_key, now))
        return private_key

    def configure_defaults(self, home_dir: Path, *, dry_run: bool) -> None:
        logger.info("Configuring gpg defaults", home_dir=str(home_dir), dry_run=dry_run)
        if dry_run:
            return
        write_gpg_defaults(home_dir)
        write_agent_defaults(home_dir)
        self._key_tool.reload_agent()

    def cache_passphrase(
        self, key: PrivateKeyRecord, passphrase: SecureBytes, *, dry_run: bool
    ) -> None:
        logger.info("Caching passphrase", dry_run=dry_run)
        for segment in key.segments:
            if not dry_run:
                self._key_tool.preset_passphrase(segment.keygrip, passphrase)

        self._section(
            "Setting Passphrase",
            "\n".join(format_keygrip(s) for s in key.segments) + "\n",
        )

    def assign_trust(self, key: PrivateKeyRecord, trust_level: int, *, dry_run: bool) -> None:
        key_id = key.primary.key_id
        logger.info("Assigning trust level", key_id=key_id, trust_level=trust_level)
        if not dry_run:
            self._key_tool.assign_trust_level(key_id, trust_level)

        self._section("Setting Trust Level", format_trust_level(trust_level, key_id) + "\n")

    def configure_signing(
        self, key: PrivateKeyRecord, config: ImportConfig
    ) -> SigningConfigDraft | None:
        """
        Configure git to sign commits, tags and pushes with the key.

        Writes to the global config when requested, otherwise to the repository
        containing the working directory. Outside a repository nothing is
        configured.
        """
        repository = None
        if not config.git_global:
            repository = self._git.find_repository(config.working_dir)
            if repository is None:
                logger.info("Not a git repository, skipping git configuration")
                return None

        signing_config = SigningConfigDraft(
            user_name=key.user_name,
            user_email=key.user_email,
            key_id=select_signing_key(key, config.fingerprint),
        )

        scope = "global" if repository is None else "local"
        logger.info("Configuring git signing", scope=scope, dry_run=config.dry_run)
        if not config.dry_run:
            store = self._git.config_store(repository)
            for name, value in signing_config.entries():
                store.set_value(name, value)

        self._section("Git config set", format_signing_config(signing_config))
        return signing_config

    def _section(self, title: str, body: str) -> None:
        self._write(f"> {title}:\n{body}\n")

    def _write(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()


def select_signing_key(key: PrivateKeyRecord, fingerprint: str | None) -> str:
    """
    Pick the identifier git signs with.

    Returns:
        The requested fingerprint if it belongs to the key or its subkey,
        otherwise the primary key id.

    Raises:
        FingerprintMismatchError: If `fingerprint` belongs to neither.
    """
    if fingerprint is None:
        return key.primary.key_id

    segment = key.find_fingerprint(fingerprint)
    if segment is None:
        raise FingerprintMismatchError(requested=fingerprint)
    return segment.fingerprint
