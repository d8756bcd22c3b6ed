"""
Import configuration.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Self

from gpg_import.crypto.secure_bytes import SecureBytes

MIN_TRUST_LEVEL = 1
MAX_TRUST_LEVEL = 5


@dataclass(frozen=True, kw_only=True)
class ImportConfig:
    """
    Attributes:
        key: Base64 encoded, exported GPG private key.
        passphrase: Passphrase to cache in gpg-agent for the key and its subkey.
        fingerprint: Fingerprint of the key or subkey to sign with, instead of
            the primary key id.
        trust_level: Owner trust to assign to the key (1-5).
        skip_git: Do not configure git signing.
        git_global: Write signing config to the global git config rather than
            the repository in the working directory.
        dry_run: Report every step without changing the keyring, agent or git.
        home_dir: GnuPG home directory, the tool's default when None.
        working_dir: Directory used to locate the git repository.
        gpg_binary: gpg executable.
        agent_binary: gpg-connect-agent executable.
        git_binary: git executable.
    """

    key: SecureBytes = field(repr=False)
    passphrase: SecureBytes | None = field(default=None, repr=False)
    fingerprint: str | None = None
    trust_level: int | None = None
    skip_git: bool = False
    git_global: bool = False
    dry_run: bool = False
    home_dir: Path | None = None
    working_dir: Path = field(default_factory=Path.cwd)
    gpg_binary: str = "gpg"
    agent_binary: str = "gpg-connect-agent"
    git_binary: str = "git"

    def __post_init__(self) -> None:
        if self.trust_level is not None and not (
            MIN_TRUST_LEVEL <= self.trust_level <= MAX_TRUST_LEVEL
        ):
            msg = f"trust_level must be between {MIN_TRUST_LEVEL} and {MAX_TRUST_LEVEL}"
            raise ValueError(msg)
        if self.fingerprint is not None and not self.fingerprint.strip():
            msg = "fingerprint must not be blank"
            raise ValueError(msg)
        if self.skip_git and self.git_global:
            msg = "git_global has no effect when skip_git is set"
            raise ValueError(msg)

    @classmethod
    def create(cls, *, key: str, passphrase: str | None = None, **options: object) -> Self:
        """Build a config from plain strings, moving secrets into SecureBytes."""
        secret_passphrase = None
        if passphrase and not passphrase.isspace():
            with SecureBytes.from_string(passphrase) as raw:
                secret_passphrase = raw.strip()
        return cls(
            key=SecureBytes.from_string(key),
            passphrase=secret_passphrase,
            **options,  # type: ignore[arg-type]
        )

    def clear(self) -> None:
        """Zero the key material and passphrase."""
        self.key.clear()
        if self.passphrase is not None:
            self.passphrase.clear()
