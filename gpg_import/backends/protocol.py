"""
Interfaces to the external tools driven by an import.

The import pipeline only talks to GnuPG and git through these protocols, so
implementations can be swapped (or faked in tests) without touching it.
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

from gpg_import.crypto.secure_bytes import SecureBytes


@runtime_checkable
class KeyTool(Protocol):
    """GnuPG operations needed to import a key and prepare it for signing."""

    def version_banner(self) -> str:
        """Return the output of `gpg --version`."""
        ...

    def import_secret_key(self, key_data: SecureBytes) -> str:
        """
        Import decoded key material into the keyring.

        Returns:
            The diagnostics gpg wrote while importing.

        Raises:
            InvalidKeyDataError: If gpg rejected the material.
            KeyToolError: If gpg could not be run.
        """
        ...

    def list_secret_key(self, key_id: str) -> str:
        """
        Return the colon listing of a secret key, including keygrips.

        Raises:
            KeyNotFoundError: If no secret key matches `key_id`.
            KeyToolError: If gpg could not be run.
        """
        ...

    def show_secret_key(self, key_data: SecureBytes) -> str:
        """
        Return the colon listing of key material without importing it.

        Raises:
            InvalidKeyDataError: If gpg cannot read the material.
            KeyToolError: If gpg could not be run.
        """
        ...

    def reload_agent(self) -> None:
        """Ask gpg-agent to reload its configuration."""
        ...

    def preset_passphrase(self, keygrip: str, passphrase: SecureBytes) -> None:
        """Cache a passphrase in gpg-agent for a keygrip."""
        ...

    def assign_trust_level(self, key_id: str, trust_level: int) -> None:
        """Set the owner trust of a key."""
        ...


@runtime_checkable
class ConfigStore(Protocol):
    """A git configuration file accepting key/value writes."""

    def set_value(self, name: str, value: str | bool) -> None: ...


@runtime_checkable
class VersionControl(Protocol):
    """Locates repositories and opens their configuration."""

    def find_repository(self, path: Path) -> Path | None:
        """Return the top level of the repository containing `path`, if any."""
        ...

    def config_store(self, repository: Path | None) -> ConfigStore:
        """Open the local config of `repository`, or the global config when None."""
        ...
