"""
gpg-import exception hierarchy.

All exceptions inherit from GpgImportError for easy catching.
"""

from datetime import datetime
from typing import Any


class GpgImportError(Exception):
    """Base exception for all gpg_import errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class KeyInputError(GpgImportError):
    """The supplied key material could not be decoded."""


class EmptyKeyInputError(KeyInputError):
    """No key material was supplied."""

    def __init__(self, message: str = "GPG private key is empty") -> None:
        super().__init__(message)


class InvalidKeyEncodingError(KeyInputError):
    """Key material is not valid base64."""


class InvalidEncodingByteError(InvalidKeyEncodingError):
    """A symbol outside the base64 alphabet was found."""

    def __init__(self, *, offset: int, byte: str) -> None:
        super().__init__(f"detected invalid byte at position {offset} within gpg key '{byte}'")
        self.offset = offset
        self.byte = byte


class InvalidKeyDataError(GpgImportError):
    """GnuPG rejected the decoded key material."""

    def __init__(self, message: str = "Invalid GPG key data", *, diagnostic: str = "") -> None:
        super().__init__(message, diagnostic=diagnostic.strip())
        self.diagnostic = diagnostic


class KeyNotFoundError(GpgImportError):
    """No secret key matched the requested identifier."""

    def __init__(self, *, key_id: str) -> None:
        super().__init__(f"GPG secret key not found: {key_id}")
        self.key_id = key_id


class ParseError(GpgImportError):
    """Tool output could not be parsed."""

    def __init__(self, message: str, *, remaining: str = "") -> None:
        super().__init__(message)
        self.remaining = remaining


class MalformedListingError(ParseError):
    """A required record or field is missing from a colon listing."""


class MalformedToolInfoError(ParseError):
    """The gpg version banner is not in the expected format."""


class KeyExpiredError(GpgImportError):
    """A key has expired."""

    def __init__(self, message: str, *, expired_on: datetime) -> None:
        super().__init__(message)
        self.expired_on = expired_on


class PrimaryKeyExpiredError(KeyExpiredError):
    """The primary secret key has expired."""


class SubkeyExpiredError(KeyExpiredError):
    """The secret subkey has expired."""


class FingerprintMismatchError(GpgImportError):
    """Requested signing fingerprint belongs to neither the key nor its subkey."""

    def __init__(self, *, requested: str) -> None:
        super().__init__(f"fingerprint not found in imported key: {requested}")
        self.requested = requested


class KeyToolError(GpgImportError):
    """An external tool (gpg, gpg-connect-agent, git) failed or could not be started."""

    def __init__(
        self,
        message: str,
        *,
        command: str,
        returncode: int | None = None,
        stderr: str | None = None,
    ) -> None:
        super().__init__(message, command=command, returncode=returncode)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
