"""
Key metadata models parsed from GnuPG output.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True, kw_only=True)
class ToolInfo:
    """
    Details about the installed GnuPG client.

    Attributes:
        version: The GnuPG version.
        libgcrypt: The version of libgcrypt used by GnuPG.
        home_dir: The home directory, where configuration files are stored.
    """

    version: str
    libgcrypt: str
    home_dir: Path


@dataclass(frozen=True, kw_only=True)
class KeySegment:
    """
    Internal details of a single secret key (primary key or subkey).

    Attributes:
        creation_date: When the key was generated.
        expiration_date: When the key expires, None if it never does.
        fingerprint: 40 hex character fingerprint.
        key_id: 16 hex character long key identifier.
        keygrip: 40 hex character hash used by gpg-agent to identify the key material.
    """

    creation_date: datetime
    expiration_date: datetime | None
    fingerprint: str
    key_id: str
    keygrip: str


@dataclass(frozen=True, kw_only=True)
class PrivateKeyRecord:
    """
    A GnuPG private key with its optional subkey.

    Attributes:
        user_name: Name from the first user id.
        user_email: Email from the first user id.
        primary: The primary secret key.
        subkey: The first secret subkey, if the key has one.
    """

    user_name: str
    user_email: str
    primary: KeySegment
    subkey: KeySegment | None = None

    @property
    def user_id(self) -> str:
        return f"{self.user_name} <{self.user_email}>"

    @property
    def segments(self) -> Iterator[KeySegment]:
        """Primary key first, then the subkey if present."""
        yield self.primary
        if self.subkey is not None:
            yield self.subkey

    def find_fingerprint(self, fingerprint: str) -> KeySegment | None:
        """
        Find the segment owning a fingerprint.

        Comparison ignores case and embedded whitespace, as fingerprints are
        commonly copied from `gpg --fingerprint` output in groups of four.
        """
        wanted = normalize_fingerprint(fingerprint)
        return next(
            (s for s in self.segments if normalize_fingerprint(s.fingerprint) == wanted),
            None,
        )


def normalize_fingerprint(fingerprint: str) -> str:
    return "".join(fingerprint.split()).upper()
