"""
Parser for the secret key listing produced by:

    gpg --batch --with-colons --with-keygrip --list-secret-keys --fixed-list-mode <id>

Only the fields needed to configure signing are extracted. Values are kept as
the raw strings found in the listing; conversion happens in the builder.
"""

import re
from dataclasses import dataclass

from gpg_import.exceptions import MalformedListingError
from gpg_import.parsing.cursor import Cursor

# sec/ssb/pub: tag remainder, validity, key length, algorithm; then key id, created, expires
_KEY_SKIPPED_FIELDS = 4
_KEY_READ_FIELDS = 3
# fpr/grp/uid: the value lives in field 10
_VALUE_SKIPPED_FIELDS = 9

_ESCAPE = re.compile(r"\\x([0-9a-fA-F]{2})")


@dataclass(frozen=True, kw_only=True)
class RawSegment:
    """Unconverted fields of a `sec` or `ssb` block."""

    key_id: str
    creation_date: str
    expiration_date: str
    fingerprint: str
    keygrip: str


@dataclass(frozen=True, kw_only=True)
class RawKeyListing:
    """Unconverted fields of a full secret key listing."""

    user_name: str
    user_email: str
    primary: RawSegment
    subkey: RawSegment | None = None


def parse_secret_key_listing(output: str | bytes) -> RawKeyListing:
    """
    Parse a colon listing of a single secret key.

    Args:
        output: Raw stdout of the listing command.

    Returns:
        The raw fields of the first key and its first subkey.

    Raises:
        MalformedListingError: If a required record or field is missing.
    """
    if isinstance(output, bytes):
        output = output.decode("utf-8", errors="replace")

    cursor = Cursor(output, error=MalformedListingError)

    primary = _read_segment(cursor, "sec")
    user_name, user_email = _read_user_id(cursor)

    subkey = None
    subkey_at = cursor.locate_record("ssb")
    next_key_at = cursor.locate_record("sec")
    if subkey_at is not None and (next_key_at is None or subkey_at < next_key_at):
        subkey = _read_segment(cursor, "ssb")

    return RawKeyListing(
        user_name=user_name,
        user_email=user_email,
        primary=primary,
        subkey=subkey,
    )


def _read_segment(cursor: Cursor, tag: str) -> RawSegment:
    cursor.expect_tag(tag)
    cursor.skip_fields(_KEY_SKIPPED_FIELDS)
    key_id, created, expires = cursor.read_fields(_KEY_READ_FIELDS)
    fingerprint = _read_value(cursor, "fpr")
    keygrip = _read_value(cursor, "grp")

    return RawSegment(
        key_id=key_id,
        creation_date=created,
        expiration_date=expires,
        fingerprint=fingerprint,
        keygrip=keygrip,
    )


def _read_value(cursor: Cursor, tag: str) -> str:
    cursor.expect_tag(tag)
    cursor.skip_fields(_VALUE_SKIPPED_FIELDS)
    return cursor.read_field()


def _read_user_id(cursor: Cursor) -> tuple[str, str]:
    user_id = _unescape(_read_value(cursor, "uid"))

    open_at = user_id.find("<")
    close_at = user_id.find(">", open_at + 1)
    if open_at < 0 or close_at < 0:
        cursor.fail(f"user id {user_id!r} has no email address")

    return user_id[:open_at].strip(), user_id[open_at + 1 : close_at]


def _unescape(value: str) -> str:
    """Decode the C-style \\xHH escapes GnuPG applies to user ids."""
    return _ESCAPE.sub(lambda m: chr(int(m.group(1), 16)), value)


def find_public_only_key_id(output: str | bytes) -> str | None:
    """
    Key id of a listing that holds a public key but no secret key.

    `gpg --show-keys` lists a public key export with `pub` records only, where
    a secret key export starts with `sec`.

    Returns:
        The key id of the first `pub` record, or None if the listing has a
        secret key or no key at all.
    """
    if isinstance(output, bytes):
        output = output.decode("utf-8", errors="replace")

    cursor = Cursor(output, error=MalformedListingError)
    if cursor.locate_record("sec") is not None or cursor.locate_record("pub") is None:
        return None

    cursor.expect_tag("pub")
    cursor.skip_fields(_KEY_SKIPPED_FIELDS)
    return cursor.read_field()
