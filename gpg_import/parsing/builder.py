"""
Builds typed key models from raw listing fields.
"""

from datetime import UTC, datetime

from gpg_import.exceptions import MalformedListingError
from gpg_import.models.keys import KeySegment, PrivateKeyRecord
from gpg_import.parsing.listing import RawKeyListing, RawSegment, parse_secret_key_listing


def build_private_key(raw: RawKeyListing) -> PrivateKeyRecord:
    """
    Convert raw listing fields into a PrivateKeyRecord.

    Raises:
        MalformedListingError: If a date field is not an integer timestamp.
    """
    return PrivateKeyRecord(
        user_name=raw.user_name,
        user_email=raw.user_email,
        primary=build_segment(raw.primary),
        subkey=build_segment(raw.subkey) if raw.subkey is not None else None,
    )


def build_segment(raw: RawSegment) -> KeySegment:
    expiration = None
    if raw.expiration_date:
        expiration = _to_datetime(raw.expiration_date, field="expiration_date")

    return KeySegment(
        creation_date=_to_datetime(raw.creation_date, field="creation_date"),
        expiration_date=expiration,
        fingerprint=raw.fingerprint,
        key_id=raw.key_id,
        keygrip=raw.keygrip,
    )


def parse_private_key(output: str | bytes) -> PrivateKeyRecord:
    """Parse a colon listing straight into a PrivateKeyRecord."""
    return build_private_key(parse_secret_key_listing(output))


def _to_datetime(value: str, *, field: str) -> datetime:
    # int() accepts surrounding whitespace and underscores, gpg never emits either
    if not value.isascii() or not value.isdigit():
        msg = f"{field} is not a timestamp"
        raise MalformedListingError(msg, remaining=value)
    try:
        return datetime.fromtimestamp(int(value), tz=UTC)
    except (OverflowError, OSError, ValueError) as e:
        msg = f"{field} is out of range"
        raise MalformedListingError(msg, remaining=value) from e
