"""
Key expiry validation and formatting.

Expiry is judged against an explicit `now` so callers (and tests) control the
clock. A key whose expiration instant equals `now` has already expired.
"""

import math
from datetime import UTC, datetime, timedelta
from email.utils import format_datetime

from gpg_import.exceptions import PrimaryKeyExpiredError, SubkeyExpiredError
from gpg_import.models.keys import PrivateKeyRecord

_ONE_DAY = timedelta(days=1)


def utc_now() -> datetime:
    return datetime.now(UTC)


def check_expiration(key: PrivateKeyRecord, now: datetime) -> None:
    """
    Verify neither the primary key nor its subkey has expired.

    The primary key is checked first; the first expired key raises.

    Raises:
        PrimaryKeyExpiredError: If the primary key expired at or before `now`.
        SubkeyExpiredError: If the subkey expired at or before `now`.
    """
    expires_on = key.primary.expiration_date
    if expires_on is not None and expires_on <= now:
        msg = f"GPG secret key has expired on {format_timestamp(expires_on)}"
        raise PrimaryKeyExpiredError(msg, expired_on=expires_on)

    if key.subkey is None:
        return

    expires_on = key.subkey.expiration_date
    if expires_on is not None and expires_on <= now:
        msg = f"GPG secret subkey has expired on {format_timestamp(expires_on)}"
        raise SubkeyExpiredError(msg, expired_on=expires_on)


def days_until(expires_on: datetime, now: datetime) -> int:
    """Whole days between `now` and `expires_on`, truncated toward zero."""
    return math.trunc((expires_on - now) / _ONE_DAY)


def describe_expiration(expires_on: datetime, now: datetime) -> str:
    days = days_until(expires_on, now)
    if days == 1:
        return "in 1 day"
    if days == 0:
        return "expires today"
    return f"in {days} days"


def format_expiration(expires_on: datetime, now: datetime) -> str:
    return f"{format_timestamp(expires_on)} ({describe_expiration(expires_on, now)})"


def format_timestamp(value: datetime) -> str:
    """Format as RFC 2822, e.g. ``Mon, 20 Nov 2023 10:00:00 +0000``."""
    return format_datetime(value.astimezone(UTC))
