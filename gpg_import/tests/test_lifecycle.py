from datetime import UTC, datetime, timedelta, timezone

import pytest

from gpg_import.exceptions import PrimaryKeyExpiredError, SubkeyExpiredError
from gpg_import.lifecycle import (
    check_expiration,
    days_until,
    describe_expiration,
    format_expiration,
    format_timestamp,
)
from gpg_import.tests.utils.listing import make_key

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
ONE_SECOND = timedelta(seconds=1)


def test_key_without_expiration_is_valid() -> None:
    check_expiration(make_key(), NOW)


def test_key_expiring_after_now_is_valid() -> None:
    key = make_key(expires_on=NOW + ONE_SECOND, subkey_expires_on=NOW + ONE_SECOND)

    check_expiration(key, NOW)


def test_key_expiring_exactly_now_has_expired() -> None:
    with pytest.raises(PrimaryKeyExpiredError) as exc_info:
        check_expiration(make_key(expires_on=NOW), NOW)

    assert exc_info.value.expired_on == NOW


def test_primary_key_expired() -> None:
    with pytest.raises(PrimaryKeyExpiredError) as exc_info:
        check_expiration(make_key(expires_on=NOW - ONE_SECOND), NOW)

    assert str(exc_info.value) == "GPG secret key has expired on Sat, 01 Mar 2025 11:59:59 +0000"


def test_subkey_expired() -> None:
    with pytest.raises(SubkeyExpiredError) as exc_info:
        check_expiration(make_key(subkey_expires_on=NOW - ONE_SECOND), NOW)

    assert str(exc_info.value).startswith("GPG secret subkey has expired on ")


def test_primary_key_is_checked_before_subkey() -> None:
    key = make_key(expires_on=NOW - timedelta(days=2), subkey_expires_on=NOW - ONE_SECOND)

    with pytest.raises(PrimaryKeyExpiredError):
        check_expiration(key, NOW)


def test_key_without_subkey_only_checks_primary() -> None:
    check_expiration(make_key(with_subkey=False, expires_on=NOW + ONE_SECOND), NOW)


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(hours=23), 0),
        (timedelta(days=1), 1),
        (timedelta(days=1, hours=23), 1),
        (timedelta(days=30), 30),
        (timedelta(hours=-23), 0),
        (timedelta(days=-2, hours=1), -1),
    ],
)
def test_days_until_truncates_toward_zero(delta: timedelta, expected: int) -> None:
    assert days_until(NOW + delta, NOW) == expected


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(hours=5), "expires today"),
        (timedelta(days=1, hours=2), "in 1 day"),
        (timedelta(days=365), "in 365 days"),
    ],
)
def test_describe_expiration(delta: timedelta, expected: str) -> None:
    assert describe_expiration(NOW + delta, NOW) == expected


def test_format_expiration() -> None:
    expires_on = datetime(2025, 3, 31, 12, 0, tzinfo=UTC)

    assert format_expiration(expires_on, NOW) == "Mon, 31 Mar 2025 12:00:00 +0000 (in 30 days)"


def test_format_timestamp_converts_to_utc() -> None:
    value = datetime(2025, 3, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))

    assert format_timestamp(value) == "Sat, 01 Mar 2025 12:00:00 +0000"
