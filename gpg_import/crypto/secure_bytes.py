"""Zeroable memory for secrets (private key material, passphrases)."""

import ctypes
import hmac
import warnings
from collections.abc import Iterator
from typing import IO, Self

_HEX_DIGITS = b"0123456789ABCDEF"
_WHITESPACE = b" \t\n\r\x0b\x0c"


def _secure_zero(data: bytearray) -> None:
    if len(data) == 0:
        return
    try:
        address = ctypes.addressof((ctypes.c_char * len(data)).from_buffer(data))
        ctypes.memset(address, 0, len(data))
    except Exception as exc:
        warnings.warn(f"memset unavailable, zeroing in Python: {exc}", RuntimeWarning)
        data[:] = bytes(len(data))


class SecureBytes:
    """
    Secret bytes that are zeroed when cleared, garbage collected or a `with`
    block exits.

    The contents never appear in repr() and are only handed out through
    explicit calls, so a secret can be passed around (and logged by accident)
    without leaking.
    """

    __slots__ = ("_data", "_cleared")

    def __init__(self, data: bytes | bytearray) -> None:
        self._data = bytearray(data)
        self._cleared = False

    def __del__(self) -> None:
        self.clear()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_: object) -> None:
        self.clear()

    def clear(self) -> None:
        """Zero memory. Idempotent."""
        if self._cleared:
            return
        _secure_zero(self._data)
        self._cleared = True

    def __bytes__(self) -> bytes:
        """Copy out the contents. The copy is not zeroed by clear()."""
        self._check_cleared()
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return not self._cleared and len(self._data) > 0

    def __repr__(self) -> str:
        if self._cleared:
            return "SecureBytes(<cleared>)"
        return f"SecureBytes(<{len(self._data)} bytes>)"

    def __eq__(self, other: object) -> bool:
        """Compare in constant time. A cleared buffer equals nothing."""
        if isinstance(other, SecureBytes):
            if other._cleared:
                return False
            other = other._data
        elif not isinstance(other, (bytes, bytearray)):
            return NotImplemented
        return not self._cleared and hmac.compare_digest(self._data, other)

    def __hash__(self) -> int:
        raise TypeError("SecureBytes is not hashable")

    def __iter__(self) -> Iterator[int]:
        self._check_cleared()
        return iter(self._data)

    @property
    def is_cleared(self) -> bool:
        return self._cleared

    def strip(self) -> "SecureBytes":
        """Copy without leading and trailing ASCII whitespace."""
        self._check_cleared()
        return SecureBytes(self._data.strip(_WHITESPACE))

    def hex_upper(self) -> "SecureBytes":
        """Uppercase hex encoding, built without an intermediate str."""
        self._check_cleared()
        encoded = bytearray(len(self._data) * 2)
        for i, byte in enumerate(self._data):
            encoded[2 * i] = _HEX_DIGITS[byte >> 4]
            encoded[2 * i + 1] = _HEX_DIGITS[byte & 0x0F]
        try:
            return SecureBytes(encoded)
        finally:
            _secure_zero(encoded)

    def write_to(self, stream: IO[bytes]) -> None:
        """Write the contents to a binary stream without copying them."""
        self._check_cleared()
        stream.write(self._data)

    def decode(self, encoding: str = "utf-8") -> str:
        """Decode to text. The returned str is not zeroed by clear()."""
        self._check_cleared()
        return self._data.decode(encoding)

    def _check_cleared(self) -> None:
        if self._cleared:
            raise RuntimeError("SecureBytes has been cleared")

    @classmethod
    def from_string(cls, s: str, encoding: str = "utf-8") -> Self:
        """Encode `s` into a new buffer, zeroing the intermediate encoding."""
        encoded = bytearray(s, encoding)
        try:
            return cls(encoded)
        finally:
            _secure_zero(encoded)
