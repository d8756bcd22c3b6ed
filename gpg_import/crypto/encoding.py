"""Strict base64 decoding of private key material."""

import base64
import binascii

from gpg_import.crypto.secure_bytes import SecureBytes
from gpg_import.exceptions import (
    EmptyKeyInputError,
    InvalidEncodingByteError,
    InvalidKeyEncodingError,
)

_ALPHABET = frozenset(b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/")
_PAD = ord("=")


def decode_key(key: SecureBytes) -> SecureBytes:
    """
    Decode a base64 encoded private key.

    Surrounding whitespace is ignored; anything else outside the standard
    alphabet, including line breaks, is rejected.

    Args:
        key: Base64 text of the exported key.

    Returns:
        The decoded key material.

    Raises:
        EmptyKeyInputError: If the key is empty or only whitespace.
        InvalidEncodingByteError: At the first symbol outside the alphabet
            or misplaced padding, offset relative to the trimmed key.
        InvalidKeyEncodingError: If length or padding are invalid.
    """
    with key.strip() as trimmed:
        if not trimmed:
            raise EmptyKeyInputError()

        invalid = _first_invalid_symbol(trimmed)
        if invalid is not None:
            offset, byte = invalid
            raise InvalidEncodingByteError(offset=offset, byte=chr(byte))

        try:
            return SecureBytes(base64.b64decode(bytes(trimmed), validate=True))
        except binascii.Error as e:
            msg = f"GPG private key is not valid base64: {e}"
            raise InvalidKeyEncodingError(msg) from e


def _first_invalid_symbol(data: SecureBytes) -> tuple[int, int] | None:
    """
    Find the first symbol that cannot appear where it is.

    Padding may only end the input, start at the third or fourth symbol of the
    final quad and be at most two symbols long. Misplaced padding is reported
    at its first `=`.
    """
    pad_start = None
    for offset, byte in enumerate(data):
        if byte == _PAD:
            if pad_start is None:
                pad_start = offset
        elif pad_start is not None:
            return pad_start, _PAD
        elif byte not in _ALPHABET:
            return offset, byte

    if pad_start is not None and (pad_start % 4 < 2 or len(data) - pad_start > 2):
        return pad_start, _PAD
    return None
