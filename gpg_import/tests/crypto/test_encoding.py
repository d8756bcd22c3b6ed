import base64

import pytest

from gpg_import.crypto.encoding import decode_key
from gpg_import.crypto.secure_bytes import SecureBytes
from gpg_import.exceptions import (
    EmptyKeyInputError,
    InvalidEncodingByteError,
    InvalidKeyEncodingError,
)

KEY_MATERIAL = b"\x95\x07\x46\x04\x65\x5f\x1c\x80\x01\x10\x00\xb7\x3f\x2a"


def test_decode_key() -> None:
    encoded = SecureBytes(base64.b64encode(KEY_MATERIAL))

    with decode_key(encoded) as decoded:
        assert bytes(decoded) == KEY_MATERIAL


def test_decode_key_ignores_surrounding_whitespace() -> None:
    encoded = SecureBytes(b"\n  " + base64.b64encode(KEY_MATERIAL) + b"  \r\n")

    with decode_key(encoded) as decoded:
        assert bytes(decoded) == KEY_MATERIAL


def test_decode_key_leaves_input_intact() -> None:
    encoded = SecureBytes(base64.b64encode(KEY_MATERIAL))

    decode_key(encoded).clear()

    assert not encoded.is_cleared
    assert bytes(encoded) == base64.b64encode(KEY_MATERIAL)


@pytest.mark.parametrize("key", [b"", b"   ", b"\n\t\r\n"], ids=["empty", "spaces", "newlines"])
def test_empty_key_fails(key: bytes) -> None:
    with pytest.raises(EmptyKeyInputError):
        decode_key(SecureBytes(key))


def test_invalid_byte_reports_offset() -> None:
    with pytest.raises(InvalidEncodingByteError) as exc_info:
        decode_key(SecureBytes(b"Zm9vYmFyYmF6cXV!eA=="))

    assert exc_info.value.offset == 15
    assert exc_info.value.byte == "!"
    assert str(exc_info.value) == "detected invalid byte at position 15 within gpg key '!'"


def test_invalid_byte_offset_is_relative_to_trimmed_key() -> None:
    with pytest.raises(InvalidEncodingByteError) as exc_info:
        decode_key(SecureBytes(b"   Zm9v!mFy"))

    assert exc_info.value.offset == 4


def test_embedded_line_break_is_invalid() -> None:
    with pytest.raises(InvalidEncodingByteError) as exc_info:
        decode_key(SecureBytes(b"Zm9v\nYmFy"))

    assert exc_info.value.offset == 4
    assert exc_info.value.byte == "\n"


def test_url_safe_alphabet_is_invalid() -> None:
    with pytest.raises(InvalidEncodingByteError) as exc_info:
        decode_key(SecureBytes(b"ab-_"))

    assert exc_info.value.byte == "-"


@pytest.mark.parametrize(
    ("key", "offset"),
    [(b"Zm8=Zm9v", 3), (b"Zm9vY===", 5), (b"Zm9v====", 4), (b"Zm9v=", 4), (b"Zm9vY=", 5)],
    ids=["symbol-after-padding", "padding-too-long", "padding-only-quad", "lone-pad", "pad-at-second"],
)
def test_misplaced_padding_is_invalid(key: bytes, offset: int) -> None:
    with pytest.raises(InvalidEncodingByteError) as exc_info:
        decode_key(SecureBytes(key))

    assert exc_info.value.offset == offset
    assert exc_info.value.byte == "="


@pytest.mark.parametrize("key", [b"Zg==", b"Zm8="], ids=["two-pads", "one-pad"])
def test_trailing_padding_is_accepted(key: bytes) -> None:
    with decode_key(SecureBytes(key)) as decoded:
        assert bytes(decoded) == base64.b64decode(key)


def test_missing_padding_fails() -> None:
    with pytest.raises(InvalidKeyEncodingError, match="not valid base64"):
        decode_key(SecureBytes(b"Zm9vYmE"))


def test_incomplete_padding_fails() -> None:
    with pytest.raises(InvalidKeyEncodingError, match="not valid base64"):
        decode_key(SecureBytes(b"Zm9vYm="))
