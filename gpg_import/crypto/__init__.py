"""
Handling of secret material.

This module provides:
- Secure memory for passphrases and key material
- Strict base64 decoding of exported keys
"""

from gpg_import.crypto.encoding import decode_key
from gpg_import.crypto.secure_bytes import SecureBytes

__all__ = [
    "SecureBytes",
    "decode_key",
]
