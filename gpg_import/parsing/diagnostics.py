"""Parser for the diagnostics gpg writes to stderr while importing a key."""

from gpg_import.exceptions import InvalidKeyDataError, ParseError
from gpg_import.parsing.cursor import Cursor

_KEY_ANCHOR = "gpg: key "


def parse_imported_key_id(diagnostics: str) -> str:
    """
    Extract the id of the imported key from a line such as:

        gpg: key 2ECDE01CCA68D62F: secret key imported

    Raises:
        InvalidKeyDataError: If gpg did not report an imported key.
    """
    cursor = Cursor(diagnostics)
    try:
        cursor.seek(_KEY_ANCHOR)
        cursor.expect(_KEY_ANCHOR)
        key_id = cursor.read_until(":")
    except ParseError as e:
        raise InvalidKeyDataError(diagnostic=diagnostics) from e

    if not key_id:
        raise InvalidKeyDataError(diagnostic=diagnostics)
    return key_id
