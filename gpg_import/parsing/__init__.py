"""
Parsers for GnuPG output.

This module provides:
- Cursor combinators over colon delimited records
- Secret key listing parsing and model building
- Version banner parsing
- Import diagnostic parsing
"""

from gpg_import.parsing.banner import parse_tool_info
from gpg_import.parsing.builder import build_private_key, parse_private_key
from gpg_import.parsing.cursor import Cursor
from gpg_import.parsing.diagnostics import parse_imported_key_id
from gpg_import.parsing.listing import RawKeyListing, RawSegment, parse_secret_key_listing

__all__ = [
    "Cursor",
    "RawKeyListing",
    "RawSegment",
    "parse_secret_key_listing",
    "build_private_key",
    "parse_private_key",
    "parse_tool_info",
    "parse_imported_key_id",
]
