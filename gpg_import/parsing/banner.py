"""
Parser for the banner printed by `gpg --version`:

    gpg (GnuPG) 2.4.3
    libgcrypt 1.10.2
    Copyright (C) 2023 g10 Code GmbH
    ...
    Home: /home/runner/.gnupg
"""

from pathlib import Path

from gpg_import.exceptions import MalformedToolInfoError
from gpg_import.models.keys import ToolInfo
from gpg_import.parsing.cursor import Cursor

_VENDOR_VARIANTS = ("(GnuPG)", "(GnuPG/MacGPG2)")


def parse_tool_info(banner: str | bytes) -> ToolInfo:
    """
    Parse the gpg version banner.

    Raises:
        MalformedToolInfoError: If the banner is not from a supported GnuPG build.
    """
    if isinstance(banner, bytes):
        banner = banner.decode("utf-8", errors="replace")

    cursor = Cursor(banner, error=MalformedToolInfoError)

    cursor.expect("gpg ")
    cursor.expect_any(_VENDOR_VARIANTS)
    cursor.expect(" ")
    version = cursor.read_line()

    cursor.seek("libgcrypt ")
    cursor.expect("libgcrypt ")
    libgcrypt = cursor.read_line()

    cursor.seek("Home: ")
    cursor.expect("Home: ")
    home_dir = cursor.read_line()

    return ToolInfo(version=version, libgcrypt=libgcrypt, home_dir=Path(home_dir))
