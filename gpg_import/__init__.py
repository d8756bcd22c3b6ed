"""
gpg-import.

Imports a GPG private key into the local keyring and configures git to sign
commits and tags with it. Built for CI workflows.

Example:
    ```python
    from gpg_import import GnupgKeyTool, Git, ImportConfig, ImportService

    config = ImportConfig.create(key=os.environ["GPG_PRIVATE_KEY"], trust_level=5)
    try:
        outcome = ImportService(GnupgKeyTool(), Git()).run(config)
        print(outcome.key.primary.key_id)
    finally:
        config.clear()
    ```
"""

__version__ = "0.5.0"

from gpg_import.backends.git import Git
from gpg_import.backends.gnupg_backend import GnupgKeyTool
from gpg_import.config import ImportConfig
from gpg_import.exceptions import (
    EmptyKeyInputError,
    FingerprintMismatchError,
    GpgImportError,
    InvalidEncodingByteError,
    InvalidKeyDataError,
    InvalidKeyEncodingError,
    KeyExpiredError,
    KeyInputError,
    KeyNotFoundError,
    KeyToolError,
    MalformedListingError,
    MalformedToolInfoError,
    ParseError,
    PrimaryKeyExpiredError,
    SubkeyExpiredError,
)
from gpg_import.models import (
    ImportOutcome,
    KeySegment,
    PrivateKeyRecord,
    SigningConfigDraft,
    ToolInfo,
)
from gpg_import.parsing import parse_private_key, parse_tool_info
from gpg_import.services import ImportService

__all__ = [
    # Pipeline
    "ImportService",
    "ImportConfig",
    "ImportOutcome",
    "GnupgKeyTool",
    "Git",
    # Parsing
    "parse_private_key",
    "parse_tool_info",
    # Models
    "ToolInfo",
    "KeySegment",
    "PrivateKeyRecord",
    "SigningConfigDraft",
    # Exceptions
    "GpgImportError",
    "KeyInputError",
    "EmptyKeyInputError",
    "InvalidKeyEncodingError",
    "InvalidEncodingByteError",
    "InvalidKeyDataError",
    "KeyNotFoundError",
    "ParseError",
    "MalformedListingError",
    "MalformedToolInfoError",
    "KeyExpiredError",
    "PrimaryKeyExpiredError",
    "SubkeyExpiredError",
    "FingerprintMismatchError",
    "KeyToolError",
]
