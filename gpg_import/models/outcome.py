"""
Result of a completed import.
"""

from dataclasses import dataclass

from gpg_import.models.keys import PrivateKeyRecord, ToolInfo
from gpg_import.models.signing import SigningConfigDraft


@dataclass(frozen=True, kw_only=True)
class ImportOutcome:
    """
    Attributes:
        tool_info: The detected GnuPG installation.
        key: The imported (or previewed) private key.
        signing_config: Git signing config that was applied, None if git was skipped.
        dry_run: Whether mutating steps were suppressed.
    """

    tool_info: ToolInfo
    key: PrivateKeyRecord
    signing_config: SigningConfigDraft | None = None
    dry_run: bool = False
