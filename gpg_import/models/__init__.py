"""
Domain models for gpg-import.

These are immutable (frozen) dataclasses created fresh for every import.
"""

from gpg_import.models.keys import KeySegment, PrivateKeyRecord, ToolInfo
from gpg_import.models.outcome import ImportOutcome
from gpg_import.models.signing import SigningConfigDraft

__all__ = [
    # Keys
    "ToolInfo",
    "KeySegment",
    "PrivateKeyRecord",
    # Git
    "SigningConfigDraft",
    # Pipeline
    "ImportOutcome",
]
