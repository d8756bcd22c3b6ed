"""
Access to the external tools an import drives.
"""

from gpg_import.backends.defaults import write_agent_defaults, write_gpg_defaults
from gpg_import.backends.git import Git, GitConfigStore
from gpg_import.backends.gnupg_backend import GnupgKeyTool
from gpg_import.backends.protocol import ConfigStore, KeyTool, VersionControl

__all__ = [
    "KeyTool",
    "ConfigStore",
    "VersionControl",
    "GnupgKeyTool",
    "Git",
    "GitConfigStore",
    "write_gpg_defaults",
    "write_agent_defaults",
]
