"""
Default GnuPG and gpg-agent configuration for non-interactive signing.
"""

from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

GPG_CONF = "gpg.conf"
GPG_AGENT_CONF = "gpg-agent.conf"

GPG_DEFAULTS = """use-agent
pinentry-mode loopback
"""

# Cache passphrases for 6 hours, and allow them to be preset
GPG_AGENT_DEFAULTS = """default-cache-ttl 21600
max-cache-ttl 31536000
allow-preset-passphrase
allow-loopback-pinentry
"""


def write_gpg_defaults(home_dir: Path) -> Path:
    """Write gpg.conf, replacing any existing one."""
    return _write(home_dir / GPG_CONF, GPG_DEFAULTS)


def write_agent_defaults(home_dir: Path) -> Path:
    """Write gpg-agent.conf, replacing any existing one."""
    return _write(home_dir / GPG_AGENT_CONF, GPG_AGENT_DEFAULTS)


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.debug("Config written", path=str(path))
    return path
