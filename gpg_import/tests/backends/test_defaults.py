from pathlib import Path

from gpg_import.backends.defaults import (
    GPG_AGENT_DEFAULTS,
    GPG_DEFAULTS,
    write_agent_defaults,
    write_gpg_defaults,
)


def test_write_gpg_defaults(tmp_path: Path) -> None:
    path = write_gpg_defaults(tmp_path)

    assert path == tmp_path / "gpg.conf"
    assert path.read_text() == "use-agent\npinentry-mode loopback\n"


def test_write_agent_defaults(tmp_path: Path) -> None:
    path = write_agent_defaults(tmp_path)

    assert path == tmp_path / "gpg-agent.conf"
    assert path.read_text().splitlines() == [
        "default-cache-ttl 21600",
        "max-cache-ttl 31536000",
        "allow-preset-passphrase",
        "allow-loopback-pinentry",
    ]


def test_existing_config_is_replaced(tmp_path: Path) -> None:
    (tmp_path / "gpg.conf").write_text("keyserver hkps://keys.openpgp.org\n")

    write_gpg_defaults(tmp_path)

    assert (tmp_path / "gpg.conf").read_text() == GPG_DEFAULTS


def test_missing_home_dir_is_created_private(tmp_path: Path) -> None:
    home_dir = tmp_path / "runner" / ".gnupg"

    write_agent_defaults(home_dir)

    assert (home_dir / "gpg-agent.conf").read_text() == GPG_AGENT_DEFAULTS
    assert home_dir.stat().st_mode & 0o077 == 0
