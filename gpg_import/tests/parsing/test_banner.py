from pathlib import Path

import pytest

from gpg_import.exceptions import MalformedToolInfoError
from gpg_import.parsing.banner import parse_tool_info
from gpg_import.tests.utils.listing import render_banner


def test_parse_gnupg_banner() -> None:
    info = parse_tool_info(render_banner("/home/runner/.gnupg"))

    assert info.version == "2.4.3"
    assert info.libgcrypt == "1.10.2"
    assert info.home_dir == Path("/home/runner/.gnupg")


def test_parse_macgpg_banner() -> None:
    info = parse_tool_info(render_banner("/Users/bruce/.gnupg", vendor="GnuPG/MacGPG2"))

    assert info.version == "2.4.3"
    assert info.home_dir == Path("/Users/bruce/.gnupg")


def test_parse_banner_bytes() -> None:
    info = parse_tool_info(render_banner().encode())

    assert info.libgcrypt == "1.10.2"


def test_parse_banner_with_crlf() -> None:
    info = parse_tool_info(render_banner("C:/Users/bruce/gnupg").replace("\n", "\r\n"))

    assert info.version == "2.4.3"
    assert info.home_dir == Path("C:/Users/bruce/gnupg")


def test_home_dir_with_spaces() -> None:
    info = parse_tool_info(render_banner("/home/bruce wayne/.gnupg"))

    assert info.home_dir == Path("/home/bruce wayne/.gnupg")


@pytest.mark.parametrize(
    "banner",
    [
        "",
        "gpg (GnuPG)",
        "gpgv (GnuPG) 2.4.3\nlibgcrypt 1.10.2\nHome: /tmp\n",
        "gpg (OtherPG) 2.4.3\nlibgcrypt 1.10.2\nHome: /tmp\n",
        "gpg (GnuPG) 2.4.3\nHome: /tmp\n",
        "gpg (GnuPG) 2.4.3\nlibgcrypt 1.10.2\n",
    ],
    ids=["empty", "truncated", "gpgv", "unknown-vendor", "no-libgcrypt", "no-home"],
)
def test_malformed_banner_fails(banner: str) -> None:
    with pytest.raises(MalformedToolInfoError):
        parse_tool_info(banner)
