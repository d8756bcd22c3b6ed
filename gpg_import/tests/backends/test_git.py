import subprocess
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from gpg_import.backends.git import Git, GitConfigStore
from gpg_import.backends.protocol import ConfigStore, VersionControl
from gpg_import.exceptions import KeyToolError

REPOSITORY = Path("/work/batcave")


def completed(
    returncode: int = 0, stdout: str = "", stderr: str = ""
) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(["git"], returncode, stdout, stderr)


@pytest.fixture
def mock_run() -> Iterator[Mock]:
    with patch("gpg_import.backends.git.subprocess.run") as run:
        run.return_value = completed()
        yield run


def test_implements_protocols() -> None:
    git = Git()

    assert isinstance(git, VersionControl)
    assert isinstance(git.config_store(None), ConfigStore)


def test_find_repository_returns_top_level(mock_run: Mock) -> None:
    mock_run.return_value = completed(stdout=f"{REPOSITORY}\n")

    assert Git().find_repository(REPOSITORY / "src") == REPOSITORY
    mock_run.assert_called_once_with(
        ["git", "rev-parse", "--show-toplevel"],
        cwd=REPOSITORY / "src",
        capture_output=True,
        text=True,
        check=False,
    )


def test_find_repository_outside_repository(mock_run: Mock) -> None:
    mock_run.return_value = completed(
        returncode=128, stderr="fatal: not a git repository (or any of the parent directories)"
    )

    assert Git().find_repository(Path("/tmp")) is None


def test_local_store_writes_repository_config(mock_run: Mock) -> None:
    store = Git().config_store(REPOSITORY)

    store.set_value("user.signingKey", "FDEFE8AB8796E127")

    assert store.scope == "local"
    mock_run.assert_called_once_with(
        ["git", "config", "--local", "user.signingKey", "FDEFE8AB8796E127"],
        cwd=REPOSITORY,
        capture_output=True,
        text=True,
        check=False,
    )


def test_global_store_writes_global_config(mock_run: Mock) -> None:
    store = GitConfigStore(repository=None, git_binary="/usr/bin/git")

    store.set_value("user.email", "batman@dc.com")

    assert store.scope == "global"
    assert mock_run.call_args.args[0] == [
        "/usr/bin/git",
        "config",
        "--global",
        "user.email",
        "batman@dc.com",
    ]
    assert mock_run.call_args.kwargs["cwd"] is None


@pytest.mark.parametrize(("value", "expected"), [(True, "true"), (False, "false")])
def test_bool_values_are_typed(mock_run: Mock, value: bool, expected: str) -> None:
    GitConfigStore(repository=REPOSITORY).set_value("commit.gpgsign", value)

    assert mock_run.call_args.args[0] == [
        "git",
        "config",
        "--local",
        "--type=bool",
        "commit.gpgsign",
        expected,
    ]


def test_failed_write_raises_key_tool_error(mock_run: Mock) -> None:
    mock_run.return_value = completed(returncode=255, stderr="error: could not lock config file")

    with pytest.raises(KeyToolError, match="Failed to set git config user.name") as exc_info:
        GitConfigStore(repository=REPOSITORY).set_value("user.name", "batman")

    assert exc_info.value.returncode == 255
    assert exc_info.value.stderr == "error: could not lock config file"


def test_missing_git_binary_is_outside_repository(mock_run: Mock) -> None:
    mock_run.side_effect = FileNotFoundError("git")

    assert Git().find_repository(REPOSITORY) is None


def test_missing_git_binary_fails_config_write(mock_run: Mock) -> None:
    mock_run.side_effect = FileNotFoundError("git")

    with pytest.raises(KeyToolError, match="Unable to run git"):
        GitConfigStore(repository=None).set_value("user.name", "batman")
