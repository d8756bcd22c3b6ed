"""
Git configuration store backed by the git command line.
"""

import subprocess
from pathlib import Path

import structlog

from gpg_import.exceptions import KeyToolError

logger = structlog.get_logger(__name__)


class GitConfigStore:
    """
    Writes values to one git config file: a repository's local config, or the
    user's global config.
    """

    def __init__(self, *, repository: Path | None, git_binary: str = "git") -> None:
        """
        Args:
            repository: Repository whose local config is written, None for global.
            git_binary: git executable.
        """
        self._repository = repository
        self._git_binary = git_binary

    @property
    def scope(self) -> str:
        return "global" if self._repository is None else "local"

    def set_value(self, name: str, value: str | bool) -> None:
        if isinstance(value, bool):
            args = ["config", f"--{self.scope}", "--type=bool", name, str(value).lower()]
        else:
            args = ["config", f"--{self.scope}", name, value]

        result = _run_git(self._git_binary, args, cwd=self._repository)
        if result.returncode != 0:
            msg = f"Failed to set git config {name}"
            raise KeyToolError(
                msg,
                command=self._git_binary,
                returncode=result.returncode,
                stderr=result.stderr,
            )
        logger.debug("Git config set", name=name, scope=self.scope)


class Git:
    """VersionControl implementation using the git executable."""

    def __init__(self, git_binary: str = "git") -> None:
        self._git_binary = git_binary

    def find_repository(self, path: Path) -> Path | None:
        """Without a usable git there is no repository to configure."""
        try:
            result = _run_git(self._git_binary, ["rev-parse", "--show-toplevel"], cwd=path)
        except KeyToolError as e:
            logger.warning("git unavailable, treating path as outside a repository", error=str(e))
            return None
        if result.returncode != 0:
            return None
        return Path(result.stdout.strip())

    def config_store(self, repository: Path | None) -> GitConfigStore:
        return GitConfigStore(repository=repository, git_binary=self._git_binary)


def _run_git(
    git_binary: str, args: list[str], *, cwd: Path | None
) -> subprocess.CompletedProcess[str]:
    try:
        return subprocess.run(
            [git_binary, *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        msg = f"Unable to run {git_binary}"
        raise KeyToolError(msg, command=git_binary) from e
