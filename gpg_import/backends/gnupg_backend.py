"""
GnuPG key tool backed by python-gnupg and the gpg command line.

python-gnupg handles the key import. Everything python-gnupg does not expose
(raw colon listings, agent commands, interactive trust editing) runs gpg and
gpg-connect-agent directly, with the same home directory.
"""

import subprocess
from pathlib import Path

import gnupg
import structlog

from gpg_import.crypto.secure_bytes import SecureBytes
from gpg_import.exceptions import InvalidKeyDataError, KeyNotFoundError, KeyToolError

logger = structlog.get_logger(__name__)

_LISTING_ARGS = ["--batch", "--with-colons", "--with-keygrip", "--fixed-list-mode"]


class GnupgKeyTool:
    """
    KeyTool implementation for a local GnuPG installation.

    Example:
        tool = GnupgKeyTool(home_dir=Path("~/.gnupg").expanduser())
        diagnostics = tool.import_secret_key(key_data)
    """

    def __init__(
        self,
        *,
        home_dir: Path | None = None,
        gpg_binary: str = "gpg",
        agent_binary: str = "gpg-connect-agent",
    ) -> None:
        """
        Args:
            home_dir: GnuPG home directory, gpg's default when None.
            gpg_binary: gpg executable.
            agent_binary: gpg-connect-agent executable.
        """
        self._home_dir = home_dir
        self._gpg_binary = gpg_binary
        self._agent_binary = agent_binary
        try:
            self._gpg = gnupg.GPG(
                gpgbinary=gpg_binary,
                gnupghome=str(home_dir) if home_dir is not None else None,
            )
        except (OSError, ValueError) as e:
            msg = f"Unable to run {gpg_binary}, is GnuPG installed?"
            raise KeyToolError(msg, command=gpg_binary) from e

    def version_banner(self) -> str:
        result = self._run(self._gpg_command("--version"))
        self._check(result, "Failed to detect GnuPG version")
        return _decode(result.stdout)

    def import_secret_key(self, key_data: SecureBytes) -> str:
        logger.debug("Importing secret key", home_dir=self._home_dir)
        result = self._gpg.import_keys(bytes(key_data), extra_args=["--batch", "--yes"])

        diagnostics = result.stderr or ""
        if not result.fingerprints:
            raise InvalidKeyDataError(diagnostic=diagnostics)
        return diagnostics

    def list_secret_key(self, key_id: str) -> str:
        result = self._run(self._gpg_command(*_LISTING_ARGS, "--list-secret-keys", key_id))
        listing = _decode(result.stdout)
        if result.returncode != 0 or not listing.strip():
            raise KeyNotFoundError(key_id=key_id)
        return listing

    def show_secret_key(self, key_data: SecureBytes) -> str:
        result = self._run(self._gpg_command(*_LISTING_ARGS, "--show-keys"), key_data)
        listing = _decode(result.stdout)
        if result.returncode != 0 or not listing.strip():
            raise InvalidKeyDataError(diagnostic=_decode(result.stderr))
        return listing

    def reload_agent(self) -> None:
        result = self._run(self._agent_command("RELOADAGENT", "/bye"))
        self._check(result, "Failed to reload gpg-agent")

    def preset_passphrase(self, keygrip: str, passphrase: SecureBytes) -> None:
        logger.debug("Presetting passphrase", keygrip=keygrip)
        with passphrase.hex_upper() as encoded:
            result = self._run(
                self._agent_command(),
                f"PRESET_PASSPHRASE {keygrip} -1 ".encode(),
                encoded,
                b"\n",
            )
        self._check(result, "Failed to preset passphrase")

        # gpg-connect-agent exits 0 even when the agent refuses a command
        for line in _decode(result.stdout).splitlines():
            if line.startswith("ERR"):
                msg = f"gpg-agent refused passphrase for keygrip {keygrip}: {line}"
                raise KeyToolError(msg, command=self._agent_binary)

    def assign_trust_level(self, key_id: str, trust_level: int) -> None:
        logger.debug("Assigning trust level", key_id=key_id, trust_level=trust_level)
        command = self._gpg_command(
            "--batch", "--no-tty", "--command-fd", "0", "--edit-key", key_id, "trust", "quit"
        )
        result = self._run(command, f"{trust_level}\ny\n".encode())
        self._check(result, "Failed to assign trust level")

    def _gpg_command(self, *args: str) -> list[str]:
        return [self._gpg_binary, *self._home_args(), *args]

    def _agent_command(self, *args: str) -> list[str]:
        return [self._agent_binary, *self._home_args(), *args]

    def _home_args(self) -> list[str]:
        if self._home_dir is None:
            return []
        return ["--homedir", str(self._home_dir)]

    @staticmethod
    def _run(
        command: list[str], *stdin_parts: bytes | SecureBytes
    ) -> subprocess.CompletedProcess[bytes]:
        """
        Run a command, writing `stdin_parts` to its standard input.

        Secrets are written straight from their SecureBytes buffer and never
        concatenated into a regular bytes object.
        """
        logger.debug("Running command", command=command[0], args=command[1:])
        try:
            process = subprocess.Popen(
                command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            msg = f"Unable to run {command[0]}"
            raise KeyToolError(msg, command=command[0]) from e

        with process:
            assert process.stdin is not None
            try:
                for part in stdin_parts:
                    if isinstance(part, SecureBytes):
                        part.write_to(process.stdin)
                    else:
                        process.stdin.write(part)
            except BrokenPipeError:
                # the command exited early, its exit status reports why
                logger.debug("Command closed its input early", command=command[0])
            stdout, stderr = process.communicate()

        return subprocess.CompletedProcess(command, process.returncode, stdout, stderr)

    @staticmethod
    def _check(result: subprocess.CompletedProcess[bytes], message: str) -> None:
        if result.returncode == 0:
            return
        stderr = _decode(result.stderr)
        logger.error(message, command=result.args[0], returncode=result.returncode)
        raise KeyToolError(
            message,
            command=result.args[0],
            returncode=result.returncode,
            stderr=stderr,
        )


def _decode(output: bytes | None) -> str:
    return (output or b"").decode("utf-8", errors="replace")
