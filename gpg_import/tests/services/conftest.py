import io
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from gpg_import.config import ImportConfig
from gpg_import.services.import_service import ImportService
from gpg_import.tests.services.constants import ENCODED_KEY, NOW
from gpg_import.tests.utils.listing import render_banner
from gpg_import.tests.utils.recording_tools import RecordingGit, RecordingKeyTool


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    return tmp_path / ".gnupg"


@pytest.fixture
def repository(tmp_path: Path) -> Path:
    return tmp_path / "repo"


@pytest.fixture
def key_tool(home_dir: Path) -> RecordingKeyTool:
    return RecordingKeyTool(banner=render_banner(home_dir))


@pytest.fixture
def git(repository: Path) -> RecordingGit:
    return RecordingGit(repository)


@pytest.fixture
def report() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def service(key_tool: RecordingKeyTool, git: RecordingGit, report: io.StringIO) -> ImportService:
    return ImportService(key_tool, git, out=report, clock=lambda: NOW)


@pytest.fixture
def make_config(repository: Path) -> Iterator[Callable[..., ImportConfig]]:
    configs: list[ImportConfig] = []

    def _make(**options: object) -> ImportConfig:
        options.setdefault("key", ENCODED_KEY)
        options.setdefault("working_dir", repository)
        config = ImportConfig.create(**options)  # type: ignore[arg-type]
        configs.append(config)
        return config

    yield _make

    for config in configs:
        config.clear()
