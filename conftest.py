"""Pytest configuration.

Commands that would create environments or hit the network are replaced by
a recording runner, and the process environment is restored after each test.
"""
import logging
import os
from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings

from mlbootstrap.errors import ToolingError
from mlbootstrap.logging_config import LOGGER_NAME

settings.register_profile(
    "ci",
    derandomize=True,
    max_examples=50,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.register_profile(
    "dev",
    max_examples=20,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "dev"))


class RecordingRunner:
    """Stands in for ``run_command``.

    Records every command, creates the directory for ``-m venv`` and
    raises ToolingError for commands containing ``fail_on``.
    """

    def __init__(self) -> None:
        self.commands: list[list[str]] = []
        self.fail_on: str | None = None
        self.fail_code = 1

    def __call__(self, cmd) -> None:
        cmd = [str(part) for part in cmd]
        self.commands.append(cmd)
        if self.fail_on is not None and self.fail_on in cmd:
            raise ToolingError(cmd, self.fail_code)
        if cmd[1:3] == ["-m", "venv"]:
            Path(cmd[3], "bin").mkdir(parents=True, exist_ok=True)

    def venv_creations(self) -> list[list[str]]:
        return [c for c in self.commands if c[1:3] == ["-m", "venv"]]

    def pip_installs(self) -> list[list[str]]:
        return [c for c in self.commands if c[1:4] == ["-m", "pip", "install"]]


@pytest.fixture
def runner():
    """Fixture providing a fresh recording runner."""
    return RecordingRunner()


@pytest.fixture(autouse=True)
def isolated_environ():
    """Fixture restoring os.environ (activation mutates it)."""
    saved = dict(os.environ)
    yield
    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Fixture running the test inside an empty directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_logging():
    """Fixture dropping handlers bound to a previous test's captured streams."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
