"""Tests for the command runner and pip installation steps."""
import subprocess
import sys

import pytest

from mlbootstrap import installer
from mlbootstrap.config import BASE_PACKAGES
from mlbootstrap.errors import ToolingError


def test_run_command_success():
    installer.run_command([sys.executable, "-c", "pass"])


def test_run_command_propagates_exit_status():
    with pytest.raises(ToolingError) as excinfo:
        installer.run_command([sys.executable, "-c", "import sys; sys.exit(3)"])
    assert excinfo.value.returncode == 3
    assert excinfo.value.exit_code == 3


def test_run_command_missing_executable():
    with pytest.raises(ToolingError) as excinfo:
        installer.run_command(["definitely-not-an-interpreter-xyz", "-m", "venv", "x"])
    assert excinfo.value.returncode == installer.COMMAND_NOT_FOUND


def test_run_command_stringifies_paths(monkeypatch, tmp_path):
    seen = []

    def fake_run(cmd, check):
        seen.append(cmd)
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr(installer.subprocess, "run", fake_run)
    installer.run_command([tmp_path / "python", "-V"])
    assert seen == [[str(tmp_path / "python"), "-V"]]


def test_upgrade_packaging_tools(runner):
    cmd = installer.upgrade_packaging_tools("py", run=runner)
    assert cmd == ["py", "-m", "pip", "install", "--upgrade", "pip", "setuptools", "wheel"]
    assert runner.commands == [cmd]


def test_base_packages_installed_in_one_batch(runner):
    installer.install_base_packages("py", run=runner)
    assert runner.commands == [["py", "-m", "pip", "install", *BASE_PACKAGES]]


def test_torch_cpu_index(runner):
    cmd = installer.install_torch("py", "cpu", run=runner)
    assert cmd[4:7] == ["torch", "torchvision", "torchaudio"]
    assert cmd[-2:] == ["--index-url", "https://download.pytorch.org/whl/cpu"]


def test_torch_cuda_index(runner):
    cmd = installer.install_torch("py", "cu121", run=runner)
    assert cmd[-2:] == ["--index-url", "https://download.pytorch.org/whl/cu121"]


def test_register_kernel(runner):
    installer.register_kernel("py", ".mlenv", run=runner)
    assert runner.commands == [
        ["py", "-m", "pip", "install", "ipykernel"],
        [
            "py", "-m", "ipykernel", "install", "--user",
            "--name", ".mlenv", "--display-name", "Python (.mlenv)",
        ],
    ]


def test_failure_stops_at_failing_command(runner):
    runner.fail_on = "ipykernel"
    with pytest.raises(ToolingError):
        installer.register_kernel("py", "env", run=runner)
    assert len(runner.commands) == 1
