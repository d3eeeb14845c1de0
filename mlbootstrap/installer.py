"""Run external tooling and install packages with pip."""
import logging
import subprocess
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from .config import BASE_PACKAGES, PACKAGING_TOOLS, TORCH_PACKAGES, torch_index_url
from .errors import ToolingError

logger = logging.getLogger(__name__)

Runner = Callable[[Sequence[str]], None]

# Shell convention for "command not found"
COMMAND_NOT_FOUND = 127


def run_command(cmd: Sequence[str]) -> None:
    """Run a command in the foreground, inheriting stdio.

    Args:
        cmd: Argument vector

    Raises:
        ToolingError: If the command cannot be started or exits non-zero
    """
    logger.debug("$ %s", " ".join(str(part) for part in cmd))
    try:
        completed = subprocess.run([str(part) for part in cmd], check=False)
    except FileNotFoundError as exc:
        raise ToolingError(cmd, COMMAND_NOT_FOUND) from exc
    if completed.returncode != 0:
        raise ToolingError(cmd, completed.returncode)


def pip_install(
    python: Path | str,
    packages: Iterable[str],
    upgrade: bool = False,
    index_url: str | None = None,
    run: Runner = run_command,
) -> list[str]:
    """Install packages into ``python``'s environment in one pip call.

    Returns:
        The command that was executed
    """
    cmd = [str(python), "-m", "pip", "install"]
    if upgrade:
        cmd.append("--upgrade")
    cmd.extend(packages)
    if index_url:
        cmd.extend(["--index-url", index_url])
    run(cmd)
    return cmd


def upgrade_packaging_tools(python: Path | str, run: Runner = run_command) -> list[str]:
    return pip_install(python, PACKAGING_TOOLS, upgrade=True, run=run)


def install_base_packages(python: Path | str, run: Runner = run_command) -> list[str]:
    logger.info("Installing base packages")
    return pip_install(python, BASE_PACKAGES, run=run)


def install_torch(python: Path | str, cuda: str, run: Runner = run_command) -> list[str]:
    """Install torch, torchvision and torchaudio for a hardware variant.

    Args:
        python: Interpreter of the target environment
        cuda: ``cpu`` or a CUDA build tag such as ``cu121``
        run: Command runner

    Returns:
        The command that was executed
    """
    logger.info("Installing PyTorch (%s)", cuda)
    return pip_install(python, TORCH_PACKAGES, index_url=torch_index_url(cuda), run=run)


def register_kernel(python: Path | str, name: str, run: Runner = run_command) -> list[str]:
    """Register the environment as a Jupyter kernel for the current user."""
    logger.info("Registering Jupyter kernel: %s", name)
    pip_install(python, ["ipykernel"], run=run)
    cmd = [
        str(python), "-m", "ipykernel", "install", "--user",
        "--name", name,
        "--display-name", f"Python ({name})",
    ]
    run(cmd)
    return cmd
