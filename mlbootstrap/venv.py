"""Create and activate the target virtual environment."""
import logging
import os
from collections.abc import MutableMapping
from pathlib import Path

from .config import BootstrapConfig
from .installer import Runner, run_command

logger = logging.getLogger(__name__)


def venv_bin_dir(venv: Path | str) -> Path:
    """Directory holding the environment's executables."""
    return Path(venv) / ("Scripts" if os.name == "nt" else "bin")


def venv_python(venv: Path | str) -> Path:
    """Path where the environment's interpreter lives (may not exist yet)."""
    exe = "python.exe" if os.name == "nt" else "python"
    return venv_bin_dir(venv) / exe


def ensure_venv(config: BootstrapConfig, run: Runner = run_command) -> bool:
    """Create the environment unless its directory already exists.

    Args:
        config: Bootstrap options (venv path and creating interpreter)
        run: Command runner

    Returns:
        True if the environment was created, False if it was reused
    """
    if config.venv.is_dir():
        logger.debug("Reusing existing venv at: %s", config.venv)
        return False

    logger.info("Creating venv at: %s using %s", config.venv, config.python)
    run([config.python, "-m", "venv", str(config.venv)])
    return True


def activate(
    venv: Path | str,
    environ: MutableMapping[str, str] | None = None,
) -> Path:
    """Activate the environment for this process and its children.

    Applies the same changes as sourcing ``bin/activate``: sets
    ``VIRTUAL_ENV``, puts the bin directory first on ``PATH`` and
    drops ``PYTHONHOME``.

    Args:
        venv: Environment directory
        environ: Mapping to modify (default: ``os.environ``)

    Returns:
        The environment's interpreter
    """
    if environ is None:
        environ = os.environ

    venv_path = Path(venv).absolute()
    bin_dir = str(venv_bin_dir(venv_path))

    environ["VIRTUAL_ENV"] = str(venv_path)
    path = environ.get("PATH", "")
    environ["PATH"] = os.pathsep.join([bin_dir, path]) if path else bin_dir
    environ.pop("PYTHONHOME", None)

    return venv_python(venv_path)
