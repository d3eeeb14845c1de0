"""Configuration and fixed package sets for the environment bootstrapper.

Defaults can be overridden through environment variables; command-line
flags take precedence over both.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_VENV = os.environ.get("ML_ENV_VENV", ".venv")
DEFAULT_PYTHON = os.environ.get("ML_ENV_PYTHON", "python3")
DEFAULT_CUDA = os.environ.get("ML_ENV_CUDA", "cpu")

CPU_VARIANT = "cpu"

# Upgraded before anything else is installed
PACKAGING_TOOLS: tuple[str, ...] = ("pip", "setuptools", "wheel")

# Core scientific + data stack, installed as one batch
BASE_PACKAGES: tuple[str, ...] = (
    "numpy",
    "scipy",
    "pandas",
    "scikit-learn",
    "matplotlib",
    "seaborn",
    "tqdm",
    "requests",
    "pyyaml",
    "rich",
    "ipdb",
    "utils",
)

TORCH_PACKAGES: tuple[str, ...] = ("torch", "torchvision", "torchaudio")
TORCH_INDEX_BASE = "https://download.pytorch.org/whl"

# Distribution name -> importable module name
VERIFY_MODULES: dict[str, str] = {
    "numpy": "numpy",
    "scipy": "scipy",
    "pandas": "pandas",
    "scikit-learn": "sklearn",
    "matplotlib": "matplotlib",
    "seaborn": "seaborn",
    "tqdm": "tqdm",
    "requests": "requests",
    "pyyaml": "yaml",
    "rich": "rich",
    "torch": "torch",
    "torchvision": "torchvision",
}


@dataclass(frozen=True)
class BootstrapConfig:
    """Options for a single bootstrap run."""

    venv: Path = field(default_factory=lambda: Path(DEFAULT_VENV))
    python: str = DEFAULT_PYTHON
    cuda: str = DEFAULT_CUDA
    register_kernel: bool = False
    verbose: bool = False
    log_file: Path | None = None

    @property
    def kernel_name(self) -> str:
        return self.venv.name


def torch_index_url(cuda: str = CPU_VARIANT) -> str:
    """Return the PyTorch wheel index for a hardware variant.

    Args:
        cuda: ``cpu`` or a CUDA build tag such as ``cu121``

    Returns:
        Index URL passed to ``pip install --index-url``
    """
    # The variant tag is also the index directory name (cpu, cu118, cu121, ...)
    return f"{TORCH_INDEX_BASE}/{cuda}"


def activation_command(venv: Path | str) -> str:
    """Shell command a user runs to activate the environment later."""
    return f'source "{venv}/bin/activate"'
