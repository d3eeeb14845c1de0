"""Bootstrap a Python virtual environment with a data-science / ML stack."""

from .config import (
    BASE_PACKAGES,
    TORCH_PACKAGES,
    VERIFY_MODULES,
    BootstrapConfig,
    activation_command,
    torch_index_url,
)
from .errors import BootstrapError, ConfigurationError, ToolingError
from .bootstrap import main

__version__ = "0.1.0"
