"""Exceptions raised while bootstrapping an environment."""
from collections.abc import Sequence


class BootstrapError(Exception):
    """Base class for bootstrapper failures."""

    exit_code = 1


class ConfigurationError(BootstrapError):
    """Invalid or unknown command-line argument."""


class ToolingError(BootstrapError):
    """An external command (venv creation, pip, ...) failed.

    Args:
        command: The argument vector that was executed
        returncode: Exit status reported by the command
    """

    def __init__(self, command: Sequence[str], returncode: int) -> None:
        self.command = list(command)
        self.returncode = returncode
        super().__init__(
            f"Command failed with exit status {returncode}: {' '.join(self.command)}"
        )

    @property
    def exit_code(self) -> int:
        # Killed by signal N: report 128 + N, as a shell does
        if self.returncode < 0:
            return 128 - self.returncode
        return self.returncode or 1
