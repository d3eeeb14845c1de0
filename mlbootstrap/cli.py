"""Command-line parsing for ``setup-ml-env``."""
import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from .config import DEFAULT_CUDA, DEFAULT_PYTHON, DEFAULT_VENV, BootstrapConfig
from .errors import ConfigurationError

HELP_FLAGS = ("-h", "--help")
# Options that consume the following token as their value
VALUE_FLAGS = ("--venv", "--python", "--cuda", "--log-file")

EPILOG = """\
examples:
  setup-ml-env                        # uses .venv, python3, PyTorch CPU wheels
  setup-ml-env --venv .mlenv          # custom venv path
  setup-ml-env --python python3.11
  setup-ml-env --cuda cu121           # install PyTorch for CUDA 12.1

Valid --cuda values include: cpu (default), cu118, cu121, cu122, etc.
"""


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise ConfigurationError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="setup-ml-env",
        description="Create/activate a venv and install core ML packages.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        add_help=False,
    )
    parser.add_argument(
        *HELP_FLAGS,
        action="store_true",
        help="show this help message and exit",
    )
    parser.add_argument(
        "--venv",
        type=Path,
        default=Path(DEFAULT_VENV),
        metavar="PATH",
        help="virtual environment directory (default: %(default)s)",
    )
    parser.add_argument(
        "--python",
        default=DEFAULT_PYTHON,
        metavar="NAME",
        help="interpreter used to create the venv (default: %(default)s)",
    )
    parser.add_argument(
        "--cuda",
        default=DEFAULT_CUDA,
        metavar="TAG",
        help="PyTorch build: cpu or a CUDA tag like cu121 (default: %(default)s)",
    )
    parser.add_argument(
        "--kernel",
        action="store_true",
        help="register a Jupyter kernel named after the venv",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        metavar="PATH",
        help="also write the log to this file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log every command before it runs",
    )
    return parser


def _help_index(argv: Sequence[str]) -> int | None:
    """Position of the first help flag, skipping option values."""
    i = 0
    while i < len(argv):
        token = argv[i]
        if token in HELP_FLAGS:
            return i
        i += 2 if token in VALUE_FLAGS else 1
    return None


def parse_args(argv: Sequence[str] | None = None) -> BootstrapConfig:
    """Parse command-line arguments into a BootstrapConfig.

    Arguments are handled in order: ``-h``/``--help`` prints usage and
    raises ``SystemExit(0)`` unless an unknown argument comes before it.

    Args:
        argv: Arguments without the program name (default: ``sys.argv[1:]``)

    Returns:
        Parsed configuration

    Raises:
        ConfigurationError: On an unknown argument or a flag missing its value
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()

    help_at = _help_index(argv)
    if help_at is not None:
        _, unknown = parser.parse_known_args(argv[:help_at])
        if unknown:
            raise ConfigurationError(f"Unknown argument: {unknown[0]}")
        parser.print_help()
        parser.exit(0)

    args, unknown = parser.parse_known_args(argv)
    if unknown:
        raise ConfigurationError(f"Unknown argument: {unknown[0]}")
    if not args.cuda:
        raise ConfigurationError("--cuda requires a non-empty variant tag")

    return BootstrapConfig(
        venv=args.venv,
        python=args.python,
        cuda=args.cuda,
        register_kernel=args.kernel,
        verbose=args.verbose,
        log_file=args.log_file,
    )
