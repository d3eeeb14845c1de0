"""Create/activate a venv and install core ML packages.

Usage:
    setup-ml-env                    # uses .venv, python3, PyTorch CPU wheels
    setup-ml-env --venv .mlenv      # custom venv path
    setup-ml-env --python python3.11
    setup-ml-env --cuda cu121       # install PyTorch for CUDA 12.1
"""
import logging
import sys
from collections.abc import Sequence

from . import installer, venv, verify
from .cli import parse_args
from .config import BootstrapConfig, activation_command
from .errors import BootstrapError, ConfigurationError, ToolingError
from .installer import Runner, run_command
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def bootstrap(config: BootstrapConfig, run: Runner = run_command) -> list[str] | None:
    """Run every setup step in order, stopping at the first failure.

    Args:
        config: Parsed options
        run: Command runner for venv creation and pip

    Returns:
        Import names missing after installation, or None if the sanity
        check itself could not run

    Raises:
        ToolingError: If venv creation or any pip invocation fails
    """
    venv.ensure_venv(config, run=run)
    python = venv.activate(config.venv)

    installer.upgrade_packaging_tools(python, run=run)
    installer.install_base_packages(python, run=run)
    installer.install_torch(python, config.cuda, run=run)

    if config.register_kernel:
        installer.register_kernel(python, config.kernel_name, run=run)

    print(f"[✓] Done. Activate with:  {activation_command(config.venv)}")

    # Informational only: never changes the exit status
    try:
        missing = verify.check_environment(python)
    except ToolingError as exc:
        logger.warning("Sanity check could not run: %s", exc)
        return None
    verify.report(missing)
    return missing


def main(argv: Sequence[str] | None = None) -> int:
    """Console entry point.

    Returns:
        Process exit status
    """
    try:
        config = parse_args(argv)
    except ConfigurationError as exc:
        print(exc, file=sys.stderr)
        return exc.exit_code

    try:
        setup_logging(
            logging.DEBUG if config.verbose else logging.INFO,
            log_file=str(config.log_file) if config.log_file else None,
        )
    except OSError as exc:
        print(f"Cannot open log file: {exc}", file=sys.stderr)
        return ConfigurationError.exit_code

    try:
        bootstrap(config)
    except BootstrapError as exc:
        logger.error("%s", exc)
        return exc.exit_code
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
