"""Post-install sanity check: can each package be located by import name?

Modules are only located, not imported, so a broken C extension does not
abort the check.
"""
import importlib.util
import inspect
import json
import subprocess
import sys
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any, TextIO

from .config import VERIFY_MODULES
from .errors import ToolingError
from .installer import COMMAND_NOT_FOUND

# Wrapped around the source of find_missing to run it in another interpreter
_CHECK_PRELUDE = """\
from __future__ import annotations
import importlib.util, json, sys
"""
_CHECK_DRIVER = """
print(json.dumps(find_missing(json.loads(sys.argv[1]))))
"""


def find_missing(
    modules: Iterable[str],
    finder: Callable[[str], Any] = importlib.util.find_spec,
) -> list[str]:
    """Return the module names that cannot be located, in input order.

    Args:
        modules: Importable module names
        finder: Locator returning None for an absent module

    Returns:
        Names of missing modules
    """
    missing = []
    for name in modules:
        try:
            spec = finder(name)
        except (ImportError, ValueError):
            spec = None
        if spec is None:
            missing.append(name)
    return missing


def check_source() -> str:
    """Program that runs :func:`find_missing` in the target interpreter.

    It reads a JSON list of module names from ``argv[1]`` and prints the
    JSON list of missing ones.
    """
    return _CHECK_PRELUDE + "\n" + inspect.getsource(find_missing) + _CHECK_DRIVER


def _capture(cmd: list[str]) -> subprocess.CompletedProcess:
    return subprocess.run(cmd, capture_output=True, text=True, check=False)


def check_environment(
    python: Path | str,
    modules: Mapping[str, str] = VERIFY_MODULES,
    capture: Callable[[list[str]], subprocess.CompletedProcess] = _capture,
) -> list[str]:
    """Run :func:`find_missing` inside another interpreter.

    Args:
        python: Interpreter of the environment to check
        modules: Distribution name -> import name
        capture: Runs a command and returns its captured output

    Returns:
        Import names that the environment cannot locate

    Raises:
        ToolingError: If the interpreter fails or prints unexpected output
    """
    cmd = [str(python), "-c", check_source(), json.dumps(list(modules.values()))]
    completed = _capture_or_raise(cmd, capture)
    try:
        missing = json.loads(completed.stdout.strip().splitlines()[-1])
    except (IndexError, json.JSONDecodeError) as exc:
        raise ToolingError(cmd, completed.returncode or 1) from exc
    if not isinstance(missing, list):
        raise ToolingError(cmd, 1)
    return [str(name) for name in missing]


def _capture_or_raise(cmd, capture):
    try:
        completed = capture(cmd)
    except FileNotFoundError as exc:
        raise ToolingError(cmd, COMMAND_NOT_FOUND) from exc
    if completed.returncode != 0:
        raise ToolingError(cmd, completed.returncode)
    return completed


def format_report(missing: Iterable[str]) -> str:
    missing = list(missing)
    if not missing:
        return "Sanity check: OK"
    return f"Sanity check: Missing: {', '.join(missing)}"


def report(missing: Iterable[str], stream: TextIO | None = None) -> str:
    """Print the sanity-check line to the diagnostic stream."""
    line = format_report(missing)
    print(line, file=stream if stream is not None else sys.stderr)
    return line
