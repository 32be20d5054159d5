"""Local interpreter checks.

Reports which Python interpreters from the support matrix are installed on
the runner, and which version each one reports.
"""

import re
import shutil
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

from .logging_config import logger

# "Python 3.12.4", "Python 3.13.0rc2", "pypy 7.3.16 (Python 3.10.14)"
_VERSION_RE = re.compile(r"Python\s+(\d+\.\d+(?:\.\d+)?(?:(?:a|b|rc)\d+)?\+?)", re.IGNORECASE)

VERSION_TIMEOUT = 10  # seconds


@dataclass
class ToolStatus:
    """Status of a local interpreter."""

    name: str
    command: str
    available: bool
    path: Optional[str] = None
    version: Optional[str] = None


def check_tool_available(command: str) -> tuple[bool, Optional[str]]:
    """
    Check if a command-line tool is available on the system.

    Args:
        command: The command to check (e.g., "python3.12")

    Returns:
        Tuple of (is_available, path_if_found)
    """
    path = shutil.which(command)
    return (path is not None, path)


def parse_version_output(output: str) -> Optional[str]:
    """
    Extract a version from `--version` output.

    When the output is not recognised the first non-empty line is returned
    as-is, so callers always get the best available string.

    Args:
        output: Combined stdout/stderr of the version command

    Returns:
        The version (e.g. "3.12.4"), the first output line, or None for empty output
    """
    match = _VERSION_RE.search(output)
    if match:
        return match.group(1)

    for line in output.splitlines():
        line = line.strip()
        if line:
            logger.debug(f"Unrecognised version output, using first line: {line}")
            return line
    return None


def get_tool_version(command: str, args: Sequence[str] = ("--version",)) -> Optional[str]:
    """
    Run `<command> --version` and return the reported version.

    Args:
        command: Executable name or path
        args: Arguments that make the tool print its version

    Returns:
        Parsed version string, or None if the command could not be run
    """
    try:
        result = subprocess.run(
            [command, *args],
            capture_output=True,
            text=True,
            shell=False,
            timeout=VERSION_TIMEOUT,
        )
    except FileNotFoundError:
        logger.debug(f"{command} not found")
        return None
    except subprocess.TimeoutExpired:
        logger.warning(f"{command} {' '.join(args)} timed out")
        return None
    except OSError as e:
        logger.warning(f"Could not run {command}: {e}")
        return None

    # Python 2 and some wrappers print the version to stderr
    return parse_version_output(f"{result.stdout}\n{result.stderr}")


def check_python_interpreter(version: str) -> ToolStatus:
    """
    Check for a `pythonX.Y` interpreter on PATH.

    Args:
        version: "major.minor" release line
    """
    command = f"python{version}"
    available, path = check_tool_available(command)
    reported = get_tool_version(path) if available and path else None
    return ToolStatus(
        name=f"Python {version}",
        command=command,
        available=available,
        path=path,
        version=reported,
    )


def detect_python_interpreters(versions: Sequence[str]) -> dict[str, ToolStatus]:
    """
    Check every release line for a local interpreter.

    Args:
        versions: "major.minor" release lines

    Returns:
        Mapping of release line to ToolStatus, in input order
    """
    return {version: check_python_interpreter(version) for version in versions}


def log_tool_status(statuses: dict[str, ToolStatus]) -> None:
    """Log which interpreters are installed and which are missing."""
    available = [s for s in statuses.values() if s.available]
    missing = [s for s in statuses.values() if not s.available]

    if available:
        logger.info(f"Available interpreters: {', '.join(f'{s.command} ({s.version})' for s in available)}")
    if missing:
        logger.warning(f"Missing interpreters: {', '.join(s.command for s in missing)}")
