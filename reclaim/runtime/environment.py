# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Environment checks for Reclaim.

Checks that the machine can actually play: a new enough Python, and a
compiler on PATH. A missing compiler isn't fatal here (the engine reports
it per compile), but `reclaim info` surfaces it up front.
"""

import platform
import shutil
import subprocess
import sys
from typing import NamedTuple

MINIMUM_PYTHON_MAJOR = 3
MINIMUM_PYTHON_MINOR = 10


class SystemInfo(NamedTuple):
    """Snapshot of the current system environment."""

    python_version: str
    platform: str
    architecture: str


class ToolchainInfo(NamedTuple):
    compiler: str
    path: str | None
    version: str | None


def get_python_version() -> tuple[int, int, int]:
    """Return the current Python version as a (major, minor, micro) tuple."""
    return sys.version_info[:3]


def check_minimum_python() -> None:
    """
    Verify we're running a supported Python.

    Raises:
        RuntimeError: If Python version is below the minimum.
    """
    major, minor, _ = get_python_version()
    if major < MINIMUM_PYTHON_MAJOR or (
        major == MINIMUM_PYTHON_MAJOR and minor < MINIMUM_PYTHON_MINOR
    ):
        raise RuntimeError(
            f"Reclaim requires Python >= {MINIMUM_PYTHON_MAJOR}.{MINIMUM_PYTHON_MINOR}, "
            f"but you're running {major}.{minor}. Please upgrade."
        )


def get_system_info() -> SystemInfo:
    """Collect basic system information for logging and diagnostics."""
    return SystemInfo(
        python_version=platform.python_version(),
        platform=platform.system(),
        architecture=platform.machine(),
    )


def find_toolchain(compiler: str, timeout_seconds: float = 10.0) -> ToolchainInfo:
    """Locate the compiler and ask it for its version, if it's there."""
    path = shutil.which(compiler)
    if path is None:
        return ToolchainInfo(compiler=compiler, path=None, version=None)

    try:
        result = subprocess.run(
            [path, "--version"],
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.TimeoutExpired):
        return ToolchainInfo(compiler=compiler, path=path, version=None)

    version = result.stdout.strip() if result.returncode == 0 else None
    return ToolchainInfo(compiler=compiler, path=path, version=version or None)
