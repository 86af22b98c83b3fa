# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Compile harness for mission source files.

This is the part that actually runs `rustc` on the player's code. It's
deliberately simple: check the source exists, run the subprocess, capture
stderr, return the result. The only thing that decides success is the exit
code; stderr is kept verbatim because it doubles as the compiler log the
player reads.

Three ways to fail that the player must be able to tell apart:
  - the source is gone or the toolchain can't be launched (environment)
  - the compiler ran and rejected the code (their code)
  - the compiler didn't finish in time
"""

import subprocess
import time
from pathlib import Path

from reclaim.engine.models import CompileResult, FailureKind
from reclaim.logging.logger import get_logger

logger = get_logger(__name__)

DEFAULT_COMPILER = "rustc"

SOURCE_MISSING_PREFIX = "ERROR: File not found:"
TOOLCHAIN_ERROR_PREFIX = "CRITICAL ERROR:"
TIMEOUT_PREFIX = "TIMEOUT:"


def source_missing_message(source_path: Path) -> str:
    return (
        f"{SOURCE_MISSING_PREFIX} {source_path}\n\n"
        "Did you delete it? Run `reclaim init` to restore."
    )


def toolchain_error_message(compiler: str, err: OSError) -> str:
    return (
        f"{TOOLCHAIN_ERROR_PREFIX} Could not run '{compiler}'.\n"
        "Is Rust installed?\n"
        f"Details: {err}"
    )


def _artifact_size(artifact_path: Path) -> int | None:
    """Size of the built artifact, or None if we can't stat it."""
    try:
        return artifact_path.stat().st_size
    except OSError:
        return None


def compile_source(
    source_path: Path,
    artifact_path: Path,
    compiler: str = DEFAULT_COMPILER,
    timeout_seconds: float | None = None,
) -> CompileResult:
    """
    Run `<compiler> SOURCE -o ARTIFACT` and capture the result.

    A missing source file short-circuits before anything is launched, so a
    half-initialized workspace never reaches the toolchain.

    A successful compile whose artifact can't be stat'ed is still a success;
    the size just comes back as None.
    """
    start = time.monotonic()

    if not source_path.exists():
        logger.warning(
            "Source file missing, skipping compilation",
            extra={"source_path": str(source_path)},
        )
        return CompileResult(
            success=False,
            diagnostic=source_missing_message(source_path),
            failure=FailureKind.SOURCE_MISSING,
            elapsed_seconds=time.monotonic() - start,
        )

    try:
        result = subprocess.run(
            [compiler, str(source_path), "-o", str(artifact_path)],
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout_seconds,
        )

    except subprocess.TimeoutExpired:
        elapsed = time.monotonic() - start
        logger.warning(
            "Compilation timed out",
            extra={
                "timeout_seconds": timeout_seconds,
                "source_path": str(source_path),
            },
        )
        return CompileResult(
            success=False,
            diagnostic=f"{TIMEOUT_PREFIX} '{compiler}' did not finish within {timeout_seconds}s",
            failure=FailureKind.TIMEOUT,
            elapsed_seconds=elapsed,
        )

    except OSError as err:
        elapsed = time.monotonic() - start
        logger.error(
            "Compiler could not be launched",
            extra={"compiler": compiler, "error": str(err)},
        )
        return CompileResult(
            success=False,
            diagnostic=toolchain_error_message(compiler, err),
            failure=FailureKind.TOOLCHAIN_UNAVAILABLE,
            elapsed_seconds=elapsed,
        )

    elapsed = time.monotonic() - start
    success = result.returncode == 0

    logger.debug(
        "Compilation finished",
        extra={
            "success": success,
            "exit_code": result.returncode,
            "elapsed_seconds": round(elapsed, 3),
            "source_path": str(source_path),
        },
    )

    if not success:
        return CompileResult(
            success=False,
            diagnostic=result.stderr,
            failure=FailureKind.COMPILE_ERROR,
            exit_code=result.returncode,
            elapsed_seconds=elapsed,
        )

    return CompileResult(
        success=True,
        artifact_size=_artifact_size(artifact_path),
        exit_code=result.returncode,
        elapsed_seconds=elapsed,
    )
