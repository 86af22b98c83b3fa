# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runs a compiled mission artifact.

The artifact gets its inputs as positional arguments and answers with one
line on stdout. This module doesn't judge that line; it only reports how
the process ended and how long it took:

  OK        exit code 0
  CRASH     non-zero exit (including death by signal)
  EXEC_ERR  couldn't launch it at all (missing file, not executable)
  TIMEOUT   still running when the deadline passed; it gets killed
"""

import math
import subprocess
import time
from collections.abc import Sequence
from decimal import Decimal
from pathlib import Path

from reclaim.engine.models import ExecOutcome, ExecutionResult
from reclaim.logging.logger import get_logger

logger = get_logger(__name__)


def format_arg(value: int | float | str) -> str:
    """
    Render an input as a plain decimal string.

    Floats keep their shortest repr (`8.2`, `45.0`) and never use exponent
    notation.
    """
    if isinstance(value, bool):
        raise TypeError("booleans are not valid artifact arguments")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"non-finite artifact argument: {value}")
        text = repr(value)
        if "e" in text:
            text = format(Decimal(text), "f")
        return text
    return str(value)


def run_artifact(
    artifact_path: Path,
    args: Sequence[int | float | str],
    timeout_seconds: float | None = None,
) -> ExecutionResult:
    """Launch the artifact once with the given arguments and wait for it."""
    argv = [str(artifact_path), *(format_arg(a) for a in args)]
    start = time.monotonic()

    try:
        result = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout_seconds,
        )

    except subprocess.TimeoutExpired:
        elapsed = time.monotonic() - start
        logger.warning(
            "Artifact timed out",
            extra={"artifact": str(artifact_path), "timeout_seconds": timeout_seconds},
        )
        return ExecutionResult(
            outcome=ExecOutcome.TIMEOUT,
            stderr=f"artifact did not exit within {timeout_seconds}s",
            elapsed_seconds=elapsed,
        )

    except OSError as err:
        logger.warning(
            "Artifact could not be launched",
            extra={"artifact": str(artifact_path), "error": str(err)},
        )
        return ExecutionResult(
            outcome=ExecOutcome.EXEC_ERR,
            stderr=str(err),
            elapsed_seconds=time.monotonic() - start,
        )

    elapsed = time.monotonic() - start
    outcome = ExecOutcome.OK if result.returncode == 0 else ExecOutcome.CRASH

    logger.debug(
        "Artifact finished",
        extra={
            "artifact": str(artifact_path),
            "argv": argv[1:],
            "exit_code": result.returncode,
            "elapsed_seconds": round(elapsed, 6),
        },
    )

    return ExecutionResult(
        outcome=outcome,
        stdout=result.stdout,
        stderr=result.stderr,
        exit_code=result.returncode,
        elapsed_seconds=elapsed,
    )
