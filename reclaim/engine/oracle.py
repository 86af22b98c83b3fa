# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Verification oracle: the engine's own answer key.

Two kinds of checks run against a learner artifact:

  Sanity check: once per compile, a fixed input with a known answer. The
  trimmed output has to match the expected literal exactly, two decimals
  and all. This is what catches "it compiles but the math is wrong"
  before any gameplay happens.

  Gameplay checks: run on every player action with live inputs.
    - distance (navigation): the number is only displayed, never judged;
      the mission completes when the player steps on the target.
    - dosing: the output is compared to the reference formula within
      TOLERANCE and a match completes the mission.

None of the failure paths here raise. A crash, a missing binary or
unparsable output all come back as text the player can read.
"""

import math
from dataclasses import dataclass
from pathlib import Path

from reclaim.engine.models import (
    ExecOutcome,
    ExecutionResult,
    FailureKind,
    MissionKind,
    Verdict,
)
from reclaim.engine.runner import run_artifact
from reclaim.logging.logger import get_logger

logger = get_logger(__name__)

TOLERANCE = 0.1

NEUTRAL_PH = 7.0
ACIDIC_BOOST = 2.0
BASIC_REDUCTION = 1.0


def reference_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between (x1, y1) and (x2, y2)."""
    return math.sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2)


def reference_chlorine(turbidity: float, ph: float) -> float:
    """
    Chlorine dose in mg/L for the given sensor readings.

    Base dose is turbidity / 10, plus 2 for acidic water, minus 1 for basic
    water, clamped at zero.
    """
    amount = turbidity / 10.0
    if ph < NEUTRAL_PH:
        amount += ACIDIC_BOOST
    elif ph > NEUTRAL_PH:
        amount -= BASIC_REDUCTION
    return max(0.0, amount)


def format_reading(value: float) -> str:
    return f"{value:.2f}"


def parse_reading(raw: str) -> float | None:
    """Parse artifact output as a finite float. None if it isn't one."""
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


@dataclass(frozen=True)
class SanityProbe:
    """A fixed input and the exact line a correct artifact prints for it."""

    args: tuple[str, ...]
    expected: str


SANITY_PROBES: dict[MissionKind, SanityProbe] = {
    MissionKind.NAVIGATION: SanityProbe(
        args=("0", "0", "3", "4"),
        expected=format_reading(reference_distance(0, 0, 3, 4)),
    ),
    MissionKind.DOSING: SanityProbe(
        args=("35.0", "6.5"),
        expected=format_reading(reference_chlorine(35.0, 6.5)),
    ),
}


def _execution_failure(execution: ExecutionResult) -> Verdict:
    """Turn a run that didn't exit cleanly into a sanity-check verdict."""
    if execution.outcome is ExecOutcome.EXEC_ERR:
        return Verdict(
            passed=False,
            message=f"System Error: {execution.stderr}",
            failure=FailureKind.ARTIFACT_UNLAUNCHABLE,
        )
    if execution.outcome is ExecOutcome.TIMEOUT:
        return Verdict(
            passed=False,
            message=f"TIMEOUT: {execution.stderr}",
            failure=FailureKind.TIMEOUT,
        )
    return Verdict(
        passed=False,
        message=f"RUNTIME ERROR:\n{execution.stderr}\n{execution.stdout}",
        failure=FailureKind.ARTIFACT_CRASH,
    )


def sanity_check(
    kind: MissionKind,
    artifact_path: Path,
    timeout_seconds: float | None = None,
) -> Verdict:
    """Run the fixed probe for this mission kind and compare output literally."""
    probe = SANITY_PROBES[kind]
    execution = run_artifact(artifact_path, probe.args, timeout_seconds)

    if not execution.ok:
        verdict = _execution_failure(execution)
    else:
        actual = execution.output
        value = parse_reading(actual)
        if actual == probe.expected:
            verdict = Verdict(passed=True, message="", value=value)
        elif value is None:
            verdict = Verdict(
                passed=False,
                message=f"PARSE ERROR: Expected {probe.expected}, got '{actual}'",
                failure=FailureKind.OUTPUT_UNPARSABLE,
            )
        else:
            verdict = Verdict(
                passed=False,
                message=f"LOGIC ERROR: Expected {probe.expected}, got '{actual}'",
                failure=FailureKind.VALUE_MISMATCH,
                value=value,
            )

    logger.info(
        "Sanity check finished",
        extra={
            "kind": kind.value,
            "passed": verdict.passed,
            "failure": verdict.failure.value if verdict.failure else None,
        },
    )
    return verdict


def _gameplay_failure_text(execution: ExecutionResult) -> str:
    # Short codes: these end up on a one-line HUD.
    return execution.outcome.value


def probe_distance(
    artifact_path: Path,
    player: tuple[int, int],
    target: tuple[int, int],
    timeout_seconds: float | None = None,
) -> tuple[str, ExecutionResult]:
    """
    Ask the artifact for the player-to-target distance.

    Returns the HUD reading and the raw execution so the caller can record
    how long it took.
    """
    execution = run_artifact(
        artifact_path,
        (player[0], player[1], target[0], target[1]),
        timeout_seconds,
    )
    if not execution.ok:
        return _gameplay_failure_text(execution), execution

    raw = execution.output
    if parse_reading(raw) is None:
        return f"PARSE_ERR: '{raw}'", execution
    return f"DIST: {raw}m", execution


def check_dosing(
    artifact_path: Path,
    turbidity: float,
    ph: float,
    timeout_seconds: float | None = None,
) -> tuple[Verdict, ExecutionResult]:
    """Run the injector firmware on live readings and judge its dose."""
    execution = run_artifact(artifact_path, (turbidity, ph), timeout_seconds)
    if not execution.ok:
        failure = {
            ExecOutcome.CRASH: FailureKind.ARTIFACT_CRASH,
            ExecOutcome.EXEC_ERR: FailureKind.ARTIFACT_UNLAUNCHABLE,
            ExecOutcome.TIMEOUT: FailureKind.TIMEOUT,
        }[execution.outcome]
        return Verdict(
            passed=False,
            message=_gameplay_failure_text(execution),
            failure=failure,
        ), execution

    raw = execution.output
    actual = parse_reading(raw)
    if actual is None:
        return Verdict(
            passed=False,
            message=f"PARSE_ERR: '{raw}'",
            failure=FailureKind.OUTPUT_UNPARSABLE,
        ), execution

    expected = reference_chlorine(turbidity, ph)
    if abs(actual - expected) < TOLERANCE:
        return Verdict(
            passed=True,
            message=f"DOSE OK: {format_reading(actual)} mg/L",
            value=actual,
        ), execution

    return Verdict(
        passed=False,
        message=(
            f"DOSE MISMATCH: injected {format_reading(actual)} mg/L, "
            f"expected {format_reading(expected)} mg/L"
        ),
        failure=FailureKind.VALUE_MISMATCH,
        value=actual,
    ), execution
