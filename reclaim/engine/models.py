# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Data models for the compile/verify pipeline.

Results are frozen dataclasses: once the compiler or an artifact has
reported back, nothing downstream gets to rewrite what happened.
"""

from dataclasses import dataclass
from enum import Enum


class MissionKind(Enum):
    """The fixed set of mission types. Every dispatch on this is exhaustive."""

    NAVIGATION = "navigation"
    DOSING = "dosing"


class StatusKind(Enum):
    LOCKED = "locked"
    ACTIVE = "active"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class MissionStatus:
    """
    Where a mission sits in its lifecycle.

    Only FAILED carries a message: the compiler log or the verification
    report the player needs to read before trying again.
    """

    kind: StatusKind
    message: str = ""

    @classmethod
    def locked(cls) -> "MissionStatus":
        return cls(StatusKind.LOCKED)

    @classmethod
    def active(cls) -> "MissionStatus":
        return cls(StatusKind.ACTIVE)

    @classmethod
    def success(cls) -> "MissionStatus":
        return cls(StatusKind.SUCCESS)

    @classmethod
    def failed(cls, message: str) -> "MissionStatus":
        return cls(StatusKind.FAILED, message)

    @property
    def is_failed(self) -> bool:
        return self.kind is StatusKind.FAILED

    @property
    def label(self) -> str:
        return self.kind.name


class FailureKind(Enum):
    """
    Everything that can go wrong between "press compile" and "passed".

    The split that matters to the player is environment faults (nothing they
    can fix by editing their code) versus code faults.
    """

    SOURCE_MISSING = "source_missing"
    TOOLCHAIN_UNAVAILABLE = "toolchain_unavailable"
    COMPILE_ERROR = "compile_error"
    ARTIFACT_CRASH = "artifact_crash"
    ARTIFACT_UNLAUNCHABLE = "artifact_unlaunchable"
    OUTPUT_UNPARSABLE = "output_unparsable"
    VALUE_MISMATCH = "value_mismatch"
    TIMEOUT = "timeout"

    @property
    def is_environment_fault(self) -> bool:
        return self in _ENVIRONMENT_FAULTS


_ENVIRONMENT_FAULTS = frozenset({
    FailureKind.SOURCE_MISSING,
    FailureKind.TOOLCHAIN_UNAVAILABLE,
    FailureKind.ARTIFACT_UNLAUNCHABLE,
})


@dataclass(frozen=True)
class CompileResult:
    """What came back from trying to compile a mission source file."""

    success: bool
    diagnostic: str = ""
    artifact_size: int | None = None
    failure: FailureKind | None = None
    exit_code: int | None = None
    elapsed_seconds: float = 0.0


class ExecOutcome(Enum):
    OK = "OK"
    CRASH = "CRASH"
    EXEC_ERR = "EXEC_ERR"
    TIMEOUT = "TIMEOUT"


@dataclass(frozen=True)
class ExecutionResult:
    """One run of a compiled artifact."""

    outcome: ExecOutcome
    stdout: str = ""
    stderr: str = ""
    exit_code: int | None = None
    elapsed_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return self.outcome is ExecOutcome.OK

    @property
    def output(self) -> str:
        return self.stdout.strip()


@dataclass(frozen=True)
class Verdict:
    """
    The oracle's judgement on one artifact run.

    `value` is the number parsed from the artifact's output, when there was
    one to parse.
    """

    passed: bool
    message: str
    failure: FailureKind | None = None
    value: float | None = None
