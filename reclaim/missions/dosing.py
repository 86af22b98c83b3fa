# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Dosing mission state ("purify the water supply").

The injector firmware gets fixed sensor readings and has to print the
right chlorine dose. The oracle recomputes the dose itself; a match within
tolerance completes the mission.
"""

from dataclasses import dataclass, field
from pathlib import Path

from reclaim.engine.models import ExecOutcome
from reclaim.engine.oracle import check_dosing

DEFAULT_TURBIDITY = 45.0
DEFAULT_PH = 8.2

NO_FIRMWARE = "NO_FIRMWARE"
FIRMWARE_MISSING = "ERR: FIRMWARE MISSING"
FIRMWARE_UPDATED = "FIRMWARE_UPDATED."
WATER_PURIFIED = "WATER PURIFIED! INJECTOR CALIBRATED."

# Older injector log lines are dropped past this many.
LOG_LIMIT = 50


@dataclass
class DosingState:
    turbidity: float = DEFAULT_TURBIDITY
    ph: float = DEFAULT_PH
    compiled: bool = False
    log: list[str] = field(default_factory=list)
    finished: bool = False
    last_runtime: float | None = None

    @property
    def reading(self) -> str:
        if self.finished:
            return WATER_PURIFIED
        return self.log[-1] if self.log else NO_FIRMWARE

    def _record(self, line: str) -> None:
        self.log.append(line)
        del self.log[:-LOG_LIMIT]

    def mark_compiled(self) -> None:
        self.compiled = True
        self._record(FIRMWARE_UPDATED)

    def mark_uncompiled(self) -> None:
        self.compiled = False
        self.last_runtime = None
        self._record(NO_FIRMWARE)

    def refresh(self, artifact_path: Path, timeout_seconds: float | None = None) -> None:
        """Feed the sensor readings to the firmware and log the verdict."""
        if self.finished:
            return

        if not self.compiled:
            self._record(FIRMWARE_MISSING)
            return

        verdict, execution = check_dosing(
            artifact_path, self.turbidity, self.ph, timeout_seconds,
        )
        self.last_runtime = (
            None if execution.outcome is ExecOutcome.EXEC_ERR else execution.elapsed_seconds
        )
        self._record(
            f"SENSORS turbidity={self.turbidity} pH={self.ph} -> {verdict.message}"
        )
        if verdict.passed:
            self.finished = True
            self._record(WATER_PURIFIED)
