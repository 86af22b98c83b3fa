# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Mission lifecycle: what pressing "compile" does to a mission.

    Locked -> Active -> {Success, Failed} -> Active (on retry)

A compile walks the mission through:
  1. back to Active while the build and checks run
  2. the compile harness; a failure here is Failed(compiler log)
  3. the oracle's sanity probe; a failure here is Failed(oracle report)
  4. Success, compiled flag set, gameplay reading refreshed

Any failure clears the gameplay state's compiled flag, so no later action
can show a reading from a binary that no longer passes. Locked and finished
missions refuse to compile at all.
"""

import random
from dataclasses import dataclass

from reclaim.config.schema import ToolchainConfig
from reclaim.engine.models import (
    CompileResult,
    MissionKind,
    MissionStatus,
    Verdict,
)
from reclaim.engine.oracle import sanity_check
from reclaim.logging.logger import get_logger
from reclaim.missions.dosing import DosingState
from reclaim.missions.mission import Mission
from reclaim.missions.navigation import NavigationState

logger = get_logger(__name__)

GameplayState = NavigationState | DosingState


def create_state(kind: MissionKind, rng: random.Random | None = None) -> GameplayState:
    if kind is MissionKind.NAVIGATION:
        return NavigationState.create(rng)
    if kind is MissionKind.DOSING:
        return DosingState()
    raise ValueError(f"Unhandled mission kind: {kind}")


@dataclass(frozen=True)
class CompileOutcome:
    """What one compile request did. `attempted` is False when it was refused."""

    attempted: bool
    status: MissionStatus
    compile_result: CompileResult | None = None
    sanity: Verdict | None = None

    @property
    def passed(self) -> bool:
        return self.sanity is not None and self.sanity.passed


def compile_mission(
    mission: Mission,
    state: GameplayState,
    toolchain: ToolchainConfig,
) -> CompileOutcome:
    """Build, sanity-check and apply the result to both mission and state."""
    if mission.is_locked or state.finished:
        logger.debug(
            "Compile refused",
            extra={
                "mission_id": mission.id,
                "locked": mission.is_locked,
                "finished": state.finished,
            },
        )
        return CompileOutcome(attempted=False, status=mission.status)

    mission.status = MissionStatus.active()
    result = mission.compile(
        compiler=toolchain.compiler,
        timeout_seconds=toolchain.compile_timeout_seconds,
    )

    if not result.success:
        state.mark_uncompiled()
        logger.info(
            "Compile failed",
            extra={
                "mission_id": mission.id,
                "failure": result.failure.value if result.failure else None,
            },
        )
        return CompileOutcome(attempted=True, status=mission.status, compile_result=result)

    verdict = sanity_check(
        mission.kind,
        mission.artifact_path,
        timeout_seconds=toolchain.execute_timeout_seconds,
    )
    if not verdict.passed:
        mission.fail(verdict.message)
        state.mark_uncompiled()
        return CompileOutcome(
            attempted=True, status=mission.status, compile_result=result, sanity=verdict,
        )

    state.mark_compiled()
    state.refresh(mission.artifact_path, toolchain.execute_timeout_seconds)

    logger.info(
        "Mission firmware accepted",
        extra={
            "mission_id": mission.id,
            "artifact_size": mission.artifact_size,
            "finished": state.finished,
        },
    )
    return CompileOutcome(
        attempted=True, status=mission.status, compile_result=result, sanity=verdict,
    )


def refresh_state(
    mission: Mission,
    state: GameplayState,
    toolchain: ToolchainConfig,
) -> bool:
    """Re-run the gameplay check without moving. False if the state is frozen."""
    if state.finished:
        return False
    state.refresh(mission.artifact_path, toolchain.execute_timeout_seconds)
    return True
