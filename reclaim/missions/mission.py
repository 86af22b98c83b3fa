# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""The Mission record the session owns while a mission is loaded."""

from dataclasses import dataclass, field
from pathlib import Path

from reclaim.engine.compiler import DEFAULT_COMPILER, compile_source
from reclaim.engine.models import CompileResult, MissionKind, MissionStatus, StatusKind


@dataclass
class Mission:
    """
    One coding challenge: where its source lives, where its binary goes,
    and what state it's in.

    `artifact_size` is only set after a compile succeeds and the binary
    could be stat'ed.
    """

    id: int
    title: str
    description: str
    kind: MissionKind
    source_path: Path
    artifact_path: Path
    status: MissionStatus = field(default_factory=MissionStatus.active)
    artifact_size: int | None = None

    @property
    def is_locked(self) -> bool:
        return self.status.kind is StatusKind.LOCKED

    def fail(self, message: str) -> None:
        self.status = MissionStatus.failed(message)
        self.artifact_size = None

    def compile(
        self,
        compiler: str = DEFAULT_COMPILER,
        timeout_seconds: float | None = None,
    ) -> CompileResult:
        """Build the artifact and record the outcome on this mission."""
        result = compile_source(
            self.source_path,
            self.artifact_path,
            compiler=compiler,
            timeout_seconds=timeout_seconds,
        )
        if result.success:
            self.status = MissionStatus.success()
            self.artifact_size = result.artifact_size
        else:
            self.fail(result.diagnostic)
        return result
