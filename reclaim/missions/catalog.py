# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The mission catalog.

The mission set is fixed and ordered by id. Advancing from a finished
mission always goes to the next id in this table.
"""

from dataclasses import dataclass
from pathlib import Path

from reclaim.engine.exceptions import UnknownMissionError
from reclaim.engine.models import MissionKind, MissionStatus
from reclaim.missions.mission import Mission

MISSIONS_DIRNAME = "missions"


@dataclass(frozen=True)
class MissionSpec:
    id: int
    title: str
    description: str
    kind: MissionKind
    source_name: str
    artifact_name: str

    def source_path(self, workspace: Path) -> Path:
        return workspace / MISSIONS_DIRNAME / self.source_name

    def artifact_path(self, workspace: Path) -> Path:
        return workspace / self.artifact_name

    def build(self, workspace: Path, locked: bool = False) -> Mission:
        """A fresh Mission for this spec, rooted at the given workspace."""
        return Mission(
            id=self.id,
            title=self.title,
            description=self.description,
            kind=self.kind,
            source_path=self.source_path(workspace),
            artifact_path=self.artifact_path(workspace),
            status=MissionStatus.locked() if locked else MissionStatus.active(),
        )


CATALOG: tuple[MissionSpec, ...] = (
    MissionSpec(
        id=1,
        title="FOG NAVIGATOR",
        description="Fix the GPS firmware. Use the distance readout to find the hidden bunker.",
        kind=MissionKind.NAVIGATION,
        source_name="01_shelter.rs",
        artifact_name="user_gps_bin",
    ),
    MissionSpec(
        id=2,
        title="WATER PURIFIER",
        description="Reprogram the chlorine injector so the dose matches the sensor readings.",
        kind=MissionKind.DOSING,
        source_name="02_water.rs",
        artifact_name="user_wpu_bin",
    ),
)

_BY_ID: dict[int, MissionSpec] = {spec.id: spec for spec in CATALOG}


def get_spec(mission_id: int) -> MissionSpec:
    try:
        return _BY_ID[mission_id]
    except KeyError:
        raise UnknownMissionError(
            f"No mission with id {mission_id}. Known missions: {sorted(_BY_ID)}"
        ) from None


def first_mission_id() -> int:
    return CATALOG[0].id


def next_mission_id(mission_id: int) -> int | None:
    """The id after this one, or None if it was the last mission."""
    ids = [spec.id for spec in CATALOG]
    index = ids.index(get_spec(mission_id).id)
    if index + 1 < len(ids):
        return ids[index + 1]
    return None
