# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Session controller.

The Session owns exactly one active Mission together with its gameplay
state, and is the only thing that mutates either. Front ends send it
intents (compile, move, advance, menu navigation) and read its fields back
for display. There is no module-level game state; a Session is passed
around explicitly.

The invariant protecting everything else: once the active mission is
finished, the only accepted mutation is `advance()`.
"""

import random
from enum import Enum
from pathlib import Path

from reclaim.config.schema import ToolchainConfig
from reclaim.engine.exceptions import (
    InvalidTransitionError,
    MissionLockedError,
    WorkspaceError,
)
from reclaim.engine.models import MissionStatus
from reclaim.logging.logger import get_logger
from reclaim.missions.catalog import (
    CATALOG,
    MISSIONS_DIRNAME,
    MissionSpec,
    first_mission_id,
    get_spec,
    next_mission_id,
)
from reclaim.missions.lifecycle import (
    CompileOutcome,
    GameplayState,
    compile_mission,
    create_state,
    refresh_state,
)
from reclaim.missions.mission import Mission
from reclaim.missions.navigation import NavigationState

logger = get_logger(__name__)


class Screen(Enum):
    MAIN_MENU = "main_menu"
    LEVEL_SELECT = "level_select"
    GAMEPLAY = "gameplay"
    EXITING = "exiting"


class MenuItem(Enum):
    START = "BOOT_SEQUENCE (Find Shelter)"
    LEVELS = "MISSION_ARCHIVE (Select Level)"
    QUIT = "POWER_DOWN"

    @property
    def label(self) -> str:
        return self.value


def check_workspace(workspace: Path) -> Path:
    """Return the missions directory, or raise if the workspace isn't set up."""
    missions_dir = workspace / MISSIONS_DIRNAME
    if not missions_dir.is_dir():
        raise WorkspaceError(
            f"Workspace not initialized: '{missions_dir}' does not exist.\n"
            "Run `reclaim init` to create it."
        )
    return missions_dir


class Session:
    """One player's run through the mission catalog."""

    def __init__(
        self,
        workspace: Path,
        toolchain: ToolchainConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.workspace = workspace
        self.toolchain = toolchain or ToolchainConfig()
        self.rng = rng or random.Random()
        self.screen = Screen.MAIN_MENU
        self.selected_index = 0
        self.unlocked: set[int] = {first_mission_id()}
        self.mission: Mission | None = None
        self.state: GameplayState | None = None

    # --- menus -----------------------------------------------------------

    def menu_entries(self) -> list[MenuItem] | list[MissionSpec]:
        if self.screen is Screen.MAIN_MENU:
            return list(MenuItem)
        if self.screen is Screen.LEVEL_SELECT:
            return list(CATALOG)
        return []

    def level_status(self, spec: MissionSpec) -> MissionStatus:
        return MissionStatus.active() if spec.id in self.unlocked else MissionStatus.locked()

    def menu_next(self) -> None:
        count = len(self.menu_entries())
        if count:
            self.selected_index = (self.selected_index + 1) % count

    def menu_previous(self) -> None:
        count = len(self.menu_entries())
        if count:
            self.selected_index = (self.selected_index - 1) % count

    def menu_select(self) -> None:
        """
        Activate the highlighted entry.

        Raises WorkspaceError or MissionLockedError when the chosen mission
        can't be loaded; the session stays on the menu in that case.
        """
        if self.screen is Screen.MAIN_MENU:
            item = list(MenuItem)[self.selected_index]
            if item is MenuItem.START:
                self.load_mission(first_mission_id())
            elif item is MenuItem.LEVELS:
                self.screen = Screen.LEVEL_SELECT
                self.selected_index = 0
            else:
                self.quit()
        elif self.screen is Screen.LEVEL_SELECT:
            spec = CATALOG[self.selected_index]
            self.load_mission(spec.id)
        else:
            raise InvalidTransitionError(f"Nothing to select on {self.screen.value}")

    def back(self) -> None:
        """Drop the active mission (if any) and return to the main menu."""
        if self.mission is not None:
            logger.info("Mission abandoned", extra={"mission_id": self.mission.id})
        self.mission = None
        self.state = None
        self.screen = Screen.MAIN_MENU
        self.selected_index = 0

    def quit(self) -> None:
        self.screen = Screen.EXITING

    # --- missions --------------------------------------------------------

    @property
    def finished(self) -> bool:
        return self.state is not None and self.state.finished

    def load_mission(self, mission_id: int) -> Mission:
        """
        Create a fresh Mission and gameplay state together.

        Any previous mission and its state are discarded wholesale.
        """
        spec = get_spec(mission_id)
        if mission_id not in self.unlocked:
            raise MissionLockedError(f"Mission {mission_id} ({spec.title}) is still locked.")
        check_workspace(self.workspace)

        self.mission = spec.build(self.workspace)
        self.state = create_state(spec.kind, self.rng)
        self.screen = Screen.GAMEPLAY
        self.selected_index = 0

        logger.info(
            "Mission loaded",
            extra={"mission_id": mission_id, "source_path": str(self.mission.source_path)},
        )
        return self.mission

    def _require_active(self) -> tuple[Mission, GameplayState]:
        if self.screen is not Screen.GAMEPLAY or self.mission is None or self.state is None:
            raise InvalidTransitionError("No mission is active.")
        return self.mission, self.state

    def compile(self) -> CompileOutcome:
        mission, state = self._require_active()
        return compile_mission(mission, state, self.toolchain)

    def move(self, dx: int, dy: int) -> bool:
        """Move the player. Ignored (False) for finished or non-navigation missions."""
        mission, state = self._require_active()
        if state.finished or not isinstance(state, NavigationState):
            return False
        return state.move(dx, dy, mission.artifact_path, self.toolchain.execute_timeout_seconds)

    def recheck(self) -> bool:
        """Re-run the gameplay check in place. False once finished."""
        mission, state = self._require_active()
        return refresh_state(mission, state, self.toolchain)

    def advance(self) -> bool:
        """
        Move on from a finished mission.

        Unlocks and loads the next mission, or returns to the main menu
        after the last one. Returns False (and changes nothing) if the
        active mission isn't finished.
        """
        mission, state = self._require_active()
        if not state.finished:
            logger.debug("Advance ignored, mission not finished", extra={"mission_id": mission.id})
            return False

        following = next_mission_id(mission.id)
        logger.info(
            "Mission complete",
            extra={"mission_id": mission.id, "next_mission_id": following},
        )
        if following is None:
            self.back()
            return True

        self.unlocked.add(following)
        self.load_mission(following)
        return True
