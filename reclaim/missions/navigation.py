# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Navigation mission state ("find the shelter in the fog").

The player walks a tile grid looking for a hidden target. The only guide is
the distance readout, and that readout comes from the player's own compiled
GPS firmware. The mission completes when the player stands on the target
cell, whatever the firmware printed along the way.
"""

import random
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from reclaim.engine.models import ExecOutcome
from reclaim.engine.oracle import probe_distance

GRID_WIDTH = 30
GRID_HEIGHT = 18
START = (2, 2)
TARGET_X_RANGE = (10, 28)
TARGET_Y_RANGE = (5, 15)

NO_SIGNAL = "NO_SIGNAL"
FIRMWARE_MISSING = "ERR: FIRMWARE MISSING"
FIRMWARE_UPDATED = "FIRMWARE_UPDATED."
TARGET_ACQUIRED = "TARGET_ACQUIRED! SHELTER FOUND."


class TileType(Enum):
    GROUND = "ground"
    TREE = "tree"
    ROCK = "rock"
    RUIN = "ruin"


# Cumulative thresholds for interior tiles; anything above is GROUND.
_TILE_WEIGHTS = (
    (0.10, TileType.TREE),
    (0.15, TileType.ROCK),
    (0.19, TileType.RUIN),
)


def generate_terrain(
    width: int,
    height: int,
    rng: random.Random,
    clear: tuple[tuple[int, int], ...] = (),
) -> list[list[TileType]]:
    """
    Build a terrain grid indexed as terrain[y][x].

    The outer ring is ROCK (the player can never stand there anyway) and
    every cell listed in `clear` is forced to GROUND.
    """
    terrain: list[list[TileType]] = []
    for y in range(height):
        row: list[TileType] = []
        for x in range(width):
            if x in (0, width - 1) or y in (0, height - 1):
                row.append(TileType.ROCK)
                continue
            roll = rng.random()
            tile = TileType.GROUND
            for threshold, candidate in _TILE_WEIGHTS:
                if roll < threshold:
                    tile = candidate
                    break
            row.append(tile)
        terrain.append(row)

    for x, y in clear:
        terrain[y][x] = TileType.GROUND
    return terrain


@dataclass
class NavigationState:
    player_x: int
    player_y: int
    target_x: int
    target_y: int
    grid_width: int = GRID_WIDTH
    grid_height: int = GRID_HEIGHT
    terrain: list[list[TileType]] = field(default_factory=list)
    compiled: bool = False
    reading: str = NO_SIGNAL
    finished: bool = False
    last_runtime: float | None = None

    @classmethod
    def create(cls, rng: random.Random | None = None) -> "NavigationState":
        """A fresh mission instance with a random target and terrain."""
        rng = rng or random.Random()
        target = (rng.randrange(*TARGET_X_RANGE), rng.randrange(*TARGET_Y_RANGE))
        return cls(
            player_x=START[0],
            player_y=START[1],
            target_x=target[0],
            target_y=target[1],
            terrain=generate_terrain(GRID_WIDTH, GRID_HEIGHT, rng, clear=(START, target)),
        )

    @property
    def player(self) -> tuple[int, int]:
        return (self.player_x, self.player_y)

    @property
    def target(self) -> tuple[int, int]:
        return (self.target_x, self.target_y)

    @property
    def at_target(self) -> bool:
        return self.player == self.target

    def tile_at(self, x: int, y: int) -> TileType:
        return self.terrain[y][x]

    def mark_compiled(self) -> None:
        self.compiled = True
        self.reading = FIRMWARE_UPDATED

    def mark_uncompiled(self) -> None:
        self.compiled = False
        self.reading = NO_SIGNAL
        self.last_runtime = None

    def move(
        self,
        dx: int,
        dy: int,
        artifact_path: Path,
        timeout_seconds: float | None = None,
    ) -> bool:
        """Step the player, clamped inside the border. False once finished."""
        if self.finished:
            return False

        self.player_x = min(max(self.player_x + dx, 1), self.grid_width - 2)
        self.player_y = min(max(self.player_y + dy, 1), self.grid_height - 2)
        self.refresh(artifact_path, timeout_seconds)
        return True

    def refresh(self, artifact_path: Path, timeout_seconds: float | None = None) -> None:
        """Recompute the HUD reading for the current position."""
        if self.finished:
            return

        if self.at_target:
            self.reading = TARGET_ACQUIRED
            self.finished = True
            return

        if not self.compiled:
            self.reading = FIRMWARE_MISSING
            return

        reading, execution = probe_distance(
            artifact_path, self.player, self.target, timeout_seconds,
        )
        self.reading = reading
        # A binary that never started has no meaningful runtime.
        self.last_runtime = (
            None if execution.outcome is ExecOutcome.EXEC_ERR else execution.elapsed_seconds
        )
