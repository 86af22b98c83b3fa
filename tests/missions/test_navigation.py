# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for the navigation mission state: terrain, movement, readings, completion."""

import random
from pathlib import Path

from reclaim.missions.navigation import (
    FIRMWARE_MISSING,
    GRID_HEIGHT,
    GRID_WIDTH,
    NO_SIGNAL,
    START,
    TARGET_ACQUIRED,
    NavigationState,
    TileType,
    generate_terrain,
)


def _state(target: tuple[int, int] = (12, 6), player: tuple[int, int] = START) -> NavigationState:
    rng = random.Random(1)
    return NavigationState(
        player_x=player[0],
        player_y=player[1],
        target_x=target[0],
        target_y=target[1],
        terrain=generate_terrain(GRID_WIDTH, GRID_HEIGHT, rng, clear=(player, target)),
    )


class TestCreate:
    def test_fresh_state(self) -> None:
        state = NavigationState.create(random.Random(7))

        assert state.player == START
        assert 10 <= state.target_x < 28
        assert 5 <= state.target_y < 15
        assert state.compiled is False
        assert state.finished is False
        assert state.reading == NO_SIGNAL
        assert state.last_runtime is None

    def test_same_seed_same_layout(self) -> None:
        a = NavigationState.create(random.Random(99))
        b = NavigationState.create(random.Random(99))
        assert a.target == b.target
        assert a.terrain == b.terrain


class TestTerrain:
    def test_dimensions_and_border(self) -> None:
        terrain = generate_terrain(GRID_WIDTH, GRID_HEIGHT, random.Random(3))

        assert len(terrain) == GRID_HEIGHT
        assert all(len(row) == GRID_WIDTH for row in terrain)
        assert all(tile is TileType.ROCK for tile in terrain[0])
        assert all(row[0] is TileType.ROCK and row[-1] is TileType.ROCK for row in terrain)

    def test_start_and_target_are_ground(self) -> None:
        for seed in range(20):
            state = NavigationState.create(random.Random(seed))
            assert state.tile_at(*state.player) is TileType.GROUND
            assert state.tile_at(*state.target) is TileType.GROUND


class TestMovement:
    def test_clamped_inside_border(self, tmp_path: Path) -> None:
        state = _state(player=(1, 1))

        state.move(-1, -1, tmp_path / "missing")
        assert state.player == (1, 1)

        state.player_x, state.player_y = GRID_WIDTH - 2, GRID_HEIGHT - 2
        state.move(1, 1, tmp_path / "missing")
        assert state.player == (GRID_WIDTH - 2, GRID_HEIGHT - 2)

    def test_uncompiled_move_shows_firmware_missing_without_running(self, tmp_path: Path) -> None:
        state = _state()
        # Nothing exists at this path; running it would give EXEC_ERR.
        state.move(1, 0, tmp_path / "missing")

        assert state.player == (3, 2)
        assert state.reading == FIRMWARE_MISSING
        assert state.last_runtime is None

    def test_compiled_move_runs_firmware(self, make_artifact) -> None:
        state = _state(target=(12, 6))
        state.mark_compiled()

        state.move(1, 0, make_artifact("distance"))

        assert state.reading.startswith("DIST: ")
        assert state.reading == f"DIST: {((12 - 3) ** 2 + (6 - 2) ** 2) ** 0.5:.2f}m"
        assert state.last_runtime is not None

    def test_crashing_firmware_is_not_fatal(self, make_artifact) -> None:
        state = _state()
        state.mark_compiled()

        state.move(0, 1, make_artifact("crash"))

        assert state.reading == "CRASH"
        assert state.finished is False


class TestCompletion:
    def test_reaching_target_finishes(self, tmp_path: Path) -> None:
        state = _state(target=(3, 2))

        state.move(1, 0, tmp_path / "missing")

        assert state.finished is True
        assert state.reading == TARGET_ACQUIRED

    def test_finished_state_is_frozen(self, make_artifact) -> None:
        state = _state(target=(3, 2))
        state.mark_compiled()
        artifact = make_artifact("distance")
        state.move(1, 0, artifact)

        assert state.move(1, 0, artifact) is False
        assert state.player == (3, 2)
        state.refresh(artifact)
        assert state.reading == TARGET_ACQUIRED


class TestCompiledFlag:
    def test_uncompiling_resets_to_sentinel(self, make_artifact) -> None:
        state = _state()
        state.mark_compiled()
        state.move(1, 0, make_artifact("distance"))

        state.mark_uncompiled()

        assert state.compiled is False
        assert state.reading == NO_SIGNAL
        assert state.last_runtime is None
