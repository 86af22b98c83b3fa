# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Plain-text view of a Session.

This only reads session state. It exists so the engine can be played and
debugged from a bare terminal; it has no say in what the game does.
"""

from reclaim import __version__
from reclaim.engine.models import StatusKind
from reclaim.missions.catalog import MissionSpec
from reclaim.missions.dosing import DosingState
from reclaim.missions.navigation import NavigationState, TileType
from reclaim.session.controller import MenuItem, Screen, Session

_TILE_GLYPHS = {
    TileType.GROUND: ".",
    TileType.TREE: "T",
    TileType.ROCK: "#",
    TileType.RUIN: "%",
}
PLAYER_GLYPH = "@"
SHELTER_GLYPH = "H"


def _format_runtime(seconds: float | None) -> str:
    if seconds is None:
        return "--"
    if seconds < 1.0:
        return f"{seconds * 1000:.2f}ms"
    return f"{seconds:.2f}s"


def _format_size(size: int | None) -> str:
    return "--" if size is None else f"{size} bytes"


def render_map(state: NavigationState) -> list[str]:
    rows = []
    for y in range(state.grid_height):
        row = []
        for x in range(state.grid_width):
            if (x, y) == state.player:
                row.append(PLAYER_GLYPH)
            elif (x, y) == state.target and state.finished:
                row.append(SHELTER_GLYPH)
            else:
                row.append(_TILE_GLYPHS[state.tile_at(x, y)])
        rows.append("".join(row))
    return rows


def _render_menu(session: Session) -> list[str]:
    lines = []
    entries = session.menu_entries()
    for index, entry in enumerate(entries):
        cursor = ">" if index == session.selected_index else " "
        if isinstance(entry, MenuItem):
            lines.append(f" {cursor} {entry.label}")
        elif isinstance(entry, MissionSpec):
            status = session.level_status(entry)
            lines.append(f" {cursor} [{entry.id:02d}] {entry.title:<16} {status.label}")
    lines.append("")
    lines.append(" [up/down] select | [enter] confirm | [quit] power down")
    return lines


def _render_gameplay(session: Session) -> list[str]:
    mission, state = session.mission, session.state
    if mission is None or state is None:
        return [" NO ACTIVE MISSION"]

    lines = [
        f" MISSION {mission.id:02d}: {mission.title}",
        f" {mission.description}",
        f" SOURCE: {mission.source_path}",
        f" STATUS: {mission.status.label}   BINARY: {_format_size(mission.artifact_size)}"
        f"   LATENCY: {_format_runtime(state.last_runtime)}",
        "",
    ]

    if isinstance(state, NavigationState):
        lines.extend(render_map(state))
        lines.append("")
        lines.append(f" POS: {state.player_x},{state.player_y}")
        lines.append(f" > {state.reading}")
    elif isinstance(state, DosingState):
        lines.append(f" SENSORS: turbidity={state.turbidity} NTU  pH={state.ph}")
        lines.append(" INJECTOR LOG:")
        lines.extend(f"   {entry}" for entry in state.log[-8:])
        lines.append(f" > {state.reading}")

    if mission.status.kind is StatusKind.FAILED:
        lines.append("")
        lines.append(" --- COMPILER LOG ---")
        lines.extend(f" {line}" for line in mission.status.message.splitlines())

    lines.append("")
    if state.finished:
        lines.append(" [next] continue | [menu] main menu | [quit] power down")
    else:
        lines.append(
            " [compile] build | [up/down/left/right] move | [check] rerun"
            " | [menu] main menu | [quit] power down"
        )
    return lines


def render(session: Session) -> str:
    """The full screen for the session's current state, as one string."""
    header = f"=== RUST RECLAMATION OS v{__version__} ==="
    if session.screen is Screen.GAMEPLAY:
        body = _render_gameplay(session)
    elif session.screen is Screen.EXITING:
        body = [" POWERING DOWN..."]
    else:
        body = _render_menu(session)
    return "\n".join([header, *body]) + "\n"
