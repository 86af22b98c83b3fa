# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Line-oriented driver for a Session.

Reads one command per line, hands it to the session, writes the redrawn
view. Compile and run calls block until the child process exits; there is
only ever one in flight.
"""

from typing import TextIO

from reclaim.engine.exceptions import EngineError
from reclaim.logging.logger import get_logger
from reclaim.session.controller import Screen, Session
from reclaim.session.view import render

logger = get_logger(__name__)

_MOVES = {
    "up": (0, -1),
    "w": (0, -1),
    "down": (0, 1),
    "s": (0, 1),
    "left": (-1, 0),
    "a": (-1, 0),
    "right": (1, 0),
    "d": (1, 0),
}


def _menu_command(session: Session, command: str, argument: str | None) -> None:
    if command in ("up", "w"):
        session.menu_previous()
    elif command in ("down", "s"):
        session.menu_next()
    elif command in ("enter", "", "select"):
        if argument is not None:
            index = int(argument) - 1
            if not 0 <= index < len(session.menu_entries()):
                raise ValueError(argument)
            session.selected_index = index
        session.menu_select()
    elif command in ("levels",):
        session.screen = Screen.LEVEL_SELECT
        session.selected_index = 0
    elif command in ("menu", "esc", "back"):
        session.back()


def _gameplay_command(session: Session, command: str) -> None:
    if command in ("compile", "c"):
        session.compile()
    elif command in _MOVES:
        session.move(*_MOVES[command])
    elif command in ("check", "r"):
        session.recheck()
    elif command in ("next", "n"):
        session.advance()
    elif command in ("menu", "esc", "back"):
        session.back()


def dispatch(session: Session, line: str) -> str | None:
    """
    Apply one command line to the session.

    Returns an error message to show above the view, or None. Engine
    precondition errors (missing workspace, locked mission) are reported,
    not raised.
    """
    parts = line.strip().lower().split()
    command = parts[0] if parts else ""
    argument = parts[1] if len(parts) > 1 else None

    if command in ("quit", "q", "exit"):
        session.quit()
        return None

    try:
        if session.screen is Screen.GAMEPLAY:
            _gameplay_command(session, command)
        else:
            _menu_command(session, command, argument)
    except EngineError as err:
        logger.warning("Command rejected", extra={"command": command, "error": str(err)})
        return str(err)
    except ValueError:
        return f"Invalid selection: {argument}"
    return None


def run(session: Session, stdin: TextIO, stdout: TextIO) -> None:
    """Drive the session until it exits or input runs out."""
    stdout.write(render(session))
    stdout.flush()
    for line in stdin:
        message = dispatch(session, line)
        if message:
            stdout.write(f"!! {message}\n")
        stdout.write(render(session))
        stdout.flush()
        if session.screen is Screen.EXITING:
            break
