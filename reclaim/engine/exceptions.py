# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Exceptions for session-level precondition failures.

Compile and verification failures are not exceptions: they come back as
values and land in the mission status. These are for the cases where the
caller asked for something that can't happen at all.
"""


class EngineError(Exception):
    """Base for all engine errors."""


class WorkspaceError(EngineError):
    """Raised when the missions/ workspace is missing or unusable."""


class UnknownMissionError(EngineError):
    """Raised when a mission id isn't in the catalog."""


class MissionLockedError(EngineError):
    """Raised when loading a mission the player hasn't unlocked yet."""


class InvalidTransitionError(EngineError):
    """Raised when a session action doesn't make sense on the current screen."""
