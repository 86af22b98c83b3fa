# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Path utilities for Reclaim.

The workspace is wherever the player keeps missions/; everything the engine
writes (artifacts, the scaffolded templates) lands under it.
"""

from pathlib import Path


def resolve_workspace(workspace: str | Path, base: Path | None = None) -> Path:
    """
    Turn a configured workspace path into an absolute one.

    Relative paths are taken relative to `base` (the current directory by
    default), so `workspace: "."` in a config means "where you ran reclaim".
    """
    path = Path(workspace).expanduser()
    if not path.is_absolute():
        path = (base or Path.cwd()) / path
    return path.resolve()


def ensure_directory(path: Path) -> Path:
    """Create a directory (and parents) if it doesn't exist. Returns the path for chaining."""
    path.mkdir(parents=True, exist_ok=True)
    return path
