# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Workspace initialization.

The mission stubs ship inside the package under templates/. `reclaim init`
copies them into <workspace>/missions/ so the player has something to edit.
An existing missions/ directory is never touched: that's where the
player's work lives.
"""

from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path

from reclaim.logging.logger import get_logger
from reclaim.missions.catalog import CATALOG, MISSIONS_DIRNAME
from reclaim.utils.paths import ensure_directory

logger = get_logger(__name__)

TEMPLATE_PACKAGE = "reclaim.workspace"
TEMPLATE_DIRNAME = "templates"


@dataclass(frozen=True)
class InitResult:
    missions_dir: Path
    created: bool
    files: list[str] = field(default_factory=list)


def read_template(name: str) -> str:
    """Text of one bundled mission template."""
    template = resources.files(TEMPLATE_PACKAGE).joinpath(TEMPLATE_DIRNAME).joinpath(name)
    return template.read_text(encoding="utf-8")


def initialize_workspace(workspace: Path) -> InitResult:
    """Write every catalog mission's template into <workspace>/missions/."""
    missions_dir = workspace / MISSIONS_DIRNAME

    if missions_dir.exists():
        logger.info(
            "Missions directory exists, skipping to protect progress",
            extra={"path": str(missions_dir)},
        )
        return InitResult(missions_dir=missions_dir, created=False)

    ensure_directory(missions_dir)
    written = []
    for spec in CATALOG:
        target = missions_dir / spec.source_name
        target.write_text(read_template(spec.source_name), encoding="utf-8")
        written.append(spec.source_name)

    logger.info(
        "Workspace initialized",
        extra={"path": str(missions_dir), "files": written},
    )
    return InitResult(missions_dir=missions_dir, created=True, files=written)
