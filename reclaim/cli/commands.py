# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the Reclaim CLI.

Each function here corresponds to one CLI subcommand and returns an exit
code. Outcomes are reported through the structured logger; the only thing
that writes to stdout directly is the `play` front end, which owns it.
"""

import argparse
import logging
import random
import sys
from pathlib import Path

from reclaim.cli.exit_codes import (
    CONFIG_ERROR,
    RUNTIME_ERROR,
    SUCCESS,
    USER_ERROR,
    VALIDATION_ERROR,
)
from reclaim.config.exceptions import ConfigError
from reclaim.config.loader import load_config
from reclaim.config.schema import ReclaimConfig, default_config
from reclaim.engine.exceptions import EngineError
from reclaim.logging.logger import get_logger
from reclaim.runtime.bootstrap import bootstrap, make_rng
from reclaim.utils.paths import resolve_workspace


def _load_and_bootstrap(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, ReclaimConfig | None, random.Random | None, logging.Logger]:
    """
    The shared setup that every command needs: load config, run bootstrap.

    Returns (exit_code, config, rng, logger). If exit_code is not SUCCESS,
    the caller should return it immediately.
    """
    logger = get_logger(f"reclaim.cli.{command_name}", log_level=args.log_level)

    if args.config is not None:
        try:
            config = load_config(Path(args.config))
        except ConfigError as err:
            logger.error(
                "Configuration error",
                extra={"command": command_name, "error": str(err)},
            )
            return CONFIG_ERROR, None, None, logger
    else:
        logger.debug(
            "No config provided, running with defaults",
            extra={"command": command_name},
        )
        config = default_config()

    rng = bootstrap(config.global_config, log_level=args.log_level)
    if args.seed is not None:
        rng = make_rng(args.seed)

    return SUCCESS, config, rng, logger


def _workspace(args: argparse.Namespace, config: ReclaimConfig) -> Path:
    return resolve_workspace(args.workspace or config.global_config.workspace)


def handle_init(args: argparse.Namespace) -> int:
    """Unpack the mission templates into the workspace."""
    exit_code, config, _, logger = _load_and_bootstrap(args, "init")
    if exit_code != SUCCESS or config is None:
        return exit_code

    from reclaim.workspace.scaffold import initialize_workspace

    try:
        result = initialize_workspace(_workspace(args, config))
    except OSError as err:
        logger.error("Workspace initialization failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR

    logger.info(
        "Init finished",
        extra={
            "missions_dir": str(result.missions_dir),
            "workspace_created": result.created,
            "files": result.files,
        },
    )
    return SUCCESS


def handle_check(args: argparse.Namespace) -> int:
    """
    Compile and verify one mission without the interactive front end.

    Exit codes: SUCCESS when the firmware passes its sanity probe,
    VALIDATION_ERROR when the player's code is wrong, RUNTIME_ERROR when
    the environment is broken.
    """
    exit_code, config, rng, logger = _load_and_bootstrap(args, "check")
    if exit_code != SUCCESS or config is None:
        return exit_code

    from reclaim.missions.catalog import get_spec
    from reclaim.missions.lifecycle import compile_mission, create_state
    from reclaim.session.controller import check_workspace

    workspace = _workspace(args, config)
    try:
        spec = get_spec(args.mission)
        check_workspace(workspace)
    except EngineError as err:
        logger.error("Cannot check mission", extra={"mission_id": args.mission, "error": str(err)})
        return USER_ERROR

    mission = spec.build(workspace)
    state = create_state(spec.kind, rng)
    outcome = compile_mission(mission, state, config.toolchain)

    if outcome.passed:
        logger.info(
            "Mission firmware passed",
            extra={
                "mission_id": mission.id,
                "artifact_size": mission.artifact_size,
                "reading": state.reading,
                "finished": state.finished,
            },
        )
        return SUCCESS

    failure = None
    if outcome.sanity is not None:
        failure = outcome.sanity.failure
    elif outcome.compile_result is not None:
        failure = outcome.compile_result.failure

    logger.error(
        "Mission firmware failed",
        extra={
            "mission_id": mission.id,
            "failure": failure.value if failure else None,
            "diagnostic": mission.status.message,
        },
    )
    if failure is not None and failure.is_environment_fault:
        return RUNTIME_ERROR
    return VALIDATION_ERROR


def handle_play(args: argparse.Namespace) -> int:
    """Run the line-oriented game loop on stdin/stdout."""
    exit_code, config, rng, logger = _load_and_bootstrap(args, "play")
    if exit_code != SUCCESS or config is None:
        return exit_code

    from reclaim.session import shell
    from reclaim.session.controller import Session

    session = Session(_workspace(args, config), toolchain=config.toolchain, rng=rng)
    try:
        shell.run(session, sys.stdin, sys.stdout)
    except KeyboardInterrupt:
        logger.info("Interrupted, powering down")
    except Exception as err:
        logger.error("Session crashed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR
    return SUCCESS


def handle_info(args: argparse.Namespace) -> int:
    """Report the workspace and toolchain the engine would use."""
    exit_code, config, _, logger = _load_and_bootstrap(args, "info")
    if exit_code != SUCCESS or config is None:
        return exit_code

    from reclaim import __version__
    from reclaim.missions.catalog import CATALOG, MISSIONS_DIRNAME
    from reclaim.runtime.environment import find_toolchain, get_system_info

    workspace = _workspace(args, config)
    system_info = get_system_info()
    toolchain = find_toolchain(config.toolchain.compiler)

    logger.info(
        "Reclaim environment",
        extra={
            "version": __version__,
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "workspace": str(workspace),
            "workspace_initialized": (workspace / MISSIONS_DIRNAME).is_dir(),
            "missions": [spec.source_name for spec in CATALOG],
            "compiler": toolchain.compiler,
            "compiler_path": toolchain.path,
            "compiler_version": toolchain.version,
            "compile_timeout_seconds": config.toolchain.compile_timeout_seconds,
            "execute_timeout_seconds": config.toolchain.execute_timeout_seconds,
        },
    )
    return SUCCESS
