# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime bootstrap for Reclaim.

The one-time setup every CLI command goes through:
  1. Validate the environment (Python version)
  2. Make the configured log level and log file the engine-wide defaults
  3. Build the random source used for terrain and targets
  4. Log what we're running on

The random source is returned rather than installed globally so sessions
stay independent of each other and reproducible under a fixed seed.
"""

import random
from pathlib import Path

from reclaim.config.schema import GlobalConfig
from reclaim.logging.logger import get_logger, set_engine_log_level
from reclaim.runtime.environment import check_minimum_python, get_system_info


def make_rng(seed: int | None) -> random.Random:
    """A private random source; seeded when a seed is given."""
    return random.Random(seed)


def bootstrap(config: GlobalConfig, log_level: str | None = None) -> random.Random:
    """
    Run the bootstrap sequence and return the session's random source.

    Args:
        config: The validated global configuration.
        log_level: Overrides config.log_level when given (from --log-level).
    """
    check_minimum_python()

    level = log_level or config.log_level
    log_file = Path(config.log_file) if config.log_file is not None else None
    set_engine_log_level(level, log_file)

    logger = get_logger("reclaim.runtime")

    system_info = get_system_info()
    logger.debug(
        "Reclaim bootstrap complete",
        extra={
            "seed": config.seed,
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
        },
    )

    return make_rng(config.seed)
