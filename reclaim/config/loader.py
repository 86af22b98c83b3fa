# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Reads a Reclaim YAML config and turns it into a frozen ReclaimConfig.

Anything wrong with the file itself (missing, unreadable, not YAML, not a
mapping) is a ConfigLoadError. A well-formed file whose contents break the
schema is a ConfigValidationError. The CLI maps both to CONFIG_ERROR before
any mission is touched.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from reclaim.config.exceptions import ConfigLoadError, ConfigValidationError
from reclaim.config.schema import ReclaimConfig


def _read_mapping(config_path: Path) -> dict[str, Any]:
    if not config_path.is_file():
        reason = "is not a file" if config_path.exists() else "does not exist"
        raise ConfigLoadError(f"Config file {config_path} {reason}")

    try:
        with config_path.open(encoding="utf-8") as handle:
            document = yaml.safe_load(handle)
    except OSError as err:
        raise ConfigLoadError(f"Cannot read config file {config_path}: {err}") from err
    except yaml.YAMLError as err:
        raise ConfigLoadError(f"Config file {config_path} is not valid YAML: {err}") from err

    if document is None:
        raise ConfigLoadError(f"Config file {config_path} is empty")
    if not isinstance(document, dict):
        raise ConfigLoadError(
            f"Config file {config_path} must hold a mapping with a 'global' section, "
            f"found a {type(document).__name__}"
        )
    return document


def load_config(config_path: Path) -> ReclaimConfig:
    """Load and validate `config_path`. Raises a ConfigError subclass on failure."""
    document = _read_mapping(config_path)
    try:
        return ReclaimConfig.model_validate(document)
    except ValidationError as err:
        raise ConfigValidationError(f"Invalid config in {config_path}:\n{err}") from err
