# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
JSON-lines logging for the Reclaim engine.

Records are written one JSON object per line to stderr, never stdout: the
`play` front end draws the game screen on stdout and the two must not mix.

Engine modules create their loggers at import time, and some of them are
imported lazily by the CLI after the config has been read. To make the
configured level and log file reach those late loggers too, the settings
applied by `set_engine_log_level` are remembered here and used as the
defaults for every later `get_logger` call.

A record looks like:
  {"ts": "...", "level": "INFO", "module": "reclaim.engine.oracle", "msg": "Sanity check finished", "kind": "navigation", "passed": true}
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, TextIO

ENGINE_NAMESPACE = "reclaim"

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Attribute names a bare LogRecord already has; anything else on a record was
# passed through `extra=` and is copied into the JSON line.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

_engine_level = "INFO"
_engine_log_file: Optional[Path] = None


class JsonFormatter(logging.Formatter):
    """
    One JSON object per record: `ts`, `level`, `module`, `msg`, then every
    `extra` field (mission ids, exit codes, timings). A traceback, if any,
    goes under `exc`.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }
        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _level_number(level_name: str) -> int:
    upper = level_name.upper()
    if upper not in _LEVEL_NAMES:
        raise ValueError(
            f"Invalid log level '{level_name}'. Must be one of: {', '.join(_LEVEL_NAMES)}"
        )
    return getattr(logging, upper)


def _attach_file_handler(logger: logging.Logger, log_file: Path, level: int) -> None:
    """Add a FileHandler for `log_file` unless the logger already writes there."""
    target = os.path.abspath(log_file)
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(JsonFormatter())
    logger.addHandler(file_handler)


def _apply(logger: logging.Logger, level: int, log_file: Optional[Path]) -> None:
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
    if log_file is not None:
        _attach_file_handler(logger, log_file, level)


def get_logger(
    name: str,
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Return the JSON logger for `name`, creating its handlers on first use.

    Args:
        name: Logger name, normally the caller's __name__.
        log_level: Explicit level. When omitted, the engine-wide level last
            set by `set_engine_log_level` applies (INFO until then).
        log_file: Extra file destination. When omitted, the engine-wide log
            file (if any) applies.
        stream: Console destination. Defaults to the current sys.stderr.
    """
    level = _level_number(log_level if log_level is not None else _engine_level)
    if log_file is None:
        log_file = _engine_log_file

    logger = logging.getLogger(name)
    if not logger.handlers:
        console = logging.StreamHandler(stream=stream if stream is not None else sys.stderr)
        console.setFormatter(JsonFormatter())
        logger.addHandler(console)
        logger.propagate = False

    _apply(logger, level, log_file)
    return logger


def set_engine_log_level(log_level: str, log_file: Optional[Path] = None) -> None:
    """
    Make `log_level` and `log_file` the engine-wide logging settings.

    Loggers that already exist under the `reclaim` namespace are updated in
    place; loggers created afterwards pick the settings up as defaults.
    """
    global _engine_level, _engine_log_file

    level = _level_number(log_level)
    _engine_level = log_level.upper()
    _engine_log_file = log_file

    for name in list(logging.Logger.manager.loggerDict):
        if name == ENGINE_NAMESPACE or name.startswith(ENGINE_NAMESPACE + "."):
            _apply(logging.getLogger(name), level, log_file)
