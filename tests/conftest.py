# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for Reclaim tests.

The engine shells out to a compiler and then to the compiled binary. To
test that without rustc, we swap in a tiny shell script as the "compiler":
it copies a shell-script "source" to the artifact path and marks it
executable, or fails with a rustc-looking error when the source contains
COMPILE_FAIL. The firmware sources below are those shell scripts.
"""

import logging
import stat
import sys
import textwrap
from pathlib import Path
from typing import Callable

import pytest

from reclaim.config.schema import ToolchainConfig
from reclaim.logging.logger import ENGINE_NAMESPACE, set_engine_log_level

FAKE_RUSTC = textwrap.dedent("""\
    #!/bin/sh
    # usage: fake_rustc SOURCE -o OUTPUT
    if grep -q COMPILE_FAIL "$1"; then
        echo "error[E0308]: mismatched types" >&2
        echo " --> $1:42:5" >&2
        exit 1
    fi
    cp "$1" "$3" && chmod +x "$3"
""")

FIRMWARE: dict[str, str] = {
    "distance": textwrap.dedent("""\
        #!/bin/sh
        awk -v x1="$1" -v y1="$2" -v x2="$3" -v y2="$4" \\
            'BEGIN { printf "%.2f\\n", sqrt((x2 - x1) ^ 2 + (y2 - y1) ^ 2) }'
    """),
    "zero": "#!/bin/sh\necho 0.00\n",
    "chlorine": textwrap.dedent("""\
        #!/bin/sh
        awk -v t="$1" -v p="$2" 'BEGIN {
            a = t / 10.0
            if (p < 7.0) a += 2.0
            else if (p > 7.0) a -= 1.0
            if (a < 0) a = 0
            printf "%.2f\\n", a
        }'
    """),
    "crash": "#!/bin/sh\necho 'thread main panicked' >&2\nexit 101\n",
    "garbage": "#!/bin/sh\necho 'hello wasteland'\n",
    "broken": "#!/bin/sh\n# COMPILE_FAIL\necho 1.00\n",
    "hang": "#!/bin/sh\nexec sleep 30\n",
}


def _make_executable(path: Path) -> None:
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if sys.platform == "win32":
        skip = pytest.mark.skip(reason="fake toolchain needs a POSIX shell")
        for item in items:
            item.add_marker(skip)


@pytest.fixture(autouse=True)
def _engine_logging_defaults():  # type: ignore[no-untyped-def]
    """Put engine-wide logging back to INFO on stderr after every test."""
    yield
    set_engine_log_level("INFO")
    for name in list(logging.Logger.manager.loggerDict):
        if name == ENGINE_NAMESPACE or name.startswith(ENGINE_NAMESPACE + "."):
            logger = logging.getLogger(name)
            for handler in [h for h in logger.handlers if isinstance(h, logging.FileHandler)]:
                logger.removeHandler(handler)
                handler.close()


@pytest.fixture()
def fake_rustc(tmp_path: Path) -> str:
    """Path to the stand-in compiler script."""
    script = tmp_path / "bin" / "fake_rustc"
    script.parent.mkdir(parents=True, exist_ok=True)
    script.write_text(FAKE_RUSTC, encoding="utf-8")
    _make_executable(script)
    return str(script)


@pytest.fixture()
def toolchain(fake_rustc: str) -> ToolchainConfig:
    return ToolchainConfig(
        compiler=fake_rustc,
        compile_timeout_seconds=10,
        execute_timeout_seconds=5,
    )


@pytest.fixture()
def workspace(tmp_path: Path) -> Path:
    """An initialized (but empty) workspace: just the missions/ directory."""
    root = tmp_path / "workspace"
    (root / "missions").mkdir(parents=True)
    return root


@pytest.fixture()
def write_firmware(workspace: Path) -> Callable[[str, str], Path]:
    """Write one of the FIRMWARE sources into missions/<source_name>."""

    def _write(source_name: str, firmware: str) -> Path:
        path = workspace / "missions" / source_name
        path.write_text(FIRMWARE[firmware], encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def make_artifact(tmp_path: Path) -> Callable[[str], Path]:
    """Drop an already-"compiled" executable into tmp_path."""
    counter = {"n": 0}

    def _make(firmware: str) -> Path:
        counter["n"] += 1
        path = tmp_path / f"artifact_{counter['n']}"
        path.write_text(FIRMWARE.get(firmware, firmware), encoding="utf-8")
        _make_executable(path)
        return path

    return _make


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """The smallest config that passes schema validation."""
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          project_name: "reclaim-test"
          seed: 42
          log_level: "DEBUG"
    """)
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """Valid YAML that fails schema validation (missing config_version)."""
    config_content = textwrap.dedent("""\
        global:
          project_name: "reclaim-test"
          seed: 42
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file
