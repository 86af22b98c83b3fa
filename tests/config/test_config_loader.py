# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the config loader.

We check that:
  1. Valid YAML loads into a frozen, correct config object
  2. Missing required fields raise ConfigValidationError
  3. Unknown fields raise ConfigValidationError (extra="forbid")
  4. Broken YAML raises ConfigLoadError
  5. Loaded config is truly immutable
"""

import textwrap
from pathlib import Path

import pytest

from reclaim.config.exceptions import ConfigLoadError, ConfigValidationError
from reclaim.config.loader import load_config
from reclaim.config.schema import default_config


class TestLoadValidConfig:
    def test_loads_minimal_valid_config(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        assert config.global_config.project_name == "reclaim-test"
        assert config.global_config.seed == 42
        assert config.global_config.log_level == "DEBUG"

    def test_toolchain_defaults(self, tmp_config_file: Path) -> None:
        toolchain = load_config(tmp_config_file).toolchain
        assert toolchain.compiler == "rustc"
        assert toolchain.compile_timeout_seconds == 60.0
        assert toolchain.execute_timeout_seconds == 5.0

    def test_timeouts_can_be_disabled(self, tmp_path: Path) -> None:
        content = textwrap.dedent("""\
            global:
              config_version: "1.0.0"
            toolchain:
              compiler: "/opt/rust/bin/rustc"
              compile_timeout_seconds: null
              execute_timeout_seconds: null
        """)
        config_file = tmp_path / "no_timeouts.yaml"
        config_file.write_text(content, encoding="utf-8")

        toolchain = load_config(config_file).toolchain
        assert toolchain.compiler == "/opt/rust/bin/rustc"
        assert toolchain.compile_timeout_seconds is None
        assert toolchain.execute_timeout_seconds is None

    def test_default_config(self) -> None:
        config = default_config()
        assert config.global_config.seed is None
        assert config.global_config.workspace == "."


class TestLoadInvalidConfig:
    def test_missing_required_field_raises_validation_error(
        self, invalid_config_file: Path
    ) -> None:
        with pytest.raises(ConfigValidationError):
            load_config(invalid_config_file)

    def test_unknown_field_raises_validation_error(self, tmp_path: Path) -> None:
        content = textwrap.dedent("""\
            global:
              config_version: "1.0.0"
              some_nonsense_field: true
        """)
        config_file = tmp_path / "unknown_field.yaml"
        config_file.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigValidationError):
            load_config(config_file)

    @pytest.mark.parametrize(
        "section",
        [
            "global:\n  config_version: '1.0.0'\n  log_level: 'LOUD'\n",
            "global:\n  config_version: '1.0.0'\n  seed: -1\n",
            "global:\n  config_version: '1.0.0'\ntoolchain:\n  execute_timeout_seconds: 0\n",
            "global:\n  config_version: '1.0.0'\ntoolchain:\n  compiler: ''\n",
        ],
    )
    def test_out_of_range_values(self, tmp_path: Path, section: str) -> None:
        config_file = tmp_path / "bad.yaml"
        config_file.write_text(section, encoding="utf-8")

        with pytest.raises(ConfigValidationError):
            load_config(config_file)

    def test_broken_yaml_raises_load_error(self, broken_yaml_file: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_config(broken_yaml_file)

    def test_non_mapping_raises_load_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError):
            load_config(config_file)

    def test_empty_file_raises_load_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("", encoding="utf-8")
        with pytest.raises(ConfigLoadError, match="empty"):
            load_config(config_file)

    def test_nonexistent_file_raises_load_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_config(tmp_path / "does_not_exist.yaml")

    def test_directory_path_raises_load_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_config(tmp_path)


class TestConfigImmutability:
    def test_cannot_mutate_frozen_config(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        with pytest.raises(Exception):
            config.global_config.seed = 999  # type: ignore[misc]

    def test_cannot_mutate_toolchain(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        with pytest.raises(Exception):
            config.toolchain.compiler = "gcc"  # type: ignore[misc]
