# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Schema-level validation tests.

These exercise the pydantic models directly: boundary values, constraint
enforcement and the shape of the top-level container.
"""

import pytest
from pydantic import ValidationError

from reclaim.config.schema import GlobalConfig, ReclaimConfig, ToolchainConfig


class TestGlobalConfigSchema:
    def test_seed_must_be_non_negative(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig(config_version="1.0.0", seed=-1)

    def test_seed_zero_is_valid(self) -> None:
        config = GlobalConfig(config_version="1.0.0", seed=0)
        assert config.seed == 0

    def test_seed_defaults_to_unset(self) -> None:
        assert GlobalConfig(config_version="1.0.0").seed is None

    def test_log_level_is_normalized(self) -> None:
        config = GlobalConfig(config_version="1.0.0", log_level="debug")
        assert config.log_level == "DEBUG"

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig(config_version="1.0.0", log_level="LOUD")

    def test_default_workspace_is_cwd(self) -> None:
        assert GlobalConfig(config_version="1.0.0").workspace == "."

    def test_config_version_is_required(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig()  # type: ignore[call-arg]


class TestToolchainConfigSchema:
    def test_defaults(self) -> None:
        toolchain = ToolchainConfig()
        assert toolchain.compiler == "rustc"
        assert toolchain.compile_timeout_seconds == 60.0
        assert toolchain.execute_timeout_seconds == 5.0

    def test_empty_compiler_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ToolchainConfig(compiler="")

    @pytest.mark.parametrize("value", [0, -1, 601])
    def test_compile_timeout_bounds(self, value: float) -> None:
        with pytest.raises(ValidationError):
            ToolchainConfig(compile_timeout_seconds=value)

    @pytest.mark.parametrize("value", [0, 301])
    def test_execute_timeout_bounds(self, value: float) -> None:
        with pytest.raises(ValidationError):
            ToolchainConfig(execute_timeout_seconds=value)

    def test_timeouts_accept_none(self) -> None:
        toolchain = ToolchainConfig(compile_timeout_seconds=None, execute_timeout_seconds=None)
        assert toolchain.compile_timeout_seconds is None
        assert toolchain.execute_timeout_seconds is None


class TestReclaimConfigSchema:
    def test_global_section_is_required(self) -> None:
        with pytest.raises(ValidationError):
            ReclaimConfig.model_validate({"toolchain": {}})

    def test_toolchain_section_is_optional(self) -> None:
        config = ReclaimConfig.model_validate({"global": {"config_version": "1.0.0"}})
        assert config.toolchain == ToolchainConfig()

    def test_unknown_section_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ReclaimConfig.model_validate(
                {"global": {"config_version": "1.0.0"}, "training": {}}
            )
