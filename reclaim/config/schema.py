# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for Reclaim.

Each config section gets its own frozen pydantic model. Once a config is
loaded it cannot be mutated; the session reads it, never writes it.

The models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class GlobalConfig(BaseModel):
    """
    Cross-cutting settings: identity, logging, randomness and where the
    player's workspace lives.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        description="Schema version for compatibility tracking, e.g. '1.0.0'"
    )
    project_name: str = Field(
        default="reclaim", description="Human-readable project identifier"
    )
    seed: Optional[int] = Field(
        default=None,
        ge=0,
        description="Seed for terrain and target placement; unset means a fresh layout every run",
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output",
    )
    workspace: str = Field(
        default=".",
        description="Directory holding missions/ and the compiled artifacts",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_VALID_LOG_LEVELS)}")
        return upper


class ToolchainConfig(BaseModel):
    """
    How learner code gets built and run.

    A timeout of None means wait forever. The defaults bound both steps so
    a looping artifact can't hang the session.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    compiler: str = Field(
        default="rustc",
        min_length=1,
        description="Compiler executable, invoked as `<compiler> SRC -o OUT`",
    )
    compile_timeout_seconds: Optional[float] = Field(
        default=60.0,
        gt=0,
        le=600,
        description="Max seconds to wait for the compiler before declaring failure",
    )
    execute_timeout_seconds: Optional[float] = Field(
        default=5.0,
        gt=0,
        le=300,
        description="Max seconds to wait for a compiled artifact before declaring failure",
    )


class ReclaimConfig(BaseModel):
    """
    Top-level config container.

    A YAML file needs at least a `global:` section. `toolchain:` is optional
    and falls back to defaults when absent.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(alias="global")
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)


def default_config() -> ReclaimConfig:
    """The config used when no --config file is given."""
    return ReclaimConfig.model_validate({"global": {"config_version": "1.0.0"}})
