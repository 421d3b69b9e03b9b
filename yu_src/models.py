#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Configuration and result models for yu.
"""

from typing import Callable, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

# ============================================================================
# Command Results and Failure Policies
# ============================================================================


class CommandResult(BaseModel):
    """Outcome of a finished child process"""

    model_config = ConfigDict(frozen=True)

    command: str = Field(description="Command line as handed to the shell")
    exit_code: int = Field(description="Exit status of the child process")

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class Fatal(BaseModel):
    """Print a failure notice and exit the program with status 1"""

    model_config = ConfigDict(frozen=True)


class Ignore(BaseModel):
    """Hand the failed result back to the caller"""

    model_config = ConfigDict(frozen=True)


class CustomHandler(BaseModel):
    """Delegate failure handling to a callback"""

    model_config = ConfigDict(frozen=True)

    handler: Callable[[CommandResult], None]


FailurePolicy = Union[Fatal, Ignore, CustomHandler]


# ============================================================================
# Settings
# ============================================================================


def _non_empty(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty")
    return v


class YuConfig(BaseSettings):
    """Main configuration model"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="YU_",
        case_sensitive=False,
        extra="ignore",
    )

    verbose: bool = Field(
        default=False,
        description="Echo every executed command and never suppress output",
    )
    compose_command: str = Field(
        default="docker-compose", description="Container orchestration tool"
    )
    base_command: str = Field(
        default="docker", description="Base container tool probed by doctor"
    )
    test_marker: str = Field(
        default="bin/test", description="Marker file of services with tests"
    )
    test_command: str = Field(
        default="bin/test", description="Command run inside a service by 'test'"
    )
    manifest_marker: str = Field(
        default="Gemfile", description="Dependency manifest marker file"
    )
    package_command: str = Field(
        default="bundle package --all",
        description="Command packaging dependencies inside a service directory",
    )
    shell_command: str = Field(
        default="bash", description="Interactive shell started by 'shell'"
    )
    test_env: str = Field(
        default="APP_ENV=test",
        description="Environment override passed by 'shell --test'",
    )
    seed_script: str = Field(
        default="seed", description="Seed script run by 'reset' when present"
    )

    @field_validator(
        "compose_command",
        "base_command",
        "test_marker",
        "test_command",
        "manifest_marker",
        "package_command",
        "shell_command",
        "seed_script",
    )
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        return _non_empty(v)

    @field_validator("test_env")
    @classmethod
    def validate_test_env(cls, v: str) -> str:
        """Require KEY=VALUE form"""
        key, sep, _ = v.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid test_env '{v}'. Expected KEY=VALUE")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize settings sources priority.
        Priority: env vars > .env file > YAML (init) > file secrets > defaults
        """
        return env_settings, dotenv_settings, init_settings, file_secret_settings
