# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

from pathlib import Path

import pytest
import typer
from pydantic import ValidationError

from yu_src.dispatcher import load_config
from yu_src.models import CommandResult, YuConfig


def test_defaults():
    config = YuConfig()
    assert config.verbose is False
    assert config.compose_command == "docker-compose"
    assert config.manifest_marker == "Gemfile"
    assert config.test_marker == "bin/test"


@pytest.mark.parametrize("test_env", ["APP_ENV=test", "RACK_ENV=", "X=a=b"])
def test_test_env_accepts_pairs(test_env: str):
    assert YuConfig(test_env=test_env).test_env == test_env


@pytest.mark.parametrize("test_env", ["", "APP_ENV", "=test", " =x"])
def test_test_env_rejects_invalid_values(test_env: str):
    with pytest.raises(ValidationError):
        YuConfig(test_env=test_env)


def test_commands_must_not_be_empty():
    with pytest.raises(ValidationError):
        YuConfig(compose_command="  ")


def test_environment_overrides_yaml(tmp_path: Path, monkeypatch):
    (tmp_path / "yu.yaml").write_text("compose_command: podman-compose\n")
    monkeypatch.setenv("YU_COMPOSE_COMMAND", "docker compose")

    assert load_config(tmp_path).compose_command == "docker compose"


def test_missing_and_empty_config_use_defaults(tmp_path: Path):
    assert load_config(tmp_path) == YuConfig()

    (tmp_path / "yu.yaml").write_text("")
    assert load_config(tmp_path) == YuConfig()


@pytest.mark.parametrize(
    "content", ["- a\n- b\n", "compose_command: [\n", "1: x\n"]
)
def test_malformed_config_exits(tmp_path: Path, content: str):
    (tmp_path / "yu.yaml").write_text(content)

    with pytest.raises(typer.Exit) as excinfo:
        load_config(tmp_path)

    assert excinfo.value.exit_code == 1


def test_command_result_is_immutable():
    result = CommandResult(command="docker", exit_code=1)

    assert not result.succeeded
    with pytest.raises(ValidationError):
        result.exit_code = 0
