# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

import os
from pathlib import Path
from types import SimpleNamespace

import pytest
from typer.testing import CliRunner

from yu_src import commands
from yu_src.dispatcher import CommandDispatcher
from yu_src.models import YuConfig
from yu_src.runner import DISCARD_OUTPUT, ProcessRunner


class ProcessReplaced(Exception):
    """Raised by FakeRunner.execute in place of replacing the process."""

    def __init__(self, command: str):
        super().__init__(command)
        self.command = command


class FakeRunner(ProcessRunner):
    """ProcessRunner that records commands instead of spawning them."""

    def __init__(self, verbose: bool = False, failing: set[str] | None = None):
        super().__init__(verbose=verbose)
        self.failing = failing if failing is not None else set()
        self.commands: list[str] = []

    def _spawn(self, command: str) -> int:
        self.commands.append(command)
        return 1 if command.removesuffix(f" {DISCARD_OUTPUT}") in self.failing else 0

    def execute(self, command: str):
        self._echo(command)
        self.commands.append(command)
        raise ProcessReplaced(command)


@pytest.fixture(autouse=True)
def clean_yu_env(monkeypatch):
    for key in list(os.environ):
        if key.upper().startswith("YU_"):
            monkeypatch.delenv(key)


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    """
    Project with four services:
    api (tests + Gemfile), web (Gemfile), worker (tests), docs (neither).
    """
    for service in ("api", "worker"):
        test_script = tmp_path / service / "bin" / "test"
        test_script.parent.mkdir(parents=True)
        test_script.write_text("#!/bin/sh\n")
    for service in ("api", "web"):
        (tmp_path / service).mkdir(exist_ok=True)
        (tmp_path / service / "Gemfile").write_text("source 'https://rubygems.org'\n")
    (tmp_path / "docs").mkdir()
    (tmp_path / "README.md").write_text("# project\n")

    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def dispatcher(project: Path, runner: FakeRunner) -> CommandDispatcher:
    return CommandDispatcher(YuConfig(), runner, project)


@pytest.fixture
def cli(project: Path, monkeypatch):
    runners: list[FakeRunner] = []
    failing: set[str] = set()

    def make_runner(verbose: bool = False) -> FakeRunner:
        fake = FakeRunner(verbose=verbose, failing=failing)
        runners.append(fake)
        return fake

    monkeypatch.setattr(commands, "ProcessRunner", make_runner)

    def invoke(*args: str):
        return CliRunner().invoke(commands.app, list(args))

    return SimpleNamespace(invoke=invoke, runners=runners, failing=failing)
