#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command recipes for managing the services of a project.
"""

import shlex
from pathlib import Path
from typing import NoReturn, Optional

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from .models import CommandResult, CustomHandler, Ignore, YuConfig
from .runner import ProcessRunner, info

console = Console()

CONFIG_FILENAME = "yu.yaml"


def load_config(project_root: Path) -> YuConfig:
    """Load configuration from yu.yaml (optional), .env and YU_* variables"""
    config_path = project_root / CONFIG_FILENAME
    data: object = {}

    try:
        if config_path.exists():
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{config_path} must contain a mapping")
        bad_keys = [key for key in data if not isinstance(key, str)]
        if bad_keys:
            raise ValueError(f"{config_path} has non-string keys: {bad_keys}")
        return YuConfig(**data)
    except (yaml.YAMLError, ValidationError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def normalise_container_name(name_or_dir: str) -> str:
    """Reduce a service directory path to its bare name"""
    return Path(name_or_dir).name


# ============================================================================
# Command Dispatcher
# ============================================================================


class CommandDispatcher:
    """Turns yu subcommands into sequences of child processes"""

    def __init__(
        self,
        config: YuConfig,
        runner: ProcessRunner,
        project_root: Optional[Path] = None,
    ):
        self.config = config
        self.runner = runner
        # Commands run from the current directory, so this should match it
        self.project_root = project_root or Path.cwd()

    @property
    def compose(self) -> str:
        return self.config.compose_command

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def containers_with_file(self, filename: str) -> list[str]:
        """Names of top-level directories containing the given file

        Hidden directories are skipped.
        """
        names = {
            path.relative_to(self.project_root).parts[0]
            for path in self.project_root.glob(f"*/{filename}")
        }
        return sorted(name for name in names if not name.startswith("."))

    def testable_containers(self) -> list[str]:
        return self.containers_with_file(self.config.test_marker)

    def manifest_containers(self) -> list[str]:
        return self.containers_with_file(self.config.manifest_marker)

    def select_test_targets(self, names: list[str]) -> list[str]:
        if not names:
            return self.testable_containers()
        return [normalise_container_name(name) for name in names]

    def select_package_targets(self, names: list[str]) -> list[str]:
        """Manifest directories to package before building the given services"""
        manifest_containers = self.manifest_containers()
        if not names:
            return manifest_containers
        return [name for name in manifest_containers if name in names]

    # ------------------------------------------------------------------
    # Command lines
    # ------------------------------------------------------------------

    def test_command_for(self, container: str) -> str:
        return " ".join(
            [
                self.compose,
                "run",
                "--rm",
                shlex.quote(container),
                self.config.test_command,
            ]
        )

    def package_command_for(self, container: str) -> str:
        return f"cd {shlex.quote(container)} && {self.config.package_command}"

    def build_command_for(self, containers: list[str]) -> str:
        return " ".join([self.compose, "build", *map(shlex.quote, containers)])

    def shell_command_for(self, container: str, test: bool = False) -> str:
        env_option = ["-e", shlex.quote(self.config.test_env)] if test else []
        return " ".join(
            [
                self.compose,
                "run",
                "--rm",
                *env_option,
                shlex.quote(container),
                self.config.shell_command,
            ]
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def package_dependencies(self, container: str) -> CommandResult:
        info(f"Packaging dependencies for {container}")
        return self.runner.run(self.package_command_for(container))

    def test(self, names: list[str]) -> list[CommandResult]:
        """Run tests for every target; exit 1 afterwards if any failed"""
        results = []
        for container in self.select_test_targets(names):
            info(f"Running tests for {container}...")
            results.append(
                self.runner.run(self.test_command_for(container), policy=Ignore())
            )

        if not all(result.succeeded for result in results):
            raise typer.Exit(1)
        return results

    def build(self, names: list[str]) -> NoReturn:
        """Package dependencies, then hand the process over to the build tool"""
        containers = [normalise_container_name(name) for name in names]
        for container in self.select_package_targets(containers):
            self.package_dependencies(container)

        info("Building images...")
        self.runner.execute(self.build_command_for(containers))

    def shell(self, names: list[str], test: bool = False) -> NoReturn:
        """Replace the process with an interactive shell inside one service"""
        if not names:
            info("Please provide container")
            raise typer.Exit(1)
        if len(names) > 1:
            info("One at a time please!")
            raise typer.Exit(1)

        container = normalise_container_name(names[0])
        info(f"Loading {'test ' if test else ''}shell for {container}...")
        self.runner.execute(self.shell_command_for(container, test=test))

    def reset(self) -> None:
        """Tear down and rebuild every service, stopping at the first failure"""
        info("Packaging dependencies in all services containing a manifest")
        for container in self.manifest_containers():
            self.package_dependencies(container)

        info("Killing any running containers")
        self.runner.run(f"{self.compose} kill")
        info("Removing all existing containers")
        self.runner.run(f"{self.compose} rm --force")
        info("Building fresh images")
        self.runner.run(f"{self.compose} build")

        seed_script = self.config.seed_script
        if (self.project_root / seed_script).exists():
            info("Seeding system state")
            self.runner.run(f"./{seed_script}")

        info("Bringing all containers up")
        self.runner.run(f"{self.compose} up -d --no-recreate")

    def doctor(self) -> None:
        """Check the container tooling, stopping at the first broken probe"""
        probes = [
            (
                self.config.base_command,
                f"Please ensure you have {self.config.base_command} working",
            ),
            (
                f"{self.compose} --version",
                f"Please ensure you have {self.compose} working",
            ),
            (
                f"{self.compose} ps",
                "Your current directory does not contain a docker-compose.yml",
            ),
        ]
        for command, remediation in probes:
            self.runner.run(
                command, show_output=False, policy=_remediate(remediation)
            )
        info("Everything looks good.")


def _remediate(message: str) -> CustomHandler:
    def handler(result: CommandResult) -> None:
        info(message)
        raise typer.Exit(1)

    return CustomHandler(handler=handler)
