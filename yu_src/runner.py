#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Child process execution for yu commands.
"""

import os
import subprocess
import sys
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from .models import CommandResult, CustomHandler, Fatal, FailurePolicy

console = Console()

SHELL = "/bin/sh"
DISCARD_OUTPUT = ">/dev/null 2>&1"

# Exit codes for a child that never ran, and for Ctrl-C (ends the program)
SPAWN_FAILED = 127
INTERRUPTED = 130


def info(message: str) -> None:
    """Print a progress message with the yu prefix"""
    console.print(
        f"[bold cyan]\\[yu][/bold cyan] {escape(message)}",
        soft_wrap=True,
        highlight=False,
    )


class ProcessRunner:
    """Runs shell commands one at a time, blocking until each finishes"""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def prepare(self, command: str, show_output: bool = True) -> str:
        """Return the command line actually handed to the shell"""
        if show_output or self.verbose:
            return command
        return f"{command} {DISCARD_OUTPUT}"

    def run(
        self,
        command: str,
        show_output: bool = True,
        policy: FailurePolicy = Fatal(),
    ) -> CommandResult:
        """Run a command in a child shell and apply the failure policy.

        Fatal failures print a notice and exit the program with status 1.
        A CustomHandler is called with the failed result instead; if it
        returns, the result is handed back like an ignored failure.
        """
        command = self.prepare(command, show_output)
        self._echo(command)

        result = CommandResult(command=command, exit_code=self._spawn(command))
        if result.succeeded:
            return result

        if isinstance(policy, CustomHandler):
            policy.handler(result)
        elif isinstance(policy, Fatal):
            self._fail(command)
        return result

    def execute(self, command: str) -> NoReturn:
        """Replace the current process with the command"""
        self._echo(command)
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            os.execv(SHELL, [SHELL, "-c", command])
        except OSError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            self._fail(command)

    def _spawn(self, command: str) -> int:
        sys.stdout.flush()
        try:
            completed = subprocess.run(command, shell=True)
        except KeyboardInterrupt:
            console.print("\n[yellow]Interrupted by user[/yellow]")
            raise typer.Exit(INTERRUPTED)
        except OSError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            return SPAWN_FAILED
        return completed.returncode

    def _echo(self, command: str) -> None:
        if self.verbose:
            info(f"Executing: {command}")

    def _fail(self, command: str) -> NoReturn:
        info(f"Command failed: {command}")
        info("Exiting...")
        raise typer.Exit(1)
