#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CLI commands for managing project services.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .dispatcher import CommandDispatcher, load_config
from .runner import ProcessRunner
from .schema_utils import generate_config_schema
from .version import VERSION

console = Console()
app = typer.Typer(
    name="yu",
    help="Helps you manage your microservices",
    add_completion=False,
    no_args_is_help=True,
)
config_app = typer.Typer(help="Configuration utilities")
app.add_typer(config_app, name="config")

ServiceNames = Annotated[
    Optional[list[str]], typer.Argument(help="Service names or directories")
]


def _version_callback(value: bool):
    if value:
        console.print(f"yu {VERSION}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool, typer.Option("-V", "--verbose", help="Verbose output")
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit",
        ),
    ] = None,
):
    """Helps you manage your microservices"""
    project_root = Path.cwd()
    config = load_config(project_root)
    if verbose:
        config = config.model_copy(update={"verbose": True})

    runner = ProcessRunner(verbose=config.verbose)
    ctx.obj = CommandDispatcher(config, runner, project_root)


# ============================================================================
# CLI Commands
# ============================================================================


@app.command()
def test(ctx: typer.Context, names: ServiceNames = None):
    """Run tests for service(s)"""
    dispatcher: CommandDispatcher = ctx.obj
    dispatcher.test(names or [])


@app.command()
def build(ctx: typer.Context, names: ServiceNames = None):
    """Build image for service(s)"""
    dispatcher: CommandDispatcher = ctx.obj
    dispatcher.build(names or [])


@app.command()
def shell(
    ctx: typer.Context,
    names: ServiceNames = None,
    test: Annotated[
        bool, typer.Option("--test", help="Start the shell with the test environment")
    ] = False,
):
    """Start a shell container for a service"""
    dispatcher: CommandDispatcher = ctx.obj
    dispatcher.shell(names or [], test=test)


@app.command()
def reset(ctx: typer.Context):
    """Reset everything"""
    dispatcher: CommandDispatcher = ctx.obj
    dispatcher.reset()


@app.command()
def doctor(ctx: typer.Context):
    """Check your environment is ready to yu"""
    dispatcher: CommandDispatcher = ctx.obj
    dispatcher.doctor()


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Show the effective configuration"""
    dispatcher: CommandDispatcher = ctx.obj

    table = Table(
        title="yu configuration",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="yellow")
    for name, value in dispatcher.config.model_dump().items():
        table.add_row(name, escape(str(value)))

    console.print(table)


@config_app.command("schema")
def config_schema(ctx: typer.Context):
    """Generate editor schema for yu.yaml"""
    dispatcher: CommandDispatcher = ctx.obj
    try:
        schema_path = generate_config_schema(dispatcher.project_root)
        console.print(f"[green]✓[/green] Generated {schema_path}")
    except OSError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def main():
    """Main entry point"""
    app()
