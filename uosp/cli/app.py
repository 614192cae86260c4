from __future__ import annotations

import os
from pathlib import Path

import typer

from uosp import __version__
from uosp.cli.commands.build_cmd import build, publish
from uosp.cli.commands.release_cmd import rebase, snapshot
from uosp.cli.commands.repo_cmd import clone, patch, pushlp
from uosp.cli.context import CONFIG_ENV, ROOT_ENV


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    invoke_without_command=True,
    rich_markup_mode="rich",
    help="Collection of tools helping to manage Ubuntu OpenStack packages.",
)


# Commands
app.command()(rebase)
app.command()(snapshot)
app.command()(build)
app.command()(publish)
app.command()(clone)
app.command()(pushlp)
app.command()(patch)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Directory holding package checkouts (default: current directory)",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Configuration file (default: ./uosp.toml, then ~/.config/uosp/config.toml)",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)

    if root is not None:
        os.environ[ROOT_ENV] = str(root)
    if config is not None:
        os.environ[CONFIG_ENV] = str(config)


def main() -> None:
    app()
