"""build / publish commands."""

from __future__ import annotations

import typer

from uosp.cli.commands._helpers import exit_on_failure
from uosp.cli.context import build_context


def build(
    project: str = typer.Argument(..., help="Package name (e.g. nova)."),
) -> None:
    """Build the source package."""
    ctx = build_context()
    exit_on_failure(ctx.workflow.build(project), ctx)


def publish(
    project: str = typer.Argument(..., help="Package name (e.g. nova)."),
    ppa: str = typer.Argument(..., help="Launchpad PPA (e.g. ppa:user/eoan-train)."),
    serie: str = typer.Argument(..., help="Ubuntu series to build for (e.g. eoan)."),
    do_build: bool = typer.Option(False, "--build", help="Build before publishing."),
) -> None:
    """Publish package to a Launchpad PPA."""
    ctx = build_context()
    exit_on_failure(ctx.workflow.publish(project, ppa, serie, build=do_build), ctx)
