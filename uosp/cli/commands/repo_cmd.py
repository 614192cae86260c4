"""clone / pushlp / patch commands - packaging repository management."""

from __future__ import annotations

from pathlib import Path

import typer

from uosp.cli.commands._helpers import exit_on_failure
from uosp.cli.commands.options import Dist
from uosp.cli.context import build_context
from uosp.platform.http import is_http_url


def clone(
    project: str = typer.Argument(..., help="Package name (e.g. nova)."),
    dist: Dist = typer.Option(Dist.ubuntu, "--dist", help="Distribution to clone from"),
) -> None:
    """Git clone a package from its packaging repository."""
    ctx = build_context()
    exit_on_failure(ctx.workflow.clone(project, dist=dist.value), ctx)


def pushlp(
    project: str = typer.Argument(..., help="Package name (e.g. nova)."),
    account: str = typer.Argument(..., help="Launchpad account (e.g. sahid-ferdjaoui)."),
) -> None:
    """Force push all branches to a Launchpad account."""
    ctx = build_context()
    exit_on_failure(ctx.workflow.pushlp(project, account), ctx)


def patch(
    project: str = typer.Argument(..., help="Package name (e.g. nova)."),
    source: str = typer.Argument(..., help="Patch file, or http(s) URL to fetch it from."),
    release: str = typer.Option("master", "--release", help="OpenStack release (e.g. stein)."),
) -> None:
    """Apply a patch file or URL to the packaging tree."""
    ctx = build_context()
    patch_source = source if is_http_url(source) else Path(source)
    exit_on_failure(ctx.workflow.patch(project, patch_source, release=release), ctx)
