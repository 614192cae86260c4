"""rebase / snapshot commands - record a new upstream version."""

from __future__ import annotations

import typer

from uosp.cli.commands._helpers import exit_on_failure
from uosp.cli.commands.options import Dist, Kind
from uosp.cli.context import build_context


def rebase(
    project: str = typer.Argument(..., help="Package name (e.g. nova)."),
    version: str = typer.Argument(..., help="Upstream version to rebase on (e.g. 19.0.1)."),
    release: str = typer.Option("master", "--release", help="OpenStack release (e.g. stein)."),
    bugid: str | None = typer.Option(
        None, "--bugid", help="Launchpad bug ID for the rebase.", show_default=False
    ),
    kind: Kind = typer.Option(Kind.openstack, "--kind", help="Package kind"),
    dist: Dist = typer.Option(Dist.ubuntu, "--dist", help="Distribution to clone from"),
) -> None:
    """Rebase package to a new upstream release."""
    ctx = build_context()
    record = exit_on_failure(
        ctx.workflow.rebase(
            project,
            version,
            release=release,
            bug_id=bugid,
            kind=kind.value,
            dist=dist.value,
        ),
        ctx,
    )
    ctx.console.print(f"{record.version}: {record.text}")


def snapshot(
    project: str = typer.Argument(..., help="Package name (e.g. nova)."),
    version: str = typer.Argument(..., help="The next upstream version (e.g. 19.0.1~b1)."),
    upstream: str | None = typer.Option(
        None,
        "--upstream",
        help="Upstream project name when it differs from the package.",
        show_default=False,
    ),
    release: str = typer.Option("master", "--release", help="Upstream branch release."),
) -> None:
    """Update a package to a new upstream snapshot."""
    ctx = build_context()
    record = exit_on_failure(
        ctx.workflow.snapshot(project, version, upstream=upstream, release=release),
        ctx,
    )
    ctx.console.print(f"{record.version}: {record.text}")
