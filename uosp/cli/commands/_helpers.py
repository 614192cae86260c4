"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from uosp.core.result import Err, Result
from uosp.output.errors import failure_exit_code, print_failure
from uosp.release.errors import WorkflowFailure

if TYPE_CHECKING:
    from uosp.cli.context import CLIContext

T = TypeVar("T")


def exit_on_failure(result: Result[T, WorkflowFailure], ctx: CLIContext) -> T:
    """Return the value of a successful workflow, or print and exit.

    This is the only place a workflow failure turns into output and a
    process exit status.
    """
    if isinstance(result, Err):
        print_failure(result.error, ctx.console)
        raise typer.Exit(code=failure_exit_code(result.error))
    return result.value
