"""Error presentation for workflow failures."""

from __future__ import annotations

from typing import TYPE_CHECKING

from uosp.core.errors import ErrorCode
from uosp.output.console import Style

if TYPE_CHECKING:
    from uosp.output.console import ConsoleProtocol
    from uosp.release.errors import WorkflowFailure

__all__ = ["failure_exit_code", "print_failure"]


def print_failure(failure: WorkflowFailure, console: ConsoleProtocol) -> None:
    """Print which operation failed, at which step, and why."""
    console.error(failure.pretty())
    if failure.error.hint:
        console.print(f"hint: {failure.error.hint}", Style.DIM)


def failure_exit_code(failure: WorkflowFailure) -> int:
    """Every propagated failure exits with the same status."""
    del failure
    return int(ErrorCode.FAILURE)
