"""Error types for packaging workflows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from uosp.platform.process import ProcessError

ErrorKind = Literal[
    "version",
    "clone",
    "checkout",
    "pull",
    "show",
    "push",
    "apply",
    "hash",
    "import",
    "build",
    "changelog",
    "commit",
    "snapshot",
    "publish",
    "config",
    "fatal",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical error payload.

    Each workflow step maps its collaborator's failure to exactly one
    `kind`. `fatal` is reserved for I/O failures that prevented the
    collaborator from running at all (missing executable, permissions).
    """

    kind: ErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


def from_process(kind: ErrorKind, message: str, error: ProcessError) -> ReleaseError:
    """Map a failed external command to a ReleaseError.

    A command that never started is an unexpected I/O failure and is
    reported as `fatal` whatever step it belongs to.
    """
    if not error.spawned:
        return ReleaseError(kind="fatal", message=f"unexpected error {error.stderr}", hint=message)
    detail = error.stderr.strip() or error.stdout.strip()
    return ReleaseError(kind=kind, message=message, hint=detail or None)


@dataclass(frozen=True, slots=True)
class WorkflowFailure:
    """Terminal Failed(step, error) state of a workflow operation."""

    operation: str
    step: str
    error: ReleaseError

    def pretty(self) -> str:
        return f"{self.operation} failed at {self.step}: {self.error.message}"
