"""Process exit codes.

A workflow either completes or stops at its first failing step; the CLI
does not distinguish between failure kinds in the exit status.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: the operation completed
    - 1: any propagated error (bad input, failed step, invalid config)
    """

    OK = 0
    FAILURE = 1

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
