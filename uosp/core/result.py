"""Result type for explicit error handling.

Every step of a packaging workflow either succeeds with a value or fails
with a typed error. Steps return `Ok(value)` or `Err(error)` instead of
raising, so the orchestrator can stop at the first failure and report
exactly which step broke.

Usage:
    def read_epoch(raw: str) -> Result[int, str]:
        head, sep, _ = raw.partition(":")
        if not sep or not head.isdigit():
            return Err(f"no epoch in {raw!r}")
        return Ok(int(head))

    match read_epoch("2:19.0.1-0ubuntu1"):
        case Ok(epoch):
            print(f"epoch {epoch}")
        case Err(error):
            print(error)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeGuard, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the carried value."""
        return Ok(f(self.value))

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        """No error to transform; returns self."""
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying an error."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> None:
        """Raises ValueError: an Err has no value.

        Only meant for tests and for call sites that already checked
        `is_ok()`.
        """
        raise ValueError(f"called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, f: Callable[[T], U]) -> Err[E]:
        """No value to transform; returns self."""
        return self

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Transform the carried error (e.g. to attach the failing step)."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]


def is_ok(result: Result[T, E]) -> TypeGuard[Ok[T]]:
    """Narrow a Result to Ok for type checkers."""
    return isinstance(result, Ok)


def is_err(result: Result[T, E]) -> TypeGuard[Err[E]]:
    """Narrow a Result to Err for type checkers."""
    return isinstance(result, Err)
