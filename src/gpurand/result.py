"""
Result type for explicit error handling.

Every call that reaches the random backend can fail, and the facade reports
those failures as values instead of exceptions.  ``Result[T, E]`` is the
union ``Success[T] | Failure[E]``; callers pattern-match on it.

Usage:
    >>> match new_philox(seed=42):
    ...     case Success(gen):
    ...         print(gen.seed)
    ...     case Failure(error):
    ...         print(f"Engine unavailable: {error}")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, NoReturn, TypeVar


T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Represents a successful result containing a value of type T."""

    value: T

    def unwrap(self) -> T:
        """Unwrap the success value. Safe to call on Success."""
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Map the success value through function f."""
        return Success(f(self.value))

    def map_error(self, f: Callable[[E], F]) -> Result[T, F]:
        """No-op on Success."""
        result: Result[T, F] = Success(self.value)
        return result

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain an operation that itself returns a Result."""
        return f(self.value)


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Represents a failed result containing an error of type E."""

    error: E

    def unwrap(self) -> NoReturn:
        """
        Unwrap the success value.

        Raises:
            RuntimeError: Always, since Failure has no value.
        """
        raise RuntimeError(f"Called unwrap() on Failure: {self.error}")

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """No-op on Failure."""
        result: Result[U, E] = Failure(self.error)
        return result

    def map_error(self, f: Callable[[E], F]) -> Result[T, F]:
        """Map the error value through function f."""
        return Failure(f(self.error))

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Short-circuits: f is never called on Failure."""
        result: Result[U, E] = Failure(self.error)
        return result


Result = Success[T] | Failure[E]
