# tests/helpers/result_utils.py
"""Result type unwrapping utilities for gpurand tests."""

from __future__ import annotations

from typing import TypeVar

from gpurand.result import Failure, Result, Success

T = TypeVar("T")
E = TypeVar("E")


def expect_success(result: Result[T, E]) -> T:
    """Unwrap Success or fail the test with the error.

    Example:
        >>> gen = expect_success(new_philox(seed=1, backend=HostBackend()))
    """
    match result:
        case Success(value):
            return value
        case Failure(error):
            raise AssertionError(f"Unexpected failure: {error}")


def expect_failure(result: Result[T, E]) -> E:
    """Unwrap Failure or fail the test.

    Example:
        >>> error = expect_failure(gen.set_seed(-1))
        >>> assert error.kind == "ValueOutOfRange"
    """
    match result:
        case Failure(error):
            return error
        case Success(value):
            raise AssertionError(f"Expected failure but got success: {value}")
