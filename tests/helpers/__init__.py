"""Shared test utilities for the gpurand test suite.

Usage:
    >>> from tests.helpers import RecordingBackend, expect_success
    >>> backend = RecordingBackend()
    >>> gen = expect_success(new_philox(seed=DEFAULT_SEED, backend=backend))
    >>> assert backend.names() == ["create", "set_seed"]
"""

from __future__ import annotations

from tests.helpers.backends import Call, RecordingBackend
from tests.helpers.constants import DEFAULT_COUNT, DEFAULT_SEED, LARGE_COUNT, MOMENT_TOL
from tests.helpers.result_utils import E, T, expect_failure, expect_success

__all__ = [
    # Result unwrapping
    "expect_success",
    "expect_failure",
    "T",
    "E",
    # Backends
    "Call",
    "RecordingBackend",
    # Constants
    "DEFAULT_COUNT",
    "DEFAULT_SEED",
    "LARGE_COUNT",
    "MOMENT_TOL",
]
