"""Error ADTs for distribution objects and output buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeVar

from gpurand.errors.backend import BackendError
from gpurand.errors.engine import HandleClosed
from gpurand.result import Result


@dataclass(frozen=True)
class UnsupportedResultType:
    """The distribution has no backend entry point for this element type."""

    distribution: str
    requested: str
    kind: Literal["UnsupportedResultType"] = "UnsupportedResultType"


@dataclass(frozen=True)
class ResultTypeMismatch:
    """Output buffer element type differs from the distribution's result type."""

    expected: str
    actual: str
    kind: Literal["ResultTypeMismatch"] = "ResultTypeMismatch"


@dataclass(frozen=True)
class InvalidCount:
    """Requested element count is negative or exceeds the buffer size."""

    count: int
    capacity: int
    kind: Literal["InvalidCount"] = "InvalidCount"


@dataclass(frozen=True)
class UnsupportedBuffer:
    """Array cannot be described as a contiguous output region."""

    reason: str
    kind: Literal["UnsupportedBuffer"] = "UnsupportedBuffer"


@dataclass(frozen=True)
class MemorySpaceMismatch:
    """Buffer lives in a memory space the generator's backend cannot write."""

    expected: Literal["host", "device"]
    actual: Literal["host", "device"]
    kind: Literal["MemorySpaceMismatch"] = "MemorySpaceMismatch"


DistributionError = (
    BackendError | HandleClosed | ResultTypeMismatch | InvalidCount | MemorySpaceMismatch
)

T = TypeVar("T")
DistributionResult = Result[T, DistributionError]

__all__ = [
    "DistributionError",
    "DistributionResult",
    "InvalidCount",
    "MemorySpaceMismatch",
    "ResultTypeMismatch",
    "UnsupportedBuffer",
    "UnsupportedResultType",
]
