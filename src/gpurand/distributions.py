# src/gpurand/distributions.py
"""
gpurand.distributions
=====================
Distribution objects that shape raw generator output into uniform integers,
uniform reals or normal reals.

Dispatch
--------
Each distribution fixes its element type when it is built and looks up the
one backend entry point for that type in a closed table defined at import
time.  Nothing is decided per call: invoking the distribution only checks
that the output buffer holds exactly that element type (there is no
implicit conversion) and issues the single backend call.

==========================  ===========  ===========================
distribution                element      backend entry point
==========================  ===========  ===========================
UniformIntDistribution      uint32       ``generate_uniform_u32``
UniformRealDistribution     float32      ``generate_uniform_f32``
UniformRealDistribution     float64      ``generate_uniform_f64``
NormalDistribution          float32      ``generate_normal_f32``
NormalDistribution          float64      ``generate_normal_f64``
==========================  ===========  ===========================

Unsupported pairs are rejected before any generator is involved:
``create`` returns ``Failure(UnsupportedResultType)``, direct construction
raises :class:`ValueError`, and the ``Literal`` annotations let a type
checker reject them statically.

Uniform reals follow the backend's ``(0, 1]`` convention.

Invocation
----------
``dist(generator, output, count=None)`` (alias :meth:`apply`) writes
``count`` elements (default: the whole buffer) into *output* using the
generator's current seed/offset/stream state.  The call may return before
the device has finished; synchronise the generator's stream before reading
*output*.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Mapping, overload

from gpurand.backend import RandBackend
from gpurand.engine import BoundHandle, Generator
from gpurand.errors import (
    BackendError,
    BackendOperation,
    DistributionResult,
    InvalidCount,
    MemorySpaceMismatch,
    ResultTypeMismatch,
    UnsupportedResultType,
)
from gpurand.models.buffer import OutputBuffer
from gpurand.models.numerical import ResultType
from gpurand.result import Failure, Result, Success
from gpurand.status import is_success


__all__: list[str] = [
    "NormalDistribution",
    "NormalParams",
    "UniformIntDistribution",
    "UniformRealDistribution",
]

IntType = Literal[ResultType.uint32]
RealType = Literal[ResultType.float32, ResultType.float64]

_PlainEntry = Callable[[RandBackend, int, int, int], int]
_NormalEntry = Callable[[RandBackend, int, int, int, float, float], int]


# --------------------------------------------------------------------------- #
# Dispatch tables                                                             #
# --------------------------------------------------------------------------- #

_UNIFORM_INT_ENTRIES: dict[ResultType, tuple[BackendOperation, _PlainEntry]] = {
    ResultType.uint32: (
        "generate_uniform_u32",
        lambda backend, h, ptr, n: backend.generate_uniform_u32(h, ptr, n),
    ),
}

_UNIFORM_REAL_ENTRIES: dict[ResultType, tuple[BackendOperation, _PlainEntry]] = {
    ResultType.float32: (
        "generate_uniform_f32",
        lambda backend, h, ptr, n: backend.generate_uniform_f32(h, ptr, n),
    ),
    ResultType.float64: (
        "generate_uniform_f64",
        lambda backend, h, ptr, n: backend.generate_uniform_f64(h, ptr, n),
    ),
}

_NORMAL_ENTRIES: dict[ResultType, tuple[BackendOperation, _NormalEntry]] = {
    ResultType.float32: (
        "generate_normal_f32",
        lambda backend, h, ptr, n, mean, stddev: backend.generate_normal_f32(
            h, ptr, n, mean, stddev
        ),
    ),
    ResultType.float64: (
        "generate_normal_f64",
        lambda backend, h, ptr, n, mean, stddev: backend.generate_normal_f64(
            h, ptr, n, mean, stddev
        ),
    ),
}


def _unsupported(distribution: str, result_type: ResultType) -> Failure[UnsupportedResultType]:
    return Failure(UnsupportedResultType(distribution=distribution, requested=result_type.value))


def _require(
    table: Mapping[ResultType, object],
    distribution: str,
    result_type: ResultType,
) -> None:
    if result_type not in table:
        supported = ", ".join(t.value for t in table)
        raise ValueError(
            f"{distribution} supports only {supported} elements, not {result_type.value}"
        )


# --------------------------------------------------------------------------- #
# Shared invocation path                                                      #
# --------------------------------------------------------------------------- #


def _prepare(
    generator: Generator,
    output: OutputBuffer,
    count: int | None,
    result_type: ResultType,
) -> DistributionResult[tuple[BoundHandle, int]]:
    """Validate one request and resolve the handle it will run against."""
    if output.result_type is not result_type:
        return Failure(
            ResultTypeMismatch(expected=result_type.value, actual=output.result_type.value)
        )
    n = output.size if count is None else count
    if not 0 <= n <= output.size:
        return Failure(InvalidCount(count=n, capacity=output.size))

    match generator.resource():
        case Failure(error):
            return Failure(error)
        case Success(bound):
            if bound.backend.memory != output.memory:
                return Failure(
                    MemorySpaceMismatch(expected=bound.backend.memory, actual=output.memory)
                )
            return Success((bound, n))


def _checked(status: int, operation: BackendOperation) -> DistributionResult[None]:
    if not is_success(status):
        return Failure(BackendError(status=status, operation=operation))
    return Success(None)


# --------------------------------------------------------------------------- #
# Uniform integers                                                            #
# --------------------------------------------------------------------------- #


class UniformIntDistribution:
    """Independent values spanning the full unsigned 32-bit range."""

    def __init__(self, result_type: IntType = ResultType.uint32) -> None:
        _require(_UNIFORM_INT_ENTRIES, type(self).__name__, result_type)
        self._result_type: ResultType = result_type
        self._operation, self._entry = _UNIFORM_INT_ENTRIES[result_type]

    @classmethod
    def create(
        cls, result_type: ResultType = ResultType.uint32
    ) -> Result[UniformIntDistribution, UnsupportedResultType]:
        match result_type:
            case ResultType.uint32:
                return Success(cls(result_type))
            case _:
                return _unsupported(cls.__name__, result_type)

    @property
    def result_type(self) -> ResultType:
        return self._result_type

    def reset(self) -> None:
        """No-op; the distribution carries no per-call state."""

    def apply(
        self, generator: Generator, output: OutputBuffer, count: int | None = None
    ) -> DistributionResult[None]:
        match _prepare(generator, output, count, self._result_type):
            case Failure(error):
                return Failure(error)
            case Success((bound, n)):
                status = self._entry(bound.backend, bound.handle, output.ptr, n)
                return _checked(status, self._operation)

    __call__ = apply

    def __repr__(self) -> str:
        return f"UniformIntDistribution({self._result_type.value})"


# --------------------------------------------------------------------------- #
# Uniform reals                                                               #
# --------------------------------------------------------------------------- #


class UniformRealDistribution:
    """Independent values in the canonical ``(0, 1]`` interval."""

    def __init__(self, result_type: RealType = ResultType.float32) -> None:
        _require(_UNIFORM_REAL_ENTRIES, type(self).__name__, result_type)
        self._result_type: ResultType = result_type
        self._operation, self._entry = _UNIFORM_REAL_ENTRIES[result_type]

    @classmethod
    def create(
        cls, result_type: ResultType = ResultType.float32
    ) -> Result[UniformRealDistribution, UnsupportedResultType]:
        match result_type:
            case ResultType.float32 | ResultType.float64:
                return Success(cls(result_type))
            case _:
                return _unsupported(cls.__name__, result_type)

    @property
    def result_type(self) -> ResultType:
        return self._result_type

    def reset(self) -> None:
        """No-op; the distribution carries no per-call state."""

    def apply(
        self, generator: Generator, output: OutputBuffer, count: int | None = None
    ) -> DistributionResult[None]:
        match _prepare(generator, output, count, self._result_type):
            case Failure(error):
                return Failure(error)
            case Success((bound, n)):
                status = self._entry(bound.backend, bound.handle, output.ptr, n)
                return _checked(status, self._operation)

    __call__ = apply

    def __repr__(self) -> str:
        return f"UniformRealDistribution({self._result_type.value})"


# --------------------------------------------------------------------------- #
# Normal reals                                                                #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class NormalParams:
    """Mean and standard deviation of a normal distribution.

    Two parameter sets are equal only if both fields match exactly.
    """

    mean: float = 0.0
    stddev: float = 1.0


def _at_precision(params: NormalParams, result_type: ResultType) -> NormalParams:
    scalar = result_type.to_numpy().type
    return NormalParams(mean=float(scalar(params.mean)), stddev=float(scalar(params.stddev)))


class NormalDistribution:
    """Gaussian values with configurable mean and standard deviation.

    The parameters persist across calls until replaced with
    :meth:`param`.  They are stored at the precision of the element type, so
    a float32 distribution holds and compares float32-rounded values.
    """

    def __init__(
        self,
        mean: float = 0.0,
        stddev: float = 1.0,
        result_type: RealType = ResultType.float32,
    ) -> None:
        _require(_NORMAL_ENTRIES, type(self).__name__, result_type)
        self._result_type: ResultType = result_type
        self._operation, self._entry = _NORMAL_ENTRIES[result_type]
        self._params = _at_precision(NormalParams(mean=mean, stddev=stddev), result_type)

    @classmethod
    def create(
        cls,
        mean: float = 0.0,
        stddev: float = 1.0,
        result_type: ResultType = ResultType.float32,
    ) -> Result[NormalDistribution, UnsupportedResultType]:
        match result_type:
            case ResultType.float32 | ResultType.float64:
                return Success(cls(mean, stddev, result_type))
            case _:
                return _unsupported(cls.__name__, result_type)

    @property
    def result_type(self) -> ResultType:
        return self._result_type

    @property
    def mean(self) -> float:
        return self._params.mean

    @property
    def stddev(self) -> float:
        return self._params.stddev

    @overload
    def param(self) -> NormalParams: ...

    @overload
    def param(self, params: NormalParams) -> None: ...

    def param(self, params: NormalParams | None = None) -> NormalParams | None:
        """Return the current parameters, or replace them with *params*."""
        if params is None:
            return self._params
        self._params = _at_precision(params, self._result_type)
        return None

    def reset(self) -> None:
        """No-op; parameters are kept."""

    def apply(
        self, generator: Generator, output: OutputBuffer, count: int | None = None
    ) -> DistributionResult[None]:
        match _prepare(generator, output, count, self._result_type):
            case Failure(error):
                return Failure(error)
            case Success((bound, n)):
                status = self._entry(
                    bound.backend,
                    bound.handle,
                    output.ptr,
                    n,
                    self._params.mean,
                    self._params.stddev,
                )
                return _checked(status, self._operation)

    __call__ = apply

    def __repr__(self) -> str:
        return (
            f"NormalDistribution({self._result_type.value}, "
            f"mean={self._params.mean}, stddev={self._params.stddev})"
        )
