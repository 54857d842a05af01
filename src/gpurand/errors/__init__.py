"""gpurand error ADTs."""

from gpurand.errors.backend import BackendError, BackendOperation
from gpurand.errors.engine import (
    GeneratorError,
    GeneratorResult,
    HandleClosed,
    InvalidEngineConfig,
    ValueOutOfRange,
)
from gpurand.errors.distributions import (
    DistributionError,
    DistributionResult,
    InvalidCount,
    MemorySpaceMismatch,
    ResultTypeMismatch,
    UnsupportedBuffer,
    UnsupportedResultType,
)

__all__ = [
    "BackendError",
    "BackendOperation",
    "GeneratorError",
    "GeneratorResult",
    "HandleClosed",
    "InvalidEngineConfig",
    "ValueOutOfRange",
    "DistributionError",
    "DistributionResult",
    "InvalidCount",
    "MemorySpaceMismatch",
    "ResultTypeMismatch",
    "UnsupportedBuffer",
    "UnsupportedResultType",
]
