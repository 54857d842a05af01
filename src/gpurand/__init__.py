"""
gpurand
=======
Host-side control of device pseudorandom generators.

Build an engine, configure it, and fill caller-owned buffers through a
distribution object::

    import cupy as cp

    from gpurand import NormalDistribution, OutputBuffer, ResultType, new_philox
    from gpurand.result import Failure, Success

    out = cp.empty(1 << 20, dtype=cp.float32)
    match new_philox(seed=12345):
        case Success(gen):
            with gen:
                dist = NormalDistribution(mean=5.0, stddev=2.0)
                result = OutputBuffer.from_array(out).and_then(lambda buf: dist(gen, buf))
        case Failure(error):
            result = Failure(error)

Every fallible call returns a :class:`~gpurand.result.Result`; nothing in the
facade raises on backend failure.
"""

from __future__ import annotations

from gpurand.backend import HostBackend, RandBackend, default_backend
from gpurand.config import Algorithm, EngineConfig
from gpurand.distributions import (
    NormalDistribution,
    NormalParams,
    UniformIntDistribution,
    UniformRealDistribution,
)
from gpurand.engine import Generator, new_mrg32k3a, new_philox, new_xorwow
from gpurand.models import OutputBuffer, ResultType
from gpurand.status import RandStatus, describe_status

__all__ = [
    "Algorithm",
    "EngineConfig",
    "Generator",
    "HostBackend",
    "NormalDistribution",
    "NormalParams",
    "OutputBuffer",
    "RandBackend",
    "RandStatus",
    "ResultType",
    "UniformIntDistribution",
    "UniformRealDistribution",
    "default_backend",
    "describe_status",
    "new_mrg32k3a",
    "new_philox",
    "new_xorwow",
]
