# src/gpurand/backend/curand.py
"""
cuRAND backend over CuPy's low-level bindings.

``cupy.cuda.curand`` raises :class:`CURANDError` for every non-success
status.  This adapter catches it at the boundary and hands the numeric
status back, which is the only translation it performs; argument order,
units and asynchrony are exactly cuRAND's.  Generation is enqueued on the
stream bound with :meth:`CurandBackend.set_stream` and returns before the
device finishes.
"""

from __future__ import annotations

from typing import Callable

from cupy.cuda import curand

from gpurand.config import Algorithm
from gpurand.models.buffer import MemorySpace
from gpurand.status import RandStatus


__all__ = ["CurandBackend"]

_RNG_TYPES: dict[Algorithm, int] = {
    Algorithm.philox4x32_10: curand.CURAND_RNG_PSEUDO_PHILOX4_32_10,
    Algorithm.xorwow: curand.CURAND_RNG_PSEUDO_XORWOW,
    Algorithm.mrg32k3a: curand.CURAND_RNG_PSEUDO_MRG32K3A,
}


def _status_of(call: Callable[[], object]) -> int:
    try:
        call()
    except curand.CURANDError as exc:
        return int(exc.status)
    return int(RandStatus.SUCCESS)


class CurandBackend:
    """Device backend writing into CUDA device memory."""

    @property
    def memory(self) -> MemorySpace:
        return "device"

    def create(self, algorithm: Algorithm) -> tuple[int, int]:
        try:
            return int(curand.createGenerator(_RNG_TYPES[algorithm])), int(RandStatus.SUCCESS)
        except curand.CURANDError as exc:
            return 0, int(exc.status)

    def destroy(self, handle: int) -> int:
        return _status_of(lambda: curand.destroyGenerator(handle))

    def set_stream(self, handle: int, stream: int) -> int:
        return _status_of(lambda: curand.setStream(handle, stream))

    def set_seed(self, handle: int, seed: int) -> int:
        return _status_of(lambda: curand.setPseudoRandomGeneratorSeed(handle, seed))

    def set_offset(self, handle: int, offset: int) -> int:
        return _status_of(lambda: curand.setGeneratorOffset(handle, offset))

    def generate_uniform_u32(self, handle: int, ptr: int, count: int) -> int:
        return _status_of(lambda: curand.generate(handle, ptr, count))

    def generate_uniform_f32(self, handle: int, ptr: int, count: int) -> int:
        return _status_of(lambda: curand.generateUniform(handle, ptr, count))

    def generate_uniform_f64(self, handle: int, ptr: int, count: int) -> int:
        return _status_of(lambda: curand.generateUniformDouble(handle, ptr, count))

    def generate_normal_f32(
        self, handle: int, ptr: int, count: int, mean: float, stddev: float
    ) -> int:
        return _status_of(lambda: curand.generateNormal(handle, ptr, count, mean, stddev))

    def generate_normal_f64(
        self, handle: int, ptr: int, count: int, mean: float, stddev: float
    ) -> int:
        return _status_of(lambda: curand.generateNormalDouble(handle, ptr, count, mean, stddev))
