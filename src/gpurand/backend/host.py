# src/gpurand/backend/host.py
"""
Host reference backend built on NumPy bit generators.

:class:`HostBackend` honours the same call surface and status conventions
as the device backend but writes into *host* memory, which makes the full
create/configure/generate/destroy lifecycle testable without a GPU.

Streams are NumPy's rather than the device algorithms': each algorithm is
mapped onto a NumPy bit generator (Philox for Philox4x32-10, PCG64 for
XORWOW, PCG64DXSM for MRG32k3a).  What carries over is the contract:

* output is a pure function of (algorithm, seed, offset, call sequence);
* ``set_seed`` and ``set_offset`` both restart the stream at the configured
  offset, and the offset survives a reseed;
* each handle keeps one NumPy generator for its lifetime, so consecutive
  calls continue the stream and one call of ``n + m`` values equals a call
  of ``n`` followed by a call of ``m``;
* the offset is counted in values of the kind requested by the first call
  after a restart: those values are drawn and discarded, so generating
  ``n`` values at offset ``k`` yields elements ``k .. k + n`` of the
  unshifted stream.
"""

from __future__ import annotations

import ctypes
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable

import numpy as np

from gpurand.config import Algorithm
from gpurand.models.buffer import MemorySpace
from gpurand.models.numerical import ResultType
from gpurand.status import RandStatus


__all__ = ["HostBackend"]

_logger = logging.getLogger(__name__)

_BitGeneratorFactory = Callable[[np.random.SeedSequence], np.random.BitGenerator]
_Draw = Callable[[np.random.Generator, int], np.ndarray]

_BIT_GENERATORS: dict[Algorithm, _BitGeneratorFactory] = {
    Algorithm.philox4x32_10: np.random.Philox,
    Algorithm.xorwow: np.random.PCG64,
    Algorithm.mrg32k3a: np.random.PCG64DXSM,
}

_ALGORITHM_TAGS: dict[Algorithm, int] = {
    Algorithm.philox4x32_10: 1,
    Algorithm.xorwow: 2,
    Algorithm.mrg32k3a: 3,
}

# values discarded per draw while skipping to an offset
_SKIP_CHUNK = 1 << 16


@dataclass
class _HostGenerator:
    algorithm: Algorithm
    seed: int
    offset: int = 0
    stream: int = 0
    pending_skip: int = field(default=0, init=False)
    rng: np.random.Generator = field(init=False)

    def __post_init__(self) -> None:
        self.restart()

    def restart(self) -> None:
        """Rebuild the stream from the seed; the offset is applied lazily."""
        entropy = [self.seed & 0xFFFFFFFF, self.seed >> 32, _ALGORITHM_TAGS[self.algorithm]]
        bitgen = _BIT_GENERATORS[self.algorithm](np.random.SeedSequence(entropy))
        self.rng = np.random.Generator(bitgen)
        self.pending_skip = self.offset

    def skip_pending(self, draw: _Draw) -> None:
        while self.pending_skip > 0:
            n = min(self.pending_skip, _SKIP_CHUNK)
            draw(self.rng, n)
            self.pending_skip -= n


def _host_view(ptr: int, count: int, result_type: ResultType) -> np.ndarray:
    pointer = ctypes.cast(ptr, ctypes.POINTER(result_type.to_ctype()))
    return np.ctypeslib.as_array(pointer, shape=(count,))


class HostBackend:
    """NumPy-backed backend writing into host memory."""

    def __init__(self) -> None:
        self._generators: dict[int, _HostGenerator] = {}
        self._next_handle = itertools.count(1)

    @property
    def memory(self) -> MemorySpace:
        return "host"

    @property
    def live_handles(self) -> frozenset[int]:
        return frozenset(self._generators)

    # ---------------- lifecycle --------------------------------------- #

    def create(self, algorithm: Algorithm) -> tuple[int, int]:
        if algorithm not in _BIT_GENERATORS:
            return 0, int(RandStatus.TYPE_ERROR)
        handle = next(self._next_handle)
        self._generators[handle] = _HostGenerator(algorithm=algorithm, seed=algorithm.default_seed)
        return handle, int(RandStatus.SUCCESS)

    def destroy(self, handle: int) -> int:
        if self._generators.pop(handle, None) is None:
            return int(RandStatus.NOT_INITIALIZED)
        return int(RandStatus.SUCCESS)

    # ---------------- configuration ----------------------------------- #

    def set_stream(self, handle: int, stream: int) -> int:
        gen = self._generators.get(handle)
        if gen is None:
            return int(RandStatus.NOT_INITIALIZED)
        gen.stream = stream
        return int(RandStatus.SUCCESS)

    def set_seed(self, handle: int, seed: int) -> int:
        gen = self._generators.get(handle)
        if gen is None:
            return int(RandStatus.NOT_INITIALIZED)
        gen.seed = seed
        gen.restart()
        return int(RandStatus.SUCCESS)

    def set_offset(self, handle: int, offset: int) -> int:
        gen = self._generators.get(handle)
        if gen is None:
            return int(RandStatus.NOT_INITIALIZED)
        gen.offset = offset
        gen.restart()
        return int(RandStatus.SUCCESS)

    # ---------------- generation -------------------------------------- #

    def _fill(
        self,
        handle: int,
        ptr: int,
        count: int,
        result_type: ResultType,
        draw: _Draw,
    ) -> int:
        gen = self._generators.get(handle)
        if gen is None:
            return int(RandStatus.NOT_INITIALIZED)
        if count == 0:
            return int(RandStatus.SUCCESS)
        if ptr == 0 or count < 0:
            return int(RandStatus.OUT_OF_RANGE)

        gen.skip_pending(draw)
        _host_view(ptr, count, result_type)[:] = draw(gen.rng, count)
        _logger.debug("Host generator %d wrote %d %s values", handle, count, result_type.value)
        return int(RandStatus.SUCCESS)

    def generate_uniform_u32(self, handle: int, ptr: int, count: int) -> int:
        return self._fill(
            handle,
            ptr,
            count,
            ResultType.uint32,
            lambda rng, n: rng.integers(0, 1 << 32, size=n, dtype=np.uint32),
        )

    def generate_uniform_f32(self, handle: int, ptr: int, count: int) -> int:
        # 1 - [0, 1) gives the backend's (0, 1] convention
        return self._fill(
            handle,
            ptr,
            count,
            ResultType.float32,
            lambda rng, n: np.float32(1.0) - rng.random(n, dtype=np.float32),
        )

    def generate_uniform_f64(self, handle: int, ptr: int, count: int) -> int:
        return self._fill(
            handle,
            ptr,
            count,
            ResultType.float64,
            lambda rng, n: 1.0 - rng.random(n, dtype=np.float64),
        )

    def generate_normal_f32(
        self, handle: int, ptr: int, count: int, mean: float, stddev: float
    ) -> int:
        return self._fill(
            handle,
            ptr,
            count,
            ResultType.float32,
            lambda rng, n: rng.standard_normal(n, dtype=np.float32) * np.float32(stddev)
            + np.float32(mean),
        )

    def generate_normal_f64(
        self, handle: int, ptr: int, count: int, mean: float, stddev: float
    ) -> int:
        return self._fill(
            handle,
            ptr,
            count,
            ResultType.float64,
            lambda rng, n: rng.standard_normal(n, dtype=np.float64) * stddev + mean,
        )
