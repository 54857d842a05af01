# tests/test_curand_backend.py
"""
tests.test_curand_backend
=========================
End-to-end checks against cuRAND through CuPy.  Every test is marked
``gpu`` and skipped when no CUDA device is available.
"""

from __future__ import annotations

import pytest

from gpurand import (
    NormalDistribution,
    OutputBuffer,
    ResultType,
    UniformIntDistribution,
    UniformRealDistribution,
)
from gpurand.engine import new_mrg32k3a, new_philox, new_xorwow
from tests.helpers import DEFAULT_COUNT, DEFAULT_SEED, LARGE_COUNT, MOMENT_TOL, expect_success

pytestmark = pytest.mark.gpu


def test_philox_same_seed_same_bytes() -> None:
    import cupy as cp

    from gpurand.backend.curand import CurandBackend

    backend = CurandBackend()
    outputs = []
    for _ in range(2):
        out = cp.empty(DEFAULT_COUNT, dtype=cp.float32)
        with expect_success(new_philox(DEFAULT_SEED, 0, backend=backend)) as gen:
            buf = expect_success(OutputBuffer.from_array(out))
            expect_success(UniformRealDistribution(ResultType.float32)(gen, buf))
        cp.cuda.Device().synchronize()
        outputs.append(cp.asnumpy(out))

    assert outputs[0].tobytes() == outputs[1].tobytes()
    assert float(outputs[0].min()) > 0.0
    assert float(outputs[0].max()) <= 1.0


def test_normal_on_bound_stream() -> None:
    import cupy as cp

    from gpurand.backend.curand import CurandBackend

    stream = cp.cuda.Stream(non_blocking=True)
    out = cp.empty(LARGE_COUNT, dtype=cp.float64)
    with expect_success(new_xorwow(DEFAULT_SEED, backend=CurandBackend())) as gen:
        expect_success(gen.set_stream(stream))
        buf = expect_success(OutputBuffer.from_array(out))
        expect_success(NormalDistribution(5.0, 2.0, ResultType.float64)(gen, buf))
        stream.synchronize()

    assert abs(float(out.mean()) - 5.0) < 5.0 * MOMENT_TOL
    assert abs(float(out.std()) - 2.0) < 2.0 * MOMENT_TOL


def test_uniform_int_with_offset() -> None:
    import cupy as cp

    from gpurand.backend.curand import CurandBackend

    out = cp.empty(DEFAULT_COUNT, dtype=cp.uint32)
    with expect_success(new_mrg32k3a(DEFAULT_SEED, 1 << 10, backend=CurandBackend())) as gen:
        buf = expect_success(OutputBuffer.from_array(out))
        expect_success(UniformIntDistribution()(gen, buf))
    cp.cuda.Device().synchronize()
    assert int(cp.count_nonzero(out)) > DEFAULT_COUNT // 2
