# tests/conftest.py
"""Global PyTest fixtures for the test-suite.

Most tests drive the facade through :class:`RecordingBackend`, a host
backend that needs no GPU.  Tests marked ``gpu`` run against cuRAND and are
skipped when CuPy or a CUDA device is missing.
"""

from __future__ import annotations

import gc
from typing import Generator

import pytest

from gpurand import HostBackend
from tests.helpers import RecordingBackend


def _cuda_available() -> bool:
    try:
        import cupy as cp
    except ImportError:
        return False
    try:
        return int(cp.cuda.runtime.getDeviceCount()) > 0
    except RuntimeError:
        return False


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip ``gpu`` tests when no CUDA device is usable."""
    if _cuda_available():
        return
    skip_gpu = pytest.mark.skip(reason="CUDA device required")
    for item in items:
        if "gpu" in item.keywords:
            item.add_marker(skip_gpu)


@pytest.fixture
def backend() -> Generator[RecordingBackend, None, None]:
    """Recording host backend; asserts every handle was released."""
    recording = RecordingBackend()
    yield recording
    gc.collect()
    assert recording.live_handles == frozenset(), "generator handle leaked"


@pytest.fixture
def host_backend() -> HostBackend:
    return HostBackend()
