# src/gpurand/backend/protocol.py
"""
Call surface of a random backend.

Every entry point returns a raw integer status (``0`` is success) and never
raises for a backend-side failure; :mod:`gpurand.engine` and
:mod:`gpurand.distributions` turn non-success codes into
:class:`gpurand.errors.BackendError` values.

Handles and pointers are plain integers: a handle is whatever the backend
returned from :meth:`RandBackend.create`, and ``ptr`` is the address of the
first element of a buffer living in :attr:`RandBackend.memory`.
"""

from __future__ import annotations

from typing import Protocol

from gpurand.config import Algorithm
from gpurand.models.buffer import MemorySpace


class RandBackend(Protocol):
    """Status-returning PRNG backend."""

    @property
    def memory(self) -> MemorySpace:
        """Memory space that generation entry points write into."""
        ...

    def create(self, algorithm: Algorithm) -> tuple[int, int]:
        """Create a generator; returns ``(handle, status)``."""
        ...

    def destroy(self, handle: int) -> int: ...

    def set_stream(self, handle: int, stream: int) -> int: ...

    def set_seed(self, handle: int, seed: int) -> int: ...

    def set_offset(self, handle: int, offset: int) -> int: ...

    def generate_uniform_u32(self, handle: int, ptr: int, count: int) -> int: ...

    def generate_uniform_f32(self, handle: int, ptr: int, count: int) -> int: ...

    def generate_uniform_f64(self, handle: int, ptr: int, count: int) -> int: ...

    def generate_normal_f32(
        self, handle: int, ptr: int, count: int, mean: float, stddev: float
    ) -> int: ...

    def generate_normal_f64(
        self, handle: int, ptr: int, count: int, mean: float, stddev: float
    ) -> int: ...


__all__ = ["RandBackend"]
