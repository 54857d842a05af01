"""Random backends and the process-wide default."""

from __future__ import annotations

from functools import cache

from gpurand.backend.host import HostBackend
from gpurand.backend.protocol import RandBackend


__all__ = ["HostBackend", "RandBackend", "default_backend"]


@cache
def default_backend() -> RandBackend:
    """Return the shared cuRAND backend, importing CuPy on first use."""
    from gpurand.backend.curand import CurandBackend

    return CurandBackend()
