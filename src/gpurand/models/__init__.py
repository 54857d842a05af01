"""Value models shared across gpurand."""

from __future__ import annotations

from gpurand.models.buffer import MemorySpace, OutputBuffer
from gpurand.models.numerical import ResultType

__all__ = ["MemorySpace", "OutputBuffer", "ResultType"]
