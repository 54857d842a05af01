"""
Output buffer descriptors.

An :class:`OutputBuffer` names a caller-owned, contiguous region of memory by
address, capacity and element type.  Generation writes into it and nothing
else: the descriptor never allocates, frees or keeps the underlying array
alive, so the caller must hold on to the array for as long as the write may
still be in flight on the device.

Arrays are described through the standard array-interface protocols, which
keeps this module independent of any particular GPU library:

* ``__cuda_array_interface__`` (CuPy, Numba, PyTorch) -> ``memory="device"``
* ``__array_interface__`` (NumPy) -> ``memory="host"``
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping

import numpy as np

from gpurand.errors import UnsupportedBuffer
from gpurand.models.numerical import ResultType
from gpurand.result import Failure, Result, Success


__all__ = ["MemorySpace", "OutputBuffer"]

MemorySpace = Literal["host", "device"]


@dataclass(frozen=True)
class OutputBuffer:
    """Address, capacity (in elements) and element type of a write target."""

    ptr: int
    size: int
    result_type: ResultType
    memory: MemorySpace = "device"

    @classmethod
    def from_array(cls, array: object) -> Result[OutputBuffer, UnsupportedBuffer]:
        """Describe a writable, C-contiguous NumPy or device array."""
        device_iface = getattr(array, "__cuda_array_interface__", None)
        if isinstance(device_iface, Mapping):
            return _from_interface(device_iface, "device")
        host_iface = getattr(array, "__array_interface__", None)
        if isinstance(host_iface, Mapping):
            return _from_interface(host_iface, "host")
        reason = f"{type(array).__name__} exposes no array interface"
        return Failure(UnsupportedBuffer(reason=reason))


def _from_interface(
    iface: Mapping[str, object], memory: MemorySpace
) -> Result[OutputBuffer, UnsupportedBuffer]:
    data = iface.get("data")
    shape = iface.get("shape")
    typestr = iface.get("typestr")
    if not (
        isinstance(data, tuple)
        and isinstance(shape, tuple)
        and all(isinstance(dim, int) for dim in shape)
        and isinstance(typestr, str)
    ):
        return Failure(UnsupportedBuffer(reason="malformed array interface"))

    ptr, readonly = data
    if readonly:
        return Failure(UnsupportedBuffer(reason="array is read-only"))

    dtype = np.dtype(typestr)
    if not ResultType.supports(dtype):
        return Failure(UnsupportedBuffer(reason=f"unsupported element dtype {dtype}"))
    result_type = ResultType.from_numpy(dtype)

    dims: tuple[int, ...] = shape
    size = int(np.prod(dims, dtype=np.int64))
    strides = iface.get("strides")
    contiguous = strides is None or _is_c_contiguous(dims, strides, result_type.itemsize)
    if size > 1 and not contiguous:
        return Failure(UnsupportedBuffer(reason="array is not C-contiguous"))

    return Success(
        OutputBuffer(ptr=int(ptr or 0), size=size, result_type=result_type, memory=memory)
    )


def _is_c_contiguous(shape: tuple[int, ...], strides: object, itemsize: int) -> bool:
    if not isinstance(strides, tuple) or len(strides) != len(shape):
        return False
    expected = itemsize
    for dim, stride in reversed(list(zip(shape, strides, strict=True))):
        if dim != 1 and stride != expected:
            return False
        expected *= dim
    return True
