"""
`gpurand.models.numerical`
--------------------------
The closed set of element types the random backend can write:
``uint32`` (raw bits), ``float32`` and ``float64``.

:class:`ResultType` converts to and from NumPy dtypes through constant-time
dict look-ups.  CuPy dtypes *are* NumPy dtypes, so the same tables serve
device arrays.  Both the scalar class (``np.float32``) and the dtype object
(``np.dtype(np.float32)``) are accepted as keys; they are distinct objects and
callers routinely pass either.
"""

from __future__ import annotations

import ctypes
from enum import Enum
from typing import TypeAlias, Union

import numpy as np


__all__ = ["ResultType"]

# --------------------------------------------------------------------------- #
# Typing aliases
# --------------------------------------------------------------------------- #
_NPDTypeRet: TypeAlias = Union[
    np.dtype[np.uint32],
    np.dtype[np.float32],
    np.dtype[np.float64],
]
_NPDTypeLike: TypeAlias = Union[
    type[np.uint32],
    type[np.float32],
    type[np.float64],
    np.dtype[np.uint32],
    np.dtype[np.float32],
    np.dtype[np.float64],
]
_CType: TypeAlias = type[ctypes.c_uint32] | type[ctypes.c_float] | type[ctypes.c_double]

# --------------------------------------------------------------------------- #
# Mapping tables
# --------------------------------------------------------------------------- #
_RESULT_TYPE_NAMES: tuple[str, ...] = ("uint32", "float32", "float64")

_RESULT_TYPE_STR_TO_NP: dict[str, _NPDTypeRet] = {
    name: np.dtype(getattr(np, name)) for name in _RESULT_TYPE_NAMES
}

_NP_TO_RESULT_TYPE_STR: dict[object, str] = {
    obj: name
    for name in _RESULT_TYPE_NAMES
    for obj in (getattr(np, name), np.dtype(getattr(np, name)))
}

_RESULT_TYPE_STR_TO_CTYPE: dict[str, _CType] = {
    "uint32": ctypes.c_uint32,
    "float32": ctypes.c_float,
    "float64": ctypes.c_double,
}


class ResultType(str, Enum):
    """Element type of a generation request."""

    uint32 = "uint32"
    float32 = "float32"
    float64 = "float64"

    def to_numpy(self) -> _NPDTypeRet:
        """Return the corresponding ``numpy.dtype``."""
        return _RESULT_TYPE_STR_TO_NP[self.value]

    def to_ctype(self) -> _CType:
        """Return the matching ``ctypes`` scalar, used for raw host writes."""
        return _RESULT_TYPE_STR_TO_CTYPE[self.value]

    @property
    def itemsize(self) -> int:
        return int(self.to_numpy().itemsize)

    @classmethod
    def from_numpy(cls, dtype: _NPDTypeLike | np.dtype[np.generic]) -> ResultType:
        """Map a NumPy/CuPy *dtype* or scalar class back to :class:`ResultType`."""
        try:
            return cls(_NP_TO_RESULT_TYPE_STR[dtype])
        except KeyError as exc:
            raise ValueError(f"Unsupported element dtype: {dtype!r}") from exc

    @classmethod
    def supports(cls, dtype: object) -> bool:
        return dtype in _NP_TO_RESULT_TYPE_STR
