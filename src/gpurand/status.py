"""
`gpurand.status`
----------------
Status codes returned by the random backend and their human-readable
descriptions.

cuRAND and rocRAND share one numbering for generator status codes, so a
single table serves both.  Codes the table does not know are still valid
backend answers; they are described with a generic fallback that keeps the
numeric value visible.
"""

from __future__ import annotations

from enum import IntEnum


__all__ = ["RandStatus", "describe_status", "is_success"]


class RandStatus(IntEnum):
    """Generator status codes shared by cuRAND and rocRAND."""

    SUCCESS = 0
    VERSION_MISMATCH = 100
    NOT_INITIALIZED = 101
    ALLOCATION_FAILED = 102
    TYPE_ERROR = 103
    OUT_OF_RANGE = 104
    LENGTH_NOT_MULTIPLE = 105
    DOUBLE_PRECISION_REQUIRED = 106
    LAUNCH_FAILURE = 201
    PREEXISTING_FAILURE = 202
    INITIALIZATION_FAILED = 203
    ARCH_MISMATCH = 204
    INTERNAL_ERROR = 999


_STATUS_MESSAGES: dict[int, str] = {
    RandStatus.SUCCESS: "No errors",
    RandStatus.VERSION_MISMATCH: "Header file and linked library version do not match",
    RandStatus.NOT_INITIALIZED: "Generator was not created or was already destroyed",
    RandStatus.ALLOCATION_FAILED: "Memory allocation failed during execution",
    RandStatus.TYPE_ERROR: "Generator type is wrong",
    RandStatus.OUT_OF_RANGE: "Argument out of range",
    RandStatus.LENGTH_NOT_MULTIPLE: (
        "Requested size is not a multiple of the quasirandom dimension, "
        "or is not even for a pseudorandom normal generator"
    ),
    RandStatus.DOUBLE_PRECISION_REQUIRED: "Device does not support double precision",
    RandStatus.LAUNCH_FAILURE: "Kernel launch failure",
    RandStatus.PREEXISTING_FAILURE: "Preexisting failure on library entry",
    RandStatus.INITIALIZATION_FAILED: "Initialization of the device runtime failed",
    RandStatus.ARCH_MISMATCH: (
        "Architecture mismatch, device does not support the requested feature"
    ),
    RandStatus.INTERNAL_ERROR: "Internal library error",
}


def is_success(code: int) -> bool:
    return code == RandStatus.SUCCESS


def describe_status(code: int) -> str:
    """Return the description for *code*, or a generic one naming the code."""
    message = _STATUS_MESSAGES.get(code)
    return message if message is not None else f"Unknown random backend error ({code})"
