"""Error ADT wrapping a non-success backend status."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from gpurand.status import describe_status


BackendOperation = Literal[
    "create",
    "destroy",
    "set_stream",
    "set_seed",
    "set_offset",
    "generate_uniform_u32",
    "generate_uniform_f32",
    "generate_uniform_f64",
    "generate_normal_f32",
    "generate_normal_f64",
]


@dataclass(frozen=True)
class BackendError:
    """A backend call returned something other than success.

    Attributes:
        status: Raw status code exactly as the backend returned it.
        operation: Backend entry point that produced the status.
    """

    status: int
    operation: BackendOperation
    kind: Literal["BackendError"] = "BackendError"

    def error_code(self) -> int:
        return self.status

    @property
    def message(self) -> str:
        return describe_status(self.status)

    def __str__(self) -> str:
        return f"{self.operation}: {self.message}"


__all__ = ["BackendError", "BackendOperation"]
