"""Error ADTs for generator handles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeVar

from pydantic import ValidationError

from gpurand.errors.backend import BackendError
from gpurand.result import Result


@dataclass(frozen=True)
class HandleClosed:
    """Operation attempted on a generator whose backend handle was released."""

    algorithm: str
    kind: Literal["HandleClosed"] = "HandleClosed"


@dataclass(frozen=True)
class ValueOutOfRange:
    """Seed or offset does not fit in an unsigned 64-bit integer."""

    name: Literal["seed", "offset"]
    value: int
    kind: Literal["ValueOutOfRange"] = "ValueOutOfRange"


@dataclass(frozen=True)
class InvalidEngineConfig:
    """Engine configuration failed pydantic validation."""

    error: ValidationError
    kind: Literal["InvalidEngineConfig"] = "InvalidEngineConfig"


GeneratorError = BackendError | HandleClosed | ValueOutOfRange | InvalidEngineConfig

T = TypeVar("T")
GeneratorResult = Result[T, GeneratorError]

__all__ = [
    "GeneratorError",
    "GeneratorResult",
    "HandleClosed",
    "InvalidEngineConfig",
    "ValueOutOfRange",
]
