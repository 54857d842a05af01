"""
`gpurand.config`
================
Algorithm identifiers, their default seeds and the serialisable engine
configuration.

An :class:`EngineConfig` is everything needed to rebuild a generator at the
same starting point: the algorithm, the seed (``None`` meaning the
algorithm's default) and the stream offset.  Seeds and offsets are unsigned
64-bit integers.

Example::

    match EngineConfig.create(algorithm=Algorithm.xorwow, seed=7, offset=1 << 20):
        case Success(cfg):
            gen = Generator.create(cfg, backend=HostBackend())
        case Failure(error):
            print(error)
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gpurand.result import Result
from gpurand.validation import validate_model


__all__: list[str] = [
    "U64_MAX",
    "Algorithm",
    "EngineConfig",
    "PHILOX4X32_DEFAULT_SEED",
    "XORWOW_DEFAULT_SEED",
    "MRG32K3A_DEFAULT_SEED",
]

# --------------------------------------------------------------------------- #
# Constants                                                                   #
# --------------------------------------------------------------------------- #

U64_MAX: int = (1 << 64) - 1

PHILOX4X32_DEFAULT_SEED: int = 0xDEADBEEFDEADBEEF
XORWOW_DEFAULT_SEED: int = 0xAAAAAAAAAAAAAAAA
MRG32K3A_DEFAULT_SEED: int = 12345


class Algorithm(str, Enum):
    """Pseudorandom algorithms the facade can drive."""

    philox4x32_10 = "philox4x32_10"
    xorwow = "xorwow"
    mrg32k3a = "mrg32k3a"

    @property
    def default_seed(self) -> int:
        return _DEFAULT_SEEDS[self]


_DEFAULT_SEEDS: dict[Algorithm, int] = {
    Algorithm.philox4x32_10: PHILOX4X32_DEFAULT_SEED,
    Algorithm.xorwow: XORWOW_DEFAULT_SEED,
    Algorithm.mrg32k3a: MRG32K3A_DEFAULT_SEED,
}

U64 = Annotated[int, Field(ge=0, le=U64_MAX)]


class EngineConfig(BaseModel):
    """Immutable description of a generator's starting point.

    Attributes
    ----------
    algorithm
        Backend algorithm to create.
    seed
        Initial-state selector; ``None`` selects ``algorithm.default_seed``.
    offset
        Number of stream positions skipped before the first value.  Zero
        means no offset call is issued at all.
    """

    algorithm: Algorithm
    seed: U64 | None = None
    offset: U64 = 0

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def resolved_seed(self) -> int:
        return self.algorithm.default_seed if self.seed is None else self.seed

    @classmethod
    def create(
        cls, *, algorithm: Algorithm, seed: int | None = None, offset: int = 0
    ) -> Result[EngineConfig, ValidationError]:
        return validate_model(cls, algorithm=algorithm, seed=seed, offset=offset)
