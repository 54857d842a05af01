# src/gpurand/engine.py
"""
gpurand.engine
==============
Generator handles: one backend PRNG resource plus its seed, offset and
stream configuration.

Lifecycle
---------
A :class:`Generator` is *live* from the moment the backend hands out a
handle until :meth:`Generator.close` runs, after which it is *closed* for
good.  Closing releases the backend resource exactly once.  The handle is
marked closed before the release call, so a release that reports failure
still leaves the generator closed; the failure is logged and returned, never
raised.  Garbage collection and ``with`` blocks close live handles through
the same path.

Every configuration call maps onto exactly one backend call and updates the
locally recorded state only if the backend reports success.

Variants
--------
The three supported algorithms differ only in the backend algorithm tag and
their default seed, so they share one class and are built through named
constructors::

    match new_philox(seed=12345, backend=HostBackend()):
        case Success(gen):
            with gen:
                ...
        case Failure(error):
            print(error)

A generator is owned by one caller and driven from one thread at a time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Callable, Protocol

from gpurand.backend import RandBackend, default_backend
from gpurand.config import U64_MAX, Algorithm, EngineConfig
from gpurand.errors import (
    BackendError,
    BackendOperation,
    GeneratorResult,
    HandleClosed,
    InvalidEngineConfig,
    ValueOutOfRange,
)
from gpurand.result import Failure, Result, Success
from gpurand.status import is_success


__all__: list[str] = [
    "BoundHandle",
    "Generator",
    "StreamLike",
    "new_mrg32k3a",
    "new_philox",
    "new_xorwow",
]

_logger = logging.getLogger(__name__)


class _HasPtr(Protocol):
    @property
    def ptr(self) -> int: ...


StreamLike = int | _HasPtr | None
"""A raw stream address, a stream object exposing ``ptr`` (e.g.
``cupy.cuda.Stream``), or ``None`` for the backend's default stream."""


def _stream_address(stream: StreamLike) -> int:
    if stream is None:
        return 0
    if isinstance(stream, int):
        return stream
    return int(stream.ptr)


@dataclass(frozen=True)
class BoundHandle:
    """The backend and raw handle a distribution needs to issue one call."""

    backend: RandBackend
    handle: int


class Generator:
    """Owner of one backend PRNG resource."""

    # ------------------------------------------------------------------ #
    # Construction                                                       #
    # ------------------------------------------------------------------ #

    def __init__(self, *, backend: RandBackend, handle: int, algorithm: Algorithm) -> None:
        self._backend = backend
        self._handle = handle
        self._algorithm = algorithm
        self._seed: int = algorithm.default_seed
        self._offset: int = 0
        self._stream: StreamLike = None
        self._closed = False

    @classmethod
    def create(
        cls, config: EngineConfig, backend: RandBackend | None = None
    ) -> GeneratorResult[Generator]:
        """Acquire a backend resource and apply *config* to it.

        A failed ``create`` leaves nothing to release.  If seeding or
        offsetting fails afterwards, the fresh handle is released before the
        configuration failure is returned.
        """
        active = default_backend() if backend is None else backend
        handle, status = active.create(config.algorithm)
        if not is_success(status):
            return Failure(BackendError(status=status, operation="create"))

        gen = cls(backend=active, handle=handle, algorithm=config.algorithm)
        _logger.debug("Created %s generator handle %d", config.algorithm.value, handle)

        configured = gen._configure(config)
        if isinstance(configured, Failure):
            gen.close()
        return configured.map(lambda _: gen)

    def _configure(self, config: EngineConfig) -> GeneratorResult[None]:
        seeded = self.set_seed(config.resolved_seed)
        if config.offset == 0:
            return seeded
        return seeded.and_then(lambda _: self.set_offset(config.offset))

    # ------------------------------------------------------------------ #
    # Helpers                                                            #
    # ------------------------------------------------------------------ #

    def _invoke(
        self, operation: BackendOperation, call: Callable[[RandBackend, int], int]
    ) -> GeneratorResult[None]:
        if self._closed:
            return Failure(HandleClosed(algorithm=self._algorithm.value))
        status = call(self._backend, self._handle)
        if not is_success(status):
            return Failure(BackendError(status=status, operation=operation))
        return Success(None)

    # ------------------------------------------------------------------ #
    # Configuration                                                      #
    # ------------------------------------------------------------------ #

    def set_seed(self, value: int) -> GeneratorResult[None]:
        """Select the initial state of the stream."""
        if not 0 <= value <= U64_MAX:
            return Failure(ValueOutOfRange(name="seed", value=value))
        result = self._invoke("set_seed", lambda backend, h: backend.set_seed(h, value))
        if isinstance(result, Success):
            self._seed = value
        return result

    def set_offset(self, value: int) -> GeneratorResult[None]:
        """Skip *value* stream positions before the next emitted value."""
        if not 0 <= value <= U64_MAX:
            return Failure(ValueOutOfRange(name="offset", value=value))
        result = self._invoke("set_offset", lambda backend, h: backend.set_offset(h, value))
        if isinstance(result, Success):
            self._offset = value
        return result

    def set_stream(self, stream: StreamLike) -> GeneratorResult[None]:
        """Bind subsequent generation calls to *stream*.

        Values already emitted are unaffected.  The caller synchronises the
        stream before reading any buffer filled on it.
        """
        address = _stream_address(stream)
        result = self._invoke("set_stream", lambda backend, h: backend.set_stream(h, address))
        if isinstance(result, Success):
            self._stream = stream
        return result

    # ------------------------------------------------------------------ #
    # Access for distributions                                           #
    # ------------------------------------------------------------------ #

    def resource(self) -> Result[BoundHandle, HandleClosed]:
        if self._closed:
            return Failure(HandleClosed(algorithm=self._algorithm.value))
        return Success(BoundHandle(backend=self._backend, handle=self._handle))

    # ------------------------------------------------------------------ #
    # Release                                                            #
    # ------------------------------------------------------------------ #

    def close(self) -> Result[None, BackendError]:
        """Release the backend resource; a no-op once closed."""
        if self._closed:
            return Success(None)
        self._closed = True
        status = self._backend.destroy(self._handle)
        if is_success(status):
            _logger.debug("Released %s generator handle %d", self._algorithm.value, self._handle)
            return Success(None)
        error = BackendError(status=status, operation="destroy")
        _logger.warning(
            "Releasing %s generator handle %d failed: %s",
            self._algorithm.value,
            self._handle,
            error,
        )
        return Failure(error)

    def __enter__(self) -> Generator:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __del__(self) -> None:
        if not getattr(self, "_closed", True):
            self.close()

    # ---------------- read-only props --------------------------------- #

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    @property
    def default_seed(self) -> int:
        return self._algorithm.default_seed

    @property
    def seed(self) -> int:
        """Seed last applied to the backend."""
        return self._seed

    @property
    def offset(self) -> int:
        """Offset last applied to the backend (0 if never set)."""
        return self._offset

    @property
    def stream(self) -> StreamLike:
        return self._stream

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def config(self) -> EngineConfig:
        """Configuration that recreates this generator's starting point."""
        return EngineConfig(algorithm=self._algorithm, seed=self._seed, offset=self._offset)

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"handle={self._handle}"
        return (
            f"Generator({self._algorithm.value}, seed={self._seed}, "
            f"offset={self._offset}, {state})"
        )


# --------------------------------------------------------------------------- #
# Named constructors                                                          #
# --------------------------------------------------------------------------- #


def _new(
    algorithm: Algorithm, seed: int | None, offset: int, backend: RandBackend | None
) -> GeneratorResult[Generator]:
    validated: GeneratorResult[EngineConfig] = EngineConfig.create(
        algorithm=algorithm, seed=seed, offset=offset
    ).map_error(lambda error: InvalidEngineConfig(error=error))
    return validated.and_then(lambda config: Generator.create(config, backend))


def new_philox(
    seed: int | None = None, offset: int = 0, *, backend: RandBackend | None = None
) -> GeneratorResult[Generator]:
    """Philox4x32-10 generator; default seed ``0xDEADBEEFDEADBEEF``."""
    return _new(Algorithm.philox4x32_10, seed, offset, backend)


def new_xorwow(
    seed: int | None = None, offset: int = 0, *, backend: RandBackend | None = None
) -> GeneratorResult[Generator]:
    """XORWOW generator; default seed ``0xAAAAAAAAAAAAAAAA``."""
    return _new(Algorithm.xorwow, seed, offset, backend)


def new_mrg32k3a(
    seed: int | None = None, offset: int = 0, *, backend: RandBackend | None = None
) -> GeneratorResult[Generator]:
    """MRG32k3a generator; default seed ``12345``."""
    return _new(Algorithm.mrg32k3a, seed, offset, backend)
