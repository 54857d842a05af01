# tests/test_engine.py
"""
tests.test_engine
=================
Lifecycle and configuration tests for :mod:`gpurand.engine`, driven through
the recording host backend.

Test matrix
-----------
* Construction - default seeds, offset call skipping, failure paths.
* Configuration - one backend call per setter, range checks, streams.
* Release - exactly-once destroy, log-and-continue on release failure,
  closed-handle behaviour, context manager and garbage collection.
"""

from __future__ import annotations

import gc
import logging
from typing import Callable

import pytest

from gpurand import Algorithm, EngineConfig, Generator, RandStatus
from gpurand.backend import RandBackend
from gpurand.config import (
    MRG32K3A_DEFAULT_SEED,
    PHILOX4X32_DEFAULT_SEED,
    U64_MAX,
    XORWOW_DEFAULT_SEED,
)
from gpurand.engine import new_mrg32k3a, new_philox, new_xorwow
from gpurand.errors import (
    BackendError,
    GeneratorError,
    HandleClosed,
    InvalidEngineConfig,
    ValueOutOfRange,
)
from gpurand.result import Result
from tests.helpers import DEFAULT_SEED, RecordingBackend, expect_failure, expect_success


Constructor = Callable[..., Result[Generator, GeneratorError]]

_VARIANTS: tuple[tuple[Constructor, Algorithm, int], ...] = (
    (new_philox, Algorithm.philox4x32_10, PHILOX4X32_DEFAULT_SEED),
    (new_xorwow, Algorithm.xorwow, XORWOW_DEFAULT_SEED),
    (new_mrg32k3a, Algorithm.mrg32k3a, MRG32K3A_DEFAULT_SEED),
)


@pytest.fixture(params=_VARIANTS, ids=("philox", "xorwow", "mrg32k3a"))
def variant(request: pytest.FixtureRequest) -> tuple[Constructor, Algorithm, int]:
    param = request.param
    assert isinstance(param, tuple)
    return param


# --------------------------------------------------------------------------- #
# Construction                                                                #
# --------------------------------------------------------------------------- #


def test_default_seed_per_variant(
    variant: tuple[Constructor, Algorithm, int], backend: RecordingBackend
) -> None:
    make, algorithm, default_seed = variant
    with expect_success(make(backend=backend)) as gen:
        assert gen.algorithm is algorithm
        assert gen.seed == default_seed
        assert gen.default_seed == default_seed
        assert gen.offset == 0
        assert gen.stream is None

    assert backend.calls_to("create")[0].args == (algorithm,)
    assert backend.calls_to("set_seed")[0].args[1] == default_seed


def test_zero_offset_skips_offset_call(
    variant: tuple[Constructor, Algorithm, int], backend: RecordingBackend
) -> None:
    make, _, _ = variant
    with expect_success(make(DEFAULT_SEED, 0, backend=backend)):
        pass
    assert backend.names() == ["create", "set_seed", "destroy"]


def test_positive_offset_issues_one_offset_call(
    variant: tuple[Constructor, Algorithm, int], backend: RecordingBackend
) -> None:
    make, _, _ = variant
    with expect_success(make(DEFAULT_SEED, 4096, backend=backend)) as gen:
        assert gen.offset == 4096

    offset_calls = backend.calls_to("set_offset")
    assert len(offset_calls) == 1
    assert offset_calls[0].args[1] == 4096
    assert backend.names() == ["create", "set_seed", "set_offset", "destroy"]


def test_create_failure_carries_status_and_never_destroys(backend: RecordingBackend) -> None:
    backend.failures["create"] = RandStatus.ALLOCATION_FAILED

    error = expect_failure(new_philox(DEFAULT_SEED, backend=backend))

    assert isinstance(error, BackendError)
    assert error.operation == "create"
    assert error.error_code() == RandStatus.ALLOCATION_FAILED
    assert backend.names() == ["create"]
    assert backend.live_handles == frozenset()


def test_unknown_create_status_is_preserved(backend: RecordingBackend) -> None:
    backend.failures["create"] = 4242

    error = expect_failure(new_xorwow(backend=backend))

    assert isinstance(error, BackendError)
    assert error.error_code() == 4242
    assert "4242" in error.message


def test_seed_failure_releases_fresh_handle(backend: RecordingBackend) -> None:
    backend.failures["set_seed"] = RandStatus.OUT_OF_RANGE

    error = expect_failure(new_mrg32k3a(DEFAULT_SEED, 10, backend=backend))

    assert isinstance(error, BackendError)
    assert error.operation == "set_seed"
    assert backend.names() == ["create", "set_seed", "destroy"]
    assert backend.live_handles == frozenset()


def test_offset_failure_releases_fresh_handle(backend: RecordingBackend) -> None:
    backend.failures["set_offset"] = RandStatus.OUT_OF_RANGE

    error = expect_failure(new_philox(DEFAULT_SEED, 10, backend=backend))

    assert isinstance(error, BackendError)
    assert error.operation == "set_offset"
    assert backend.names() == ["create", "set_seed", "set_offset", "destroy"]


def test_invalid_config_never_reaches_backend(backend: RecordingBackend) -> None:
    error = expect_failure(new_philox(seed=-1, backend=backend))
    assert isinstance(error, InvalidEngineConfig)

    error = expect_failure(new_xorwow(seed=1, offset=U64_MAX + 1, backend=backend))
    assert isinstance(error, InvalidEngineConfig)

    assert backend.calls == []


def test_create_from_config(backend: RecordingBackend) -> None:
    config = expect_success(
        EngineConfig.create(algorithm=Algorithm.xorwow, seed=U64_MAX, offset=7)
    )
    with expect_success(Generator.create(config, backend)) as gen:
        assert gen.config == config


# --------------------------------------------------------------------------- #
# Configuration                                                               #
# --------------------------------------------------------------------------- #


def test_setters_issue_one_call_each(backend: RecordingBackend) -> None:
    with expect_success(new_philox(backend=backend)) as gen:
        backend.calls.clear()

        expect_success(gen.set_seed(99))
        expect_success(gen.set_offset(5))
        expect_success(gen.set_stream(1234))

        assert backend.names() == ["set_seed", "set_offset", "set_stream"]
        assert (gen.seed, gen.offset, gen.stream) == (99, 5, 1234)
        assert gen.config == EngineConfig(algorithm=Algorithm.philox4x32_10, seed=99, offset=5)


def test_failed_setter_keeps_previous_state(backend: RecordingBackend) -> None:
    with expect_success(new_philox(seed=1, backend=backend)) as gen:
        backend.failures["set_seed"] = RandStatus.PREEXISTING_FAILURE

        error = expect_failure(gen.set_seed(2))

        assert isinstance(error, BackendError)
        assert error.error_code() == RandStatus.PREEXISTING_FAILURE
        assert gen.seed == 1


@pytest.mark.parametrize("value", (-1, U64_MAX + 1))
def test_out_of_range_values_rejected_locally(value: int, backend: RecordingBackend) -> None:
    with expect_success(new_philox(backend=backend)) as gen:
        backend.calls.clear()

        seed_error = expect_failure(gen.set_seed(value))
        offset_error = expect_failure(gen.set_offset(value))

        assert seed_error == ValueOutOfRange(name="seed", value=value)
        assert offset_error == ValueOutOfRange(name="offset", value=value)
        assert backend.calls == []


class _FakeStream:
    def __init__(self, ptr: int) -> None:
        self._ptr = ptr

    @property
    def ptr(self) -> int:
        return self._ptr


def test_stream_objects_and_default_stream(backend: RecordingBackend) -> None:
    stream = _FakeStream(0xBEEF)
    with expect_success(new_xorwow(backend=backend)) as gen:
        expect_success(gen.set_stream(stream))
        assert gen.stream is stream

        expect_success(gen.set_stream(None))
        assert gen.stream is None

    addresses = [call.args[1] for call in backend.calls_to("set_stream")]
    assert addresses == [0xBEEF, 0]


def test_stream_failure_propagates(backend: RecordingBackend) -> None:
    with expect_success(new_xorwow(backend=backend)) as gen:
        backend.failures["set_stream"] = RandStatus.NOT_INITIALIZED
        error = expect_failure(gen.set_stream(7))
        assert isinstance(error, BackendError)
        assert error.operation == "set_stream"
        assert gen.stream is None


# --------------------------------------------------------------------------- #
# Release                                                                     #
# --------------------------------------------------------------------------- #


def test_close_releases_exactly_once(backend: RecordingBackend) -> None:
    gen = expect_success(new_philox(backend=backend))

    expect_success(gen.close())
    expect_success(gen.close())

    assert gen.closed
    assert len(backend.calls_to("destroy")) == 1


def test_release_failure_is_logged_and_handle_stays_closed(
    backend: RecordingBackend, caplog: pytest.LogCaptureFixture
) -> None:
    gen = expect_success(new_philox(backend=backend))
    backend.failures["destroy"] = RandStatus.INTERNAL_ERROR

    with caplog.at_level(logging.WARNING, logger="gpurand.engine"):
        error = expect_failure(gen.close())

    assert error.error_code() == RandStatus.INTERNAL_ERROR
    assert error.operation == "destroy"
    assert gen.closed
    assert "Releasing philox4x32_10 generator" in caplog.text
    expect_success(gen.close())
    assert len(backend.calls_to("destroy")) == 1


def test_closed_handle_refuses_work(backend: RecordingBackend) -> None:
    gen = expect_success(new_mrg32k3a(backend=backend))
    expect_success(gen.close())
    backend.calls.clear()

    assert isinstance(expect_failure(gen.set_seed(1)), HandleClosed)
    assert isinstance(expect_failure(gen.set_offset(1)), HandleClosed)
    assert isinstance(expect_failure(gen.set_stream(None)), HandleClosed)
    assert isinstance(expect_failure(gen.resource()), HandleClosed)
    assert backend.calls == []


def test_context_manager_closes_on_error(backend: RecordingBackend) -> None:
    with pytest.raises(KeyError):
        with expect_success(new_philox(backend=backend)):
            raise KeyError("boom")
    assert backend.names()[-1] == "destroy"


def test_garbage_collection_releases_handle(backend: RecordingBackend) -> None:
    gen = expect_success(new_xorwow(backend=backend))
    del gen
    gc.collect()

    assert len(backend.calls_to("destroy")) == 1
    assert backend.live_handles == frozenset()


def test_generators_are_independent(backend: RecordingBackend) -> None:
    first = expect_success(new_philox(seed=1, backend=backend))
    second = expect_success(new_philox(seed=2, backend=backend))
    handles = {call.args[0] for call in backend.calls_to("set_seed")}
    assert len(handles) == 2

    expect_success(first.close())
    assert not second.closed
    expect_success(second.set_seed(3))
    expect_success(second.close())


def test_default_backend_is_used_when_none_given(
    monkeypatch: pytest.MonkeyPatch, backend: RecordingBackend
) -> None:
    def _fake_default() -> RandBackend:
        return backend

    monkeypatch.setattr("gpurand.engine.default_backend", _fake_default)
    with expect_success(new_philox()):
        pass
    assert backend.names()[0] == "create"
