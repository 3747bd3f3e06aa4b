import numpy as np
import pytest

from timelag import available_backends, config, lag_matrix, register_backend, unregister_backend
from timelag.backend import _BACKENDS, LagBackend, get_backend_function


def test_builtin_backends_are_registered():
    assert {"numpy", "numba", "jax"} <= set(available_backends())


def test_lookup_of_missing_backend_or_function():
    with pytest.raises(ValueError):
        get_backend_function("fortran", "lag_rows_core")
    with pytest.raises(ValueError):
        get_backend_function("numpy", "ols_fit_core")
    with pytest.raises(ValueError):
        LagBackend(backend="fortran")
    with pytest.raises(ValueError):
        unregister_backend("fortran")


def test_backend_functions_are_attributes():
    backend = LagBackend(backend="numpy")

    assert backend.lag_rows_core is get_backend_function("numpy", "lag_rows_core")
    with pytest.raises(AttributeError):
        backend.ols_fit_core


def test_backend_without_required_kernel_is_rejected():
    with pytest.raises(ValueError, match="lag_rows_core"):
        register_backend("incomplete", {"other_core": len})
    with pytest.raises(ValueError):
        register_backend("incomplete", {"lag_rows_core": "not callable"})
    assert "incomplete" not in available_backends()


def test_custom_backend_receives_degathered_rows():
    calls = []

    def lag_rows_core(series, lags, fill, pad, row_stride):
        calls.append((series.shape, lags, row_stride))
        return np.full((len(lags) * series.shape[0], row_stride), pad, dtype=series.dtype)

    register_backend("recording", {"lag_rows_core": lag_rows_core})
    try:
        lagged = lag_matrix([1.0, 2.0, 3.0], [2, 0], 0.0, out_row_len=4, pad=7.0, backend="recording")
    finally:
        unregister_backend("recording")

    assert calls == [((1, 3), (2, 0), 4)]
    assert lagged == [7.0] * 8
    assert "recording" not in available_backends()


def test_default_backend_is_read_at_call_time(monkeypatch):
    calls = []
    original = get_backend_function("numpy", "lag_rows_core")

    def spy(*args):
        calls.append(args[1])
        return original(*args)

    monkeypatch.setattr(config, "DEFAULT_BACKEND", "numpy")
    monkeypatch.setitem(_BACKENDS["numpy"], "lag_rows_core", spy)

    lag_matrix([1.0, 2.0], 1, 0.0)

    assert calls == [(0, 1)]
