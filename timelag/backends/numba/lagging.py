import numpy as np
from numba import njit

from ...errors import InvalidConfiguration


@njit
def _lag_rows_core(series, lags, fill, pad, row_stride):
    """
    Build the lagged rows of a batch of series with numba.

    Parameters
    ----------
    series : ndarray, shape (S, L)
        One series per row (C-contiguous).
    lags : ndarray of int64
        Lag offsets, one group of ``S`` output rows per entry.
    fill : scalar
        Value written where a lag reaches before the first observation.
    pad : scalar
        Value written into the columns ``L..row_stride``.
    row_stride : int
        Width of every output row, at least ``L``.

    Returns
    -------
    ndarray, shape (len(lags) * S, row_stride)
    """
    n_series, length = series.shape
    n_lags = lags.shape[0]

    out = np.empty((n_lags * n_series, row_stride), dtype=series.dtype)

    for i in range(n_lags):
        lag = lags[i]
        shift = min(lag, length)
        for s in range(n_series):
            row = i * n_series + s
            for c in range(shift):
                out[row, c] = fill
            for c in range(shift, length):
                out[row, c] = series[s, c - lag]
            for c in range(length, row_stride):
                out[row, c] = pad

    return out


def lag_rows(series, lags, fill, pad, row_stride):
    """Adapter converting the lag tuple into the array the jitted kernel expects."""
    if series.dtype.kind == "O":
        raise InvalidConfiguration("The numba backend cannot lag object arrays, use backend='numpy'")
    lag_array = np.asarray(lags, dtype=np.int64).reshape(-1)
    return _lag_rows_core(series, lag_array, fill, pad, row_stride)
